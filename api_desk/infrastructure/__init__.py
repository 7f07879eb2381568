"""Infrastructure layer: outbound HTTP and on-disk document storage."""
