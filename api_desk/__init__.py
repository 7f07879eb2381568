"""api-desk: request forwarding and local collection/environment storage for a desktop API client."""

__version__ = "0.1.0"
