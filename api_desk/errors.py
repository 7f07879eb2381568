"""
Error taxonomy shared by the request forwarder, the document store and the
command layer. Every failure the core reports derives from ApiDeskError and
carries a message fit to show to a user as-is.
"""

from __future__ import annotations

from pathlib import Path


class ApiDeskError(RuntimeError):
    """Base class for failures surfaced to the command boundary."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original

    @property
    def kind(self) -> str:
        return type(self).__name__


class UnsupportedMethodError(ApiDeskError):
    """Raised before any network I/O when the HTTP method is not forwardable."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Unsupported HTTP method: {method}")
        self.method = method


class TransportError(ApiDeskError):
    """DNS, connection, TLS or timeout failure while forwarding a request."""


class NotFoundError(ApiDeskError):
    def __init__(self, document_id: str) -> None:
        super().__init__(f"Collection not found: {document_id}")
        self.document_id = document_id


class InvalidDocumentIdError(ApiDeskError):
    """Collection ids become file names; this one cannot."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Invalid collection id: {document_id!r}")
        self.document_id = document_id


class CorruptDocumentError(ApiDeskError):
    """A document exists but is not valid JSON or does not match its schema."""

    def __init__(self, path: Path | str, detail: str, original: Exception | None = None) -> None:
        super().__init__(f"Failed to parse {path}: {detail}", original)
        self.path = Path(path)


class StorageIOError(ApiDeskError):
    """Directory creation, read, write or delete failed at the OS level."""


class SerializationFailure(ApiDeskError):
    """A document could not be turned into JSON text."""
