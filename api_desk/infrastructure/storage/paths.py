"""
Data-root layout for the document store.

    <root>/
        collections/<id>.json
        environments.json

The root comes from an injected path provider (any zero-argument callable
returning a path), defaulting to `config.data_dir()`. It is resolved on every
call, and directories are created on demand.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from api_desk.errors import InvalidDocumentIdError, StorageIOError
from api_desk.utils import config

PathProvider = Callable[[], Path]

DOCUMENT_SUFFIX = ".json"
COLLECTIONS_DIRNAME = "collections"
ENVIRONMENTS_FILENAME = f"environments{DOCUMENT_SUFFIX}"


def ensure_dir(path: Path) -> Path:
    """Create `path` (and parents) if missing and return it."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageIOError(f"Failed to create directory {path}: {e}", e) from e
    return path


def validate_document_id(document_id: str) -> str:
    """
    Check that a collection id can be used as a file name as-is.

    Raises:
        InvalidDocumentIdError: Empty ids, `.`/`..`, or ids with path separators.
    """
    if (
        not document_id
        or document_id in (".", "..")
        or "/" in document_id
        or "\\" in document_id
        or "\x00" in document_id
    ):
        raise InvalidDocumentIdError(document_id)
    return document_id


class DataRoot:
    def __init__(self, provider: PathProvider | Path | str | None = None) -> None:
        if provider is None:
            self._provider: PathProvider = config.data_dir
        elif callable(provider):
            self._provider = provider
        else:
            fixed = Path(provider)
            self._provider = lambda: fixed

    def base(self) -> Path:
        try:
            root = Path(self._provider())
        except OSError as e:
            raise StorageIOError(f"Failed to resolve app data directory: {e}", e) from e
        return ensure_dir(root)

    def collections_dir(self) -> Path:
        return ensure_dir(self.base() / COLLECTIONS_DIRNAME)

    def collection_path(self, document_id: str) -> Path:
        validate_document_id(document_id)
        return self.collections_dir() / f"{document_id}{DOCUMENT_SUFFIX}"

    def environments_path(self) -> Path:
        return self.base() / ENVIRONMENTS_FILENAME
