"""
Read and write single JSON documents.

Reads validate straight into a pydantic model. Writes go to a temporary file
next to the target and are renamed into place, so a crash mid-write leaves the
previous version intact instead of a truncated file.
"""

from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from api_desk.errors import CorruptDocumentError, SerializationFailure, StorageIOError

M = TypeVar("M", bound=BaseModel)


def read_text(path: Path) -> str:
    """
    Read `path` as UTF-8.

    Raises:
        StorageIOError: The file cannot be read.
        CorruptDocumentError: The bytes are not UTF-8.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise CorruptDocumentError(path, f"not valid UTF-8 ({e})", e) from e
    except OSError as e:
        raise StorageIOError(f"Failed to read {path}: {e}", e) from e


def parse_document(raw: str, model: type[M], source: Path | str) -> M:
    """
    Validate JSON text into `model`.

    Raises:
        CorruptDocumentError: Invalid JSON or a schema mismatch.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptDocumentError(source, f"invalid JSON ({e})", e) from e
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        first = errors[0] if errors else {}
        where = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
        detail = f"{where}: {first.get('msg', 'invalid document')}"
        if len(errors) > 1:
            detail += f" (and {len(errors) - 1} more)"
        raise CorruptDocumentError(source, detail, e) from e


def read_document(path: Path, model: type[M]) -> M:
    return parse_document(read_text(path), model, path)


def serialize_document(document: BaseModel) -> str:
    try:
        data = document.model_dump(mode="json", by_alias=True)
        return json.dumps(data, ensure_ascii=False, indent=2) + "\n"
    except (TypeError, ValueError) as e:
        raise SerializationFailure(f"Failed to serialize {type(document).__name__}: {e}", e) from e


def _target_mode(path: Path) -> int:
    # Existing file's mode, else 0o666 minus the umask.
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_text_atomic(path: Path, text: str) -> None:
    """Write `text` to `path` via a sibling temp file and os.replace."""
    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise StorageIOError(f"Failed to write {path}: {e}", e) from e
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)


def write_document(path: Path, document: BaseModel) -> None:
    write_text_atomic(path, serialize_document(document))
