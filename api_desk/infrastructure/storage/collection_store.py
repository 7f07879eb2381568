"""
Collection repository: one JSON document per collection under
`<data root>/collections/<id>.json`.

Collections are saved whole (the caller sends the full item tree each time)
and the last writer wins. There is no in-memory cache; every call goes to disk.
"""

from __future__ import annotations

from pathlib import Path

from api_desk.domains.collection_tree import find_duplicate_ids
from api_desk.domains.models import Collection, CollectionMeta
from api_desk.errors import ApiDeskError, NotFoundError, StorageIOError
from api_desk.infrastructure.storage.documents import read_document, write_document
from api_desk.infrastructure.storage.paths import DOCUMENT_SUFFIX, DataRoot
from api_desk.utils.logger import get_logger

logger = get_logger()


class CollectionStore:
    def __init__(self, root: DataRoot | None = None) -> None:
        self._root = root or DataRoot()

    def list(self) -> list[CollectionMeta]:
        """
        Metadata for every readable collection, most recently updated first.

        Files that cannot be read or parsed are skipped (and logged) so one
        bad document does not hide the others. Ties keep file-name order.
        """
        directory = self._root.collections_dir()
        try:
            paths = sorted(p for p in directory.iterdir() if p.suffix == DOCUMENT_SUFFIX and p.is_file())
        except OSError as e:
            raise StorageIOError(f"Failed to list collections directory {directory}: {e}", e) from e

        metas: list[CollectionMeta] = []
        for path in paths:
            try:
                collection = read_document(path, Collection)
            except ApiDeskError as e:
                logger.warning("Skipping unreadable collection %s: %s", path.name, e)
                continue
            metas.append(CollectionMeta.from_collection(collection))

        metas.sort(key=lambda m: m.updated_at, reverse=True)
        return metas

    def get(self, collection_id: str) -> Collection:
        """
        Load one collection.

        Raises:
            NotFoundError: No document for this id.
            CorruptDocumentError: The document exists but does not parse.
        """
        path = self._root.collection_path(collection_id)
        if not path.is_file():
            raise NotFoundError(collection_id)
        return read_document(path, Collection)

    def exists(self, collection_id: str) -> bool:
        return self._root.collection_path(collection_id).is_file()

    def save(self, collection: Collection) -> None:
        """Create or overwrite the document for `collection.id`."""
        path = self._root.collection_path(collection.id)
        dupes = find_duplicate_ids(collection.items)
        if dupes:
            logger.warning(
                "Collection %s has items sharing ids %s; saving as-is",
                collection.id,
                ", ".join(dupes),
            )
        write_document(path, collection)

    def delete(self, collection_id: str) -> None:
        """Remove the document; deleting a missing collection is not an error."""
        path = self._root.collection_path(collection_id)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageIOError(f"Failed to delete collection {path}: {e}", e) from e

    def export(self, collection_id: str, destination: Path | str) -> None:
        """
        Write the full collection document to an arbitrary path.

        Raises:
            NotFoundError: No document for this id.
        """
        collection = self.get(collection_id)
        write_document(Path(destination), collection)

    def import_from(self, source: Path | str) -> Collection:
        """
        Read a collection document from `source` and save it under its own id.

        An existing collection with the same id is replaced in full.

        Raises:
            StorageIOError: `source` cannot be read.
            CorruptDocumentError: `source` is not a valid collection document.
        """
        collection = read_document(Path(source), Collection)
        if self.exists(collection.id):
            logger.info("Import of %s replaces existing collection %s", source, collection.id)
        self.save(collection)
        return collection
