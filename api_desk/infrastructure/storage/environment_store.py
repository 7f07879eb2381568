"""
Environment repository: a single `environments.json` document holding every
environment plus the active environment id.

A missing file is the normal first-run state and loads as an empty
EnvironmentState.
"""

from __future__ import annotations

from pathlib import Path

from api_desk.domains.models import EnvironmentState
from api_desk.infrastructure.storage.documents import read_document, write_document
from api_desk.infrastructure.storage.paths import DataRoot
from api_desk.utils.logger import get_logger

logger = get_logger()


class EnvironmentStore:
    def __init__(self, root: DataRoot | None = None) -> None:
        self._root = root or DataRoot()

    def load(self) -> EnvironmentState:
        path = self._root.environments_path()
        if not path.is_file():
            return EnvironmentState()
        return read_document(path, EnvironmentState)

    def save(self, state: EnvironmentState) -> None:
        write_document(self._root.environments_path(), state)

    def export(self, destination: Path | str) -> None:
        write_document(Path(destination), self.load())

    def import_from(self, source: Path | str) -> EnvironmentState:
        """
        Replace the stored state with the document at `source` and return it.

        No merging: environments missing from the import are gone afterwards.

        Raises:
            StorageIOError: `source` cannot be read.
            CorruptDocumentError: `source` is not a valid environments document.
        """
        state = read_document(Path(source), EnvironmentState)
        self.save(state)
        logger.info("Imported %d environment(s) from %s", len(state.environments), source)
        return state
