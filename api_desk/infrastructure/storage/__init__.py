"""Local JSON document store for collections and environments."""

from api_desk.infrastructure.storage.collection_store import CollectionStore
from api_desk.infrastructure.storage.environment_store import EnvironmentStore
from api_desk.infrastructure.storage.paths import DataRoot

__all__ = ["CollectionStore", "DataRoot", "EnvironmentStore"]
