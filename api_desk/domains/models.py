"""
Document and envelope models for api-desk.

Field names on disk and across the command boundary are camelCase
(`createdAt`, `activeEnvironmentId`, ...); Python code uses the snake_case
attributes. Unknown fields are ignored on read so older builds can open files
written by newer ones.
"""

from __future__ import annotations

import time
import uuid
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


HTTP_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")


def new_id() -> str:
    """Fresh identifier for collections, folders, requests and environments."""
    return str(uuid.uuid4())


def now_ms() -> int:
    """Current time in milliseconds since the epoch (the timestamp unit of every document)."""
    return int(time.time() * 1000)


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True)


class Header(_Model):
    key: str
    value: str
    enabled: bool = True


class RequestPayload(_Model):
    url: str
    method: str
    headers: list[Header] = Field(default_factory=list)
    body: str | None = None

    def enabled_headers(self) -> dict[str, str]:
        """Enabled headers as an ordered mapping; a repeated key keeps its last value."""
        return {h.key: h.value for h in self.headers if h.enabled}


class Folder(_Model):
    type: Literal["folder"] = "folder"
    id: str
    name: str
    items: list[CollectionItem] = Field(default_factory=list)
    expanded: bool = False


class SavedRequest(_Model):
    type: Literal["request"] = "request"
    id: str
    name: str
    request: RequestPayload
    created_at: int
    updated_at: int


CollectionItem = Annotated[Union[Folder, SavedRequest], Field(discriminator="type")]

Folder.model_rebuild()


class Collection(_Model):
    id: str
    name: str
    description: str | None = None
    created_at: int
    updated_at: int
    items: list[CollectionItem] = Field(default_factory=list)


class CollectionMeta(_Model):
    """Listing projection of a Collection (no item tree)."""

    id: str
    name: str
    description: str | None = None
    updated_at: int

    @classmethod
    def from_collection(cls, collection: Collection) -> CollectionMeta:
        return cls(
            id=collection.id,
            name=collection.name,
            description=collection.description,
            updated_at=collection.updated_at,
        )


class EnvironmentVariable(_Model):
    key: str
    value: str
    enabled: bool = True


class Environment(_Model):
    id: str
    name: str
    variables: list[EnvironmentVariable] = Field(default_factory=list)
    created_at: int
    updated_at: int


class EnvironmentState(_Model):
    """
    The single environments document.

    `active_environment_id` should name an entry of `environments`; the store
    does not check it, and `active_environment()` simply returns None when the
    reference dangles.
    """

    environments: list[Environment] = Field(default_factory=list)
    active_environment_id: str | None = None

    def active_environment(self) -> Environment | None:
        if self.active_environment_id is None:
            return None
        for env in self.environments:
            if env.id == self.active_environment_id:
                return env
        return None


class ProxyResponse(_Model):
    status: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""
