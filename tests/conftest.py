"""
Shared fixtures: a throwaway data root and small document builders.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from api_desk.domains.models import (
    Collection,
    Environment,
    EnvironmentVariable,
    Folder,
    Header,
    RequestPayload,
    SavedRequest,
)
from api_desk.infrastructure.storage.paths import DataRoot


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "app-data"


@pytest.fixture
def data_root(data_dir: Path) -> DataRoot:
    return DataRoot(lambda: data_dir)


def make_request(item_id: str = "req-1", url: str = "https://example.test/users", **kwargs: Any) -> SavedRequest:
    return SavedRequest(
        id=item_id,
        name=kwargs.pop("name", "List users"),
        request=RequestPayload(
            url=url,
            method=kwargs.pop("method", "GET"),
            headers=kwargs.pop("headers", [Header(key="Accept", value="application/json")]),
            body=kwargs.pop("body", None),
        ),
        created_at=kwargs.pop("created_at", 1_700_000_000_000),
        updated_at=kwargs.pop("updated_at", 1_700_000_000_000),
    )


def make_collection(collection_id: str = "col-1", updated_at: int = 1_700_000_000_000, **kwargs: Any) -> Collection:
    items = kwargs.pop(
        "items",
        [
            Folder(
                id="folder-1",
                name="Users",
                expanded=True,
                items=[
                    make_request("req-1"),
                    make_request(
                        "req-2",
                        name="Create user",
                        method="POST",
                        body='{"name": "Ada"}',
                        headers=[
                            Header(key="Content-Type", value="application/json"),
                            Header(key="X-Debug", value="1", enabled=False),
                        ],
                    ),
                    Folder(id="folder-2", name="Admin", items=[make_request("req-3", url="https://example.test/admin")]),
                ],
            ),
            make_request("req-4", url="https://example.test/health", name="Health"),
        ],
    )
    return Collection(
        id=collection_id,
        name=kwargs.pop("name", f"Collection {collection_id}"),
        description=kwargs.pop("description", "Demo API"),
        created_at=kwargs.pop("created_at", 1_600_000_000_000),
        updated_at=updated_at,
        items=items,
    )


def make_environment(env_id: str = "env-1", **variables: str) -> Environment:
    return Environment(
        id=env_id,
        name=f"Env {env_id}",
        variables=[EnvironmentVariable(key=k, value=v) for k, v in variables.items()],
        created_at=1_700_000_000_000,
        updated_at=1_700_000_000_000,
    )


def make_response(
    status: int = 200,
    headers: dict[str, str] | None = None,
    content: bytes = b"",
) -> MagicMock:
    """Stand-in for requests.Response with just what the forwarder reads."""
    response = MagicMock()
    response.status_code = status
    response.headers = headers or {}
    response.content = content
    return response


@pytest.fixture
def session() -> MagicMock:
    """Fake requests.Session; configure `session.request.return_value` per test."""
    s = MagicMock()
    s.request.return_value = make_response()
    return s
