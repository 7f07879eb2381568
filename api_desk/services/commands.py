"""
Command boundary between a frontend and the core.

`CommandService` exposes the forwarder and the two stores as plain methods.
`get_command_registry` maps the frontend's command names to callables taking
the frontend's keyword arguments, and `execute_command` runs one of them and
wraps the outcome in a JSON-ready envelope:

    {"success": true, "data": ...}
    {"success": false, "message": ..., "error": ..., "error_type": ...}
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from api_desk.domains.curl_parser import parse_curl
from api_desk.domains.models import (
    Collection,
    CollectionMeta,
    EnvironmentState,
    ProxyResponse,
    RequestPayload,
)
from api_desk.domains.variables import environment_variables, resolve_request
from api_desk.errors import ApiDeskError
from api_desk.infrastructure.http.request_forwarder import RequestForwarder
from api_desk.infrastructure.storage.collection_store import CollectionStore
from api_desk.infrastructure.storage.environment_store import EnvironmentStore
from api_desk.infrastructure.storage.paths import DataRoot, PathProvider
from api_desk.utils.logger import get_logger

logger = get_logger()


class CommandService:
    def __init__(
        self,
        forwarder: RequestForwarder | None = None,
        collections: CollectionStore | None = None,
        environments: EnvironmentStore | None = None,
    ) -> None:
        self.forwarder = forwarder or RequestForwarder()
        self.collections = collections or CollectionStore()
        self.environments = environments or EnvironmentStore()

    @classmethod
    def for_data_root(
        cls,
        provider: PathProvider | Path | str | None = None,
        forwarder: RequestForwarder | None = None,
    ) -> CommandService:
        """Service whose stores share one data root."""
        root = DataRoot(provider)
        return cls(forwarder, CollectionStore(root), EnvironmentStore(root))

    # --- Forwarding ---

    def forward_request(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> ProxyResponse:
        return self.forwarder.forward(url, method, headers=headers, body=body)

    def send_request(self, request: RequestPayload) -> dict[str, Any]:
        """
        Resolve `{{vars}}` from the active environment, drop disabled headers,
        and forward the result.

        Returns:
            {"response": ProxyResponse, "resolved": RequestPayload, "unresolved": [names]}
        """
        variables = environment_variables(self.environments.load().active_environment())
        resolved, unresolved = resolve_request(request, variables)
        if unresolved:
            logger.info("Sending %s with unresolved variables: %s", resolved.url, ", ".join(unresolved))
        response = self.forward_request(
            resolved.url,
            resolved.method,
            headers=resolved.enabled_headers(),
            body=resolved.body,
        )
        return {"response": response, "resolved": resolved, "unresolved": unresolved}

    # --- Collections ---

    def list_collections(self) -> list[CollectionMeta]:
        return self.collections.list()

    def get_collection(self, collection_id: str) -> Collection:
        return self.collections.get(collection_id)

    def save_collection(self, collection: Collection) -> None:
        self.collections.save(collection)

    def delete_collection(self, collection_id: str) -> None:
        self.collections.delete(collection_id)

    def export_collection(self, collection_id: str, path: str) -> None:
        self.collections.export(collection_id, path)

    def import_collection(self, path: str) -> Collection:
        return self.collections.import_from(path)

    # --- Environments ---

    def load_environments(self) -> EnvironmentState:
        return self.environments.load()

    def save_environments(self, state: EnvironmentState) -> None:
        self.environments.save(state)

    def export_environments(self, path: str) -> None:
        self.environments.export(path)

    def import_environments(self, path: str) -> EnvironmentState:
        return self.environments.import_from(path)


def get_command_registry(service: CommandService) -> dict[str, Callable[..., Any]]:
    """Map command name -> callable taking the frontend's keyword arguments."""
    return {
        "proxy_request": lambda url, method, headers=None, body=None: service.forward_request(
            url, method, headers=headers, body=body
        ),
        "send_request": lambda request: service.send_request(RequestPayload.model_validate(request)),
        "parse_curl": lambda command: parse_curl(command),
        "list_collections": lambda: service.list_collections(),
        "get_collection": lambda id: service.get_collection(id),
        "save_collection": lambda collection: service.save_collection(Collection.model_validate(collection)),
        "delete_collection": lambda id: service.delete_collection(id),
        "export_collection": lambda id, path: service.export_collection(id, path),
        "import_collection": lambda path: service.import_collection(path),
        "load_environments": lambda: service.load_environments(),
        "save_environments": lambda state: service.save_environments(EnvironmentState.model_validate(state)),
        "export_environments": lambda path: service.export_environments(path),
        "import_environments": lambda path: service.import_environments(path),
    }


def to_jsonable(value: Any) -> Any:
    """Pydantic models to camelCase dicts, dataclasses to dicts, recursively."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if hasattr(value, "__dataclass_fields__"):
        return {name: to_jsonable(getattr(value, name)) for name in value.__dataclass_fields__}
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def _failure(message: str, error_type: str) -> dict[str, Any]:
    return {"success": False, "message": message, "error": message, "error_type": error_type}


def execute_command(
    name: str,
    args: Mapping[str, Any] | None,
    service: CommandService,
) -> dict[str, Any]:
    """
    Run command `name` with keyword `args` and wrap the outcome.

    ApiDeskError and bad arguments become failure envelopes. Anything else is a
    bug: it is logged with a traceback and reported as UnexpectedError.
    """
    registry = get_command_registry(service)
    handler = registry.get(name)
    if handler is None:
        return _failure(f"Unknown command: {name}", "UnknownCommand")

    kwargs = dict(args or {})
    try:
        inspect.signature(handler).bind(**kwargs)
    except TypeError as e:
        return _failure(f"Invalid arguments for {name}: {e}", "InvalidArguments")

    try:
        result = handler(**kwargs)
    except ApiDeskError as e:
        return _failure(str(e), e.kind)
    except ValidationError as e:
        return _failure(f"Invalid arguments for {name}: {e}", "InvalidArguments")
    except Exception as e:
        logger.exception("Unexpected error running %s: %s", name, e)
        return _failure(f"Unexpected error: {e}", "UnexpectedError")

    return {"success": True, "data": to_jsonable(result)}
