"""
Tests for {{variable}} substitution.
"""

from __future__ import annotations

from api_desk.domains.models import EnvironmentVariable, Header, RequestPayload
from api_desk.domains.variables import environment_variables, resolve_request, substitute_variables
from tests.conftest import make_environment


def test_substitute_known_and_unknown() -> None:
    res = substitute_variables("{{base}}/users/{{id}}?t={{token}}&again={{id}}", {"base": "https://api.test", "token": "x"})

    assert res.result == "https://api.test/users/{{id}}?t=x&again={{id}}"
    assert res.unresolved == ["id"]


def test_substitute_ignores_non_word_placeholders() -> None:
    res = substitute_variables("{{ spaced }} {{dash-name}} {{ok}}", {"ok": "1", "spaced": "no"})

    assert res.result == "{{ spaced }} {{dash-name}} 1"
    assert res.unresolved == []


def test_environment_variables_only_enabled() -> None:
    env = make_environment("dev", host="a", port="80")
    env.variables.append(EnvironmentVariable(key="secret", value="s", enabled=False))
    env.variables.append(EnvironmentVariable(key="host", value="b"))

    assert environment_variables(env) == {"host": "b", "port": "80"}
    assert environment_variables(None) == {}


def test_resolve_request_drops_disabled_headers() -> None:
    payload = RequestPayload(
        url="{{host}}/items",
        method="post",
        headers=[
            Header(key="Authorization", value="Bearer {{token}}"),
            Header(key="X-Off", value="{{never}}", enabled=False),
        ],
        body='{"owner": "{{user}}"}',
    )

    resolved, unresolved = resolve_request(payload, {"host": "https://api.test", "token": "abc"})

    assert resolved.url == "https://api.test/items"
    assert resolved.method == "post"
    assert resolved.enabled_headers() == {"Authorization": "Bearer abc"}
    assert resolved.body == '{"owner": "{{user}}"}'
    assert unresolved == ["user"]
    assert payload.headers[1].enabled is False
