"""
`{{name}}` substitution of environment variables into saved requests.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from api_desk.domains.models import Environment, Header, RequestPayload

_VAR_PATTERN = re.compile(r"\{\{(\w+)\}\}")


@dataclass
class SubstitutionResult:
    result: str
    unresolved: list[str] = field(default_factory=list)


def substitute_variables(text: str, variables: dict[str, str]) -> SubstitutionResult:
    """
    Replace every `{{name}}` whose name is in `variables`.

    Unknown placeholders stay in the text untouched and are reported once
    each, in the order they first appear.
    """
    unresolved: list[str] = []

    def _replace(m: re.Match[str]) -> str:
        name = m.group(1)
        if name in variables:
            return variables[name]
        if name not in unresolved:
            unresolved.append(name)
        return m.group(0)

    return SubstitutionResult(_VAR_PATTERN.sub(_replace, text), unresolved)


def environment_variables(environment: Environment | None) -> dict[str, str]:
    """Enabled variables of `environment` as a dict; a repeated key keeps its last value."""
    if environment is None:
        return {}
    return {v.key: v.value for v in environment.variables if v.enabled}


def resolve_request(payload: RequestPayload, variables: dict[str, str]) -> tuple[RequestPayload, list[str]]:
    """
    Apply substitution to the url, the enabled headers and the body.

    Disabled headers are dropped from the result.

    Returns:
        The resolved payload and the unresolved variable names across all parts.
    """
    unresolved: list[str] = []

    def _sub(text: str) -> str:
        res = substitute_variables(text, variables)
        for name in res.unresolved:
            if name not in unresolved:
                unresolved.append(name)
        return res.result

    url = _sub(payload.url)
    headers = [
        Header(key=_sub(h.key), value=_sub(h.value), enabled=True)
        for h in payload.headers
        if h.enabled
    ]
    body = _sub(payload.body) if payload.body is not None else None
    resolved = RequestPayload(url=url, method=payload.method, headers=headers, body=body)
    return resolved, unresolved
