"""
Turn a pasted cURL command into a RequestPayload.

Only the flags that describe the request itself are understood (method, url,
headers, data). Transport tweaks such as --compressed or -k are ignored; any
other flag is ignored with a warning so the user knows something was dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from api_desk.domains.models import HTTP_METHODS, Header, RequestPayload

DATA_FLAGS = frozenset({"-d", "--data", "--data-raw", "--data-binary", "--data-urlencode", "--data-ascii"})
SILENT_FLAGS = frozenset({"--compressed", "-k", "--insecure"})
VALUE_LABELS = {
    "-X": "method",
    "--request": "method",
    "-H": "header",
    "--header": "header",
    "--url": "url",
    **{flag: "data" for flag in DATA_FLAGS},
}
_DQUOTE_ESCAPES = frozenset({"\"", "\\", "$", "`"})


@dataclass
class CurlParseResult:
    payload: RequestPayload | None
    warnings: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


def _tokenize(command: str) -> list[str]:
    """
    Split `command` into words the way a POSIX shell would, but leniently.

    Whitespace separates words, quotes group (`''` is an empty word), and a
    backslash escapes the next character outside single quotes. An
    unterminated quote runs to the end of the input instead of failing.
    """
    # Join shell line continuations before splitting.
    text = command.replace("\\\r\n", " ").replace("\\\n", " ")
    tokens: list[str] = []
    word: list[str] = []
    in_word = False
    quote: str | None = None

    i = 0
    while i < len(text):
        char = text[i]
        i += 1
        if quote == "'":
            if char == "'":
                quote = None
            else:
                word.append(char)
        elif char == "\\":
            if i < len(text):
                escaped = text[i]
                i += 1
                if quote == '"' and escaped not in _DQUOTE_ESCAPES:
                    word.append(char)
                word.append(escaped)
            in_word = True
        elif quote == '"':
            if char == '"':
                quote = None
            else:
                word.append(char)
        elif char in ("'", '"'):
            quote = char
            in_word = True
        elif char.isspace():
            if in_word:
                tokens.append("".join(word))
                word = []
                in_word = False
        else:
            word.append(char)
            in_word = True

    if in_word:
        tokens.append("".join(word))
    return tokens


def _method(value: str) -> str | None:
    upper = value.upper()
    return upper if upper in HTTP_METHODS else None


def _header(value: str) -> Header | None:
    key, sep, rest = value.partition(":")
    key = key.strip()
    if not sep or not key:
        return None
    return Header(key=key, value=rest.strip(), enabled=True)


def parse_curl(command: str) -> CurlParseResult:
    """
    Parse `command` into a request.

    Returns:
        CurlParseResult with the payload, or with `error` set (and no payload)
        when there is no URL, the method is unsupported, or the text is empty. `warnings` lists anything that was skipped.
    """
    warnings: list[str] = []
    text = (command or "").strip()
    if not text:
        return CurlParseResult(None, warnings, "Paste a cURL command to import.")

    tokens = _tokenize(text)
    if tokens and tokens[0] == "curl":
        tokens = tokens[1:]
    if not tokens:
        return CurlParseResult(None, warnings, "Paste a cURL command to import.")

    url: str | None = None
    method: str | None = None
    headers: list[Header] = []
    body_parts: list[str] = []

    i = 0
    while i < len(tokens):
        token = tokens[i]
        value = tokens[i + 1] if i + 1 < len(tokens) else None

        if token in VALUE_LABELS:
            if not value:
                warnings.append(f"Missing value for {VALUE_LABELS[token]}.")
                i += 1
                continue
            if token in ("-X", "--request"):
                method = _method(value)
                if method is None:
                    return CurlParseResult(None, warnings, f"Unsupported HTTP method: {value}")
            elif token in ("-H", "--header"):
                header = _header(value)
                if header is None:
                    warnings.append(f"Invalid header format: {value}")
                else:
                    headers.append(header)
            elif token == "--url":
                url = value
            else:
                body_parts.append(value)
            i += 2
            continue

        if token.startswith("--url="):
            url = token[len("--url="):]
        elif token.startswith("-H") and len(token) > 2:
            header = _header(token[2:])
            if header is None:
                warnings.append(f"Invalid header format: {token[2:]}")
            else:
                headers.append(header)
        elif token.startswith("-X") and len(token) > 2:
            method = _method(token[2:])
            if method is None:
                return CurlParseResult(None, warnings, f"Unsupported HTTP method: {token[2:]}")
        elif token in ("-I", "--head"):
            method = "HEAD"
        elif token in ("-G", "--get"):
            method = "GET"
        elif token.startswith(("http://", "https://")):
            url = token
        elif token in SILENT_FLAGS:
            pass
        elif token.startswith("-"):
            warnings.append(f"Ignored flag: {token}")
        i += 1

    if not url:
        return CurlParseResult(None, warnings, "No URL found in cURL command.")

    if method is None:
        method = "POST" if body_parts else "GET"

    body: str | None = None
    if body_parts:
        if len(body_parts) > 1:
            warnings.append("Multiple data segments detected; they were combined.")
        body = "&".join(body_parts)

    return CurlParseResult(RequestPayload(url=url, method=method, headers=headers, body=body), warnings)
