"""Parse repository identifiers into host/owner/name triples."""

from __future__ import annotations

from urllib.parse import urlparse

from .exceptions import ParseError
from .models import RepoAddress

_URL_SCHEMES = ("https", "http", "ssh")


def parse_address(value: str) -> RepoAddress:
    """Parse an SSH, HTTPS or host/owner/name identifier.

    Accepted shapes::

        git@github.com:acme/widgets.git
        https://github.com/acme/widgets(.git)
        ssh://git@github.com/acme/widgets.git
        github.com/acme/widgets

    A trailing ``.git`` is dropped and the host is lowercased. Anything else
    raises :class:`ParseError`.
    """

    raw = value.strip()
    if not raw:
        raise ParseError(value, "empty identifier")
    if raw.startswith("git@"):
        host, sep, path = raw[len("git@") :].partition(":")
        if not sep:
            raise ParseError(value, "missing ':' after host")
    elif "://" in raw:
        parsed = urlparse(raw)
        if parsed.scheme not in _URL_SCHEMES:
            raise ParseError(value, f"unsupported scheme {parsed.scheme!r}")
        host = parsed.hostname or ""
        path = parsed.path
    else:
        host, _, path = raw.partition("/")
    return _build(value, host, path)


def _build(original: str, host: str, path: str) -> RepoAddress:
    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    parts = path.split("/")
    if not host or len(parts) != 2:
        raise ParseError(original, "expected <host>/<owner>/<name>")
    owner, name = parts
    try:
        return RepoAddress(host=host.lower(), owner=owner, name=name)
    except ParseError as exc:
        raise ParseError(original, "invalid path segment") from exc


__all__ = ["parse_address"]
