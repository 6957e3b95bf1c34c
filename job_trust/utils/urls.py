"""URL canonicalization used to deduplicate shadow job postings."""

from urllib.parse import urlsplit, urlunsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}


def canonicalize_url(url: str | None) -> str:
    """Return the canonical form of a job URL, or "" for blank input.

    Scheme and host are lowercased, default ports and the fragment are dropped,
    and a trailing slash is stripped from non-root paths. The path keeps its
    case and the query string is kept verbatim since job boards often put the
    posting key there.
    """
    if not url:
        return ""
    url = url.strip()
    if not url:
        return ""

    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()

    try:
        port = parts.port
    except ValueError:
        port = None
    netloc = host
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        netloc = f"{host}:{port}"
    if parts.username:
        userinfo = parts.username
        if parts.password:
            userinfo += f":{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    path = parts.path
    if netloc and not path:
        path = "/"
    if len(path) > 1 and path.endswith("/"):
        path = path.rstrip("/") or "/"

    if not scheme and not netloc:
        # Not an absolute URL; only whitespace and trailing slash rules apply
        return urlunsplit(("", "", path, parts.query, ""))

    return urlunsplit((scheme, netloc, path, parts.query, ""))
