"""URL parsing for incoming request targets.

Splits a request target into the three pieces attached to every
request before dispatch: ``pathname``, raw ``query`` and ``search``.
"""

from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass(frozen=True, slots=True)
class ParsedURL:
    """A request target cut into path and query parts.

    ``query`` is the raw text after the first ``?`` and ``search`` is the
    same text with the ``?`` kept. Both are ``None`` when the target has
    no query string at all.
    """

    href: str
    pathname: str
    query: str | None = None
    search: str | None = None


def parse_url(url: str) -> ParsedURL:
    """Parse a request target such as ``/users/42?page=2``.

    Origin-form targets (starting with ``/``) are cut by hand so that a
    leading ``//`` stays part of the path. Anything else goes through
    ``urlsplit`` and only its path and query are kept. A fragment is
    always discarded.
    """
    if url.startswith("/"):
        target = url.split("#", 1)[0]
        pathname, has_query, query = target.partition("?")
    else:
        parts = urlsplit(url)
        pathname = parts.path or "/"
        query = parts.query
        has_query = "?" if "?" in url.split("#", 1)[0] else ""

    if not has_query:
        return ParsedURL(href=url, pathname=pathname)

    return ParsedURL(href=url, pathname=pathname, query=query, search=f"?{query}")
