"""Rewriting of relative links found on pages served by frontend proxies.

Proxies often mount each wiki under a path of their own (e.g.
``https://breezewiki.com/starwars/``) or identify it by query parameters
(e.g. ``?lang=de``). Relative links scraped from such pages lose that
context; the fixer built here puts it back, using the page the link was
found on.
"""

import re
from collections.abc import Callable
from urllib.parse import parse_qsl, urlsplit

from .catalog import Catalog, extract_hostname
from .records import FrontendProxy


LinkFixer = Callable[[str, str], str]

# Name paths with more parts than "https://host/" mount wikis under a path
MOUNT_DEPTH = 4


def query_keys(name_path: str) -> tuple[str, ...]:
    """Return the query parameter names of a name path, in order."""
    keys: list[str] = []
    for key, _ in parse_qsl(urlsplit(name_path).query, keep_blank_values=True):
        if key not in keys:
            keys.append(key)
    return tuple(keys)


def _query_params(url: str) -> list[str]:
    """Return the raw ``key=value`` parts of a URL's query string."""
    return [part for part in urlsplit(url).query.split("&") if part]


def _mount_prefix(pagelink: str, depth: int) -> str:
    """Extract the mount point prefix from the page a link was found on.

    Returns an empty string when the page link is too short to carry one.
    """
    segments = [segment for segment in pagelink.split("/")[3:depth - 1] if segment]
    return "/" + "/".join(segments) if segments else ""


def _forward_query(href: str, pagelink: str, keys: tuple[str, ...]) -> str:
    """Append query parameters named in ``keys`` from ``pagelink`` to ``href``."""
    href, hash_sign, fragment = href.partition("#")
    present = {part.split("=", 1)[0] for part in _query_params(href)}
    forwarded = [
        part
        for part in _query_params(pagelink)
        if part.split("=", 1)[0] in keys and part.split("=", 1)[0] not in present
    ]
    if forwarded:
        href += ("&" if "?" in href else "?") + "&".join(forwarded)
    return href + hash_sign + fragment


def make_link_fixer(proxy: FrontendProxy) -> LinkFixer | None:
    """Build the link fixer for a proxy.

    Only the steps the proxy needs are included: stripping its
    ``relative_fix`` pattern, re-inserting the mount point prefix and
    forwarding query parameters.

    Returns:
        A function of (href, pagelink), or None if no rewriting is needed
    """
    depth = len(proxy.name_path.split("/"))
    needs_prefix = depth > MOUNT_DEPTH
    keys = query_keys(proxy.name_path)
    relative_fix: re.Pattern[str] | None = None
    if proxy.relative_fix:
        try:
            relative_fix = re.compile(proxy.relative_fix)
        except re.error:
            relative_fix = None

    steps: list[LinkFixer] = []
    if relative_fix is not None:
        steps.append(lambda href, pagelink: relative_fix.sub("", href, count=1))
    if needs_prefix:

        def add_prefix(href: str, pagelink: str) -> str:
            # Only root-relative links lack the mount point
            if href.startswith("/") and not href.startswith("//"):
                return _mount_prefix(pagelink, depth) + href
            return href

        steps.append(add_prefix)
    if keys:
        steps.append(lambda href, pagelink: _forward_query(href, pagelink, keys))

    if not steps:
        return None

    def fix(href: str, pagelink: str) -> str:
        for step in steps:
            href = step(href, pagelink)
        return href

    return fix


def build_link_fixer(catalog: Catalog, hostname_or_url: str) -> LinkFixer | None:
    """Build the link fixer for the proxy serving a hostname or URL.

    Returns:
        A function of (href, pagelink), or None if the hostname is not a
        known proxy or its links need no rewriting
    """
    proxy = catalog.get_proxy(extract_hostname(hostname_or_url))
    if proxy is None:
        return None
    return make_link_fixer(proxy)
