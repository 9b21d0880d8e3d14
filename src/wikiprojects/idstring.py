"""Conversion between wiki URLs and compact id strings.

Records hosting several wikis under one hostname pattern identify each wiki
by the extra capture groups of their match pattern (group 1 is always the
hostname). Joining those captures gives the id string, e.g. ``de.starwars``
for ``https://starwars.fandom.com/de/``. Going back, the number of segments
in the id string selects which path template builds the URL.
"""

import re
from urllib.parse import urlsplit, urlunsplit

from .catalog import Catalog
from .patterns import PatternCache
from .records import WikiProject
from .templates import fill_template


# Ports left out of normalized URLs
DEFAULT_PORTS = {"http": 80, "https": 443}

# Absolute URL with a scheme and a non-empty authority
VALID_URL_PATTERN = re.compile(r"^[a-z][a-z\d+.-]*://[^\s/?#]+[^\s]*$", re.IGNORECASE)


def is_valid_url(url: str) -> bool:
    """Check if a string is a syntactically valid absolute URL."""
    if not VALID_URL_PATTERN.match(url):
        return False
    try:
        return bool(urlsplit(url).hostname)
    except ValueError:
        return False


def normalize_url(url: str) -> str | None:
    """Normalize the authority of a URL the way browsers do.

    The scheme and hostname are lowercased and a default port is dropped,
    so catalog patterns (written for lowercase hosts) see the canonical form.

    Returns:
        The normalized URL, or None if it has no hostname or a bad port
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        return None
    if not hostname:
        return None

    scheme = parts.scheme.lower()
    netloc = f"[{hostname}]" if ":" in hostname else hostname
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        netloc += f":{port}"
    userinfo, at, _ = parts.netloc.rpartition("@")
    return urlunsplit((scheme, userinfo + at + netloc, parts.path, parts.query, parts.fragment))


def url_to_id_string(catalog: Catalog, patterns: PatternCache, url: str) -> str | None:
    """Turn a wiki URL into its id string.

    Args:
        catalog: Catalog to look the hostname up in
        patterns: Compiled pattern cache
        url: Full URL of a page or path on the wiki

    Returns:
        The id string, or None if the URL does not belong to a multi-wiki record
    """
    url = normalize_url(url)
    if url is None:
        return None
    record = catalog.get_id_string_record(urlsplit(url).hostname)
    if record is None:
        return None

    kind = "project" if isinstance(record, WikiProject) else "proxy"
    pattern = patterns.get(("match", kind, record.name), lambda: record.match_pattern)
    if pattern is None:
        return None
    match = pattern.search(url)
    if match is None:
        return None

    segments = [group for group in match.groups()[1:] if group]
    if not segments:
        return None
    if record.id_string.direction == "desc":
        segments.reverse()
    return record.id_string.separator.join(segments)


def id_string_to_url(
    catalog: Catalog, patterns: PatternCache, id_string: str, name: str
) -> str | None:
    """Turn an id string back into the wiki's URL.

    ``path_templates[k - 1]`` is used for an id string of ``k`` segments;
    its ``$n`` placeholders are filled from the segments in order.

    Args:
        catalog: Catalog to look the record up in
        patterns: Compiled pattern cache
        id_string: Id string as produced by url_to_id_string
        name: Exact name of the record the id string belongs to

    Returns:
        The URL, or None if the id string does not resolve
    """
    record = catalog.find_by_name(name)
    if record is None:
        return None
    spec = record.id_string

    kind = "project" if isinstance(record, WikiProject) else "proxy"
    pattern = patterns.get(("id", kind, record.name), lambda: spec.id_pattern)
    if pattern is None or pattern.groups < 1:
        return None
    match = pattern.fullmatch(id_string)
    if match is None or match.group(1) is None:
        return None

    segments = match.group(1).split(spec.separator)
    if len(segments) > len(spec.path_templates):
        return None

    url = fill_template(spec.path_templates[len(segments) - 1], segments)
    return url if is_valid_url(url) else None
