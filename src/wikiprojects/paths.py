"""Resolve URLs and URL-like strings to wiki article and script paths."""

import re
from dataclasses import dataclass

from .catalog import Catalog, extract_hostname
from .patterns import PatternCache
from .records import FrontendProxy, WikiProject
from .templates import fill_from_match, render_title, with_title_placeholder


# Optional "user[:password]@" in front of the hostname
USERINFO_PATTERN = r"(?:[^\s/?#@:]+(?::[^\s/?#@]*)?@)?"


@dataclass
class WikiResolution:
    """Canonical paths of a wiki project.

    ``full_article_path`` keeps ``$1`` where the page title goes.
    """

    full_article_path: str
    full_script_path: str
    record: WikiProject

    def article_url(self, title: str) -> str:
        """Return the article URL for a page title."""
        return render_title(self.full_article_path, title, self.record.url_space_replacement)


@dataclass
class ProxyResolution:
    """Canonical paths of a wiki mirrored by a frontend proxy."""

    full_name_path: str
    full_article_path: str
    full_script_path: str
    record: FrontendProxy

    def article_url(self, title: str) -> str:
        """Return the proxy article URL for a page title."""
        return render_title(self.full_article_path, title)


def build_anchor_pattern(project: WikiProject) -> str:
    """Build the pattern locating a project's hostname and paths in an input.

    Literal paths are escaped (the article path without its query part);
    projects with regex paths only require a following slash.
    """
    if project.regex_paths:
        article_path = script_path = "/"
    else:
        article_path = re.escape(project.article_path.split("?")[0])
        script_path = re.escape(project.script_path)
    return (
        USERINFO_PATTERN
        + project.match_pattern
        + f"(?:{article_path}|{script_path}|/?$)"
    )


def resolve_input(catalog: Catalog, patterns: PatternCache, value: str) -> WikiResolution | None:
    """Resolve a URL or URL-like string to a wiki project's paths.

    Args:
        catalog: Catalog to look the hostname up in
        patterns: Compiled pattern cache
        value: Full URL, bare hostname or partial URL

    Returns:
        The resolved paths, or None if no project matches
    """
    project = catalog.get_project(extract_hostname(value))
    if project is None:
        return None

    pattern = patterns.get(
        ("anchor", "project", project.name), lambda: build_anchor_pattern(project)
    )
    if pattern is None or pattern.groups < 1:
        return None
    match = pattern.search(value)
    if match is None or match.group(1) is None:
        return None

    if project.regex_paths:
        script_path = fill_from_match(project.script_path, match)
        article_path = fill_from_match(project.article_path, match)
    else:
        script_path = project.script_path
        article_path = project.article_path
    article_path = with_title_placeholder(article_path)

    # Anything matched before the hostname group is the userinfo
    userinfo = ""
    if match.start(1) > match.start():
        userinfo = value[match.start():match.start(1)]

    host = match.group(1)
    return WikiResolution(
        full_article_path="https://" + host + article_path,
        full_script_path="https://" + userinfo + host + script_path,
        record=project,
    )


def resolve_proxy_input(
    catalog: Catalog, patterns: PatternCache, value: str
) -> ProxyResolution | None:
    """Resolve a URL or URL-like string to a frontend proxy's paths.

    Returns:
        The resolved paths, or None if no proxy matches
    """
    proxy = catalog.get_proxy(extract_hostname(value))
    if proxy is None:
        return None

    pattern = patterns.get(("match", "proxy", proxy.name), lambda: proxy.match_pattern)
    if pattern is None or pattern.groups < 1:
        return None
    match = pattern.search(value)
    if match is None:
        return None

    return ProxyResolution(
        full_name_path=fill_from_match(proxy.name_path, match),
        full_article_path=with_title_placeholder(fill_from_match(proxy.article_path, match)),
        full_script_path=fill_from_match(proxy.script_path, match),
        record=proxy,
    )
