"""Resolve URLs to known MediaWiki projects and frontend proxies.

The module-level functions use a resolver over the bundled catalog. Build a
WikiResolver yourself to work with a different catalog.
"""

from functools import lru_cache

from .catalog import Catalog, extract_hostname, load_catalog, load_catalogs
from .linkfix import LinkFixer
from .paths import ProxyResolution, WikiResolution
from .records import CatalogError, FrontendProxy, IdStringSpec, WikiProject
from .resolver import WikiResolver

__version__ = "1.0.0"

__all__ = [
    "Catalog",
    "CatalogError",
    "FrontendProxy",
    "IdStringSpec",
    "LinkFixer",
    "ProxyResolution",
    "WikiProject",
    "WikiResolution",
    "WikiResolver",
    "build_link_fixer",
    "default_resolver",
    "extract_hostname",
    "get_project",
    "get_proxy",
    "id_string_to_url",
    "load_catalog",
    "load_catalogs",
    "resolve_input",
    "resolve_proxy_input",
    "url_to_id_string",
]


@lru_cache(maxsize=None)
def default_resolver() -> WikiResolver:
    """Return the resolver over the bundled catalog (built on first use)."""
    return WikiResolver(Catalog.builtin())


def get_project(hostname: str) -> WikiProject | None:
    return default_resolver().get_project(hostname)


def get_proxy(hostname: str) -> FrontendProxy | None:
    return default_resolver().get_proxy(hostname)


def resolve_input(value: str) -> WikiResolution | None:
    return default_resolver().resolve_input(value)


def resolve_proxy_input(value: str) -> ProxyResolution | None:
    return default_resolver().resolve_proxy_input(value)


def url_to_id_string(url: str) -> str | None:
    return default_resolver().url_to_id_string(url)


def id_string_to_url(id_string: str, name: str) -> str | None:
    return default_resolver().id_string_to_url(id_string, name)


def build_link_fixer(hostname_or_url: str) -> LinkFixer | None:
    return default_resolver().build_link_fixer(hostname_or_url)
