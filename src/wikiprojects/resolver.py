"""The resolver: a catalog together with its pattern and result caches."""

import copy

from .cache import ResultCache
from .catalog import Catalog, extract_hostname
from .idstring import id_string_to_url, url_to_id_string
from .linkfix import LinkFixer, build_link_fixer
from .paths import ProxyResolution, WikiResolution, resolve_input, resolve_proxy_input
from .patterns import PatternCache
from .records import FrontendProxy, WikiProject


class WikiResolver:
    """Resolve URLs against one catalog.

    Every resolver owns its caches, so resolvers built over different
    catalogs never share results. All lookups return None when nothing
    matches; results are copies the caller is free to modify.
    """

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.patterns = PatternCache()
        self._inputs = ResultCache()
        self._proxy_inputs = ResultCache()
        # Strings are immutable, nothing to copy
        self._id_strings = ResultCache(copy_on_read=False)
        self._urls = ResultCache(copy_on_read=False)
        self._fixers = ResultCache(copy_on_read=False)

    def get_project(self, hostname: str) -> WikiProject | None:
        """Return the wiki project owning a hostname."""
        return copy.deepcopy(self.catalog.get_project(hostname))

    def get_proxy(self, hostname: str) -> FrontendProxy | None:
        """Return the frontend proxy owning a hostname."""
        return copy.deepcopy(self.catalog.get_proxy(hostname))

    def resolve_input(self, value: str) -> WikiResolution | None:
        """Resolve a URL or URL-like string to a wiki project's paths."""
        return self._inputs.get_or_compute(
            value, lambda: resolve_input(self.catalog, self.patterns, value)
        )

    def resolve_proxy_input(self, value: str) -> ProxyResolution | None:
        """Resolve a URL or URL-like string to a frontend proxy's paths."""
        return self._proxy_inputs.get_or_compute(
            value, lambda: resolve_proxy_input(self.catalog, self.patterns, value)
        )

    def url_to_id_string(self, url: str) -> str | None:
        """Turn a wiki URL into its id string."""
        return self._id_strings.get_or_compute(
            url, lambda: url_to_id_string(self.catalog, self.patterns, url)
        )

    def id_string_to_url(self, id_string: str, name: str) -> str | None:
        """Turn an id string of the named record back into a URL."""
        return self._urls.get_or_compute(
            (id_string, name),
            lambda: id_string_to_url(self.catalog, self.patterns, id_string, name),
        )

    def build_link_fixer(self, hostname_or_url: str) -> LinkFixer | None:
        """Return the link fixer of the proxy serving a hostname or URL."""
        key = extract_hostname(hostname_or_url)
        return self._fixers.get_or_compute(
            key, lambda: build_link_fixer(self.catalog, hostname_or_url)
        )
