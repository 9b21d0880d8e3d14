"""Catalog of known wiki projects and frontend proxies.

A catalog is loaded once (from the bundled ``data/projects.yml`` or from
user supplied files) and is never modified afterwards. Hostnames are
resolved to records by dot-delimited suffix: ``a.b.example.org`` is tried
as-is, then as ``b.example.org``, then ``example.org`` and so on.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from .records import CatalogError, FrontendProxy, Record, WikiProject


BUILTIN_CATALOG = Path(__file__).parent / "data" / "projects.yml"

# Top-level keys of a catalog file
PROJECTS_KEY = "wikiProjects"
PROXIES_KEY = "frontendProxies"


def extract_hostname(value: str) -> str | None:
    """Pick the hostname candidate out of a URL or URL-like string.

    Looks at the first three ``/``-separated parts (scheme, empty part and
    authority of a full URL, or the leading parts of a bare hostname or
    path) and returns the first non-empty one containing a dot, without any
    ``user:password@`` in front of it.
    """
    for part in value.split("/")[:3]:
        if part and "." in part:
            return part.rpartition("@")[2]
    return None


def _suffix_lookup(table: dict[str, Any], hostname: str | None) -> Any:
    """Find the record registered for the longest dot-delimited suffix."""
    if not hostname:
        return None
    labels = hostname.split(".")
    for i in range(len(labels)):
        record = table.get(".".join(labels[i:]))
        if record is not None:
            return record
    return None


class Catalog:
    """Immutable tables of wiki projects and frontend proxies keyed by name."""

    def __init__(
        self,
        projects: Iterable[WikiProject] = (),
        proxies: Iterable[FrontendProxy] = (),
    ) -> None:
        self._projects: dict[str, WikiProject] = {}
        self._proxies: dict[str, FrontendProxy] = {}
        for project in projects:
            self._projects[project.name] = project
        for proxy in proxies:
            self._proxies[proxy.name] = proxy

    @classmethod
    def from_data(cls, raw: dict[str, Any]) -> "Catalog":
        """Build a catalog from a parsed catalog file.

        Raises:
            CatalogError: If the data is not a mapping or a record is malformed
        """
        if not isinstance(raw, dict):
            raise CatalogError("Catalog data must be a mapping")
        projects = [WikiProject.from_dict(item) for item in raw.get(PROJECTS_KEY) or []]
        proxies = [FrontendProxy.from_dict(item) for item in raw.get(PROXIES_KEY) or []]
        return cls(projects, proxies)

    @classmethod
    def builtin(cls) -> "Catalog":
        """Load the catalog bundled with the package."""
        return load_catalog(BUILTIN_CATALOG)

    @classmethod
    def merged(cls, *catalogs: "Catalog") -> "Catalog":
        """Combine catalogs. Records of later catalogs replace same-named ones."""
        projects: list[WikiProject] = []
        proxies: list[FrontendProxy] = []
        for catalog in catalogs:
            projects.extend(catalog.projects)
            proxies.extend(catalog.proxies)
        return cls(projects, proxies)

    @property
    def projects(self) -> list[WikiProject]:
        return list(self._projects.values())

    @property
    def proxies(self) -> list[FrontendProxy]:
        return list(self._proxies.values())

    def __len__(self) -> int:
        return len(self._projects) + len(self._proxies)

    def get_project(self, hostname: str | None) -> WikiProject | None:
        """Return the wiki project owning a hostname, or None."""
        return _suffix_lookup(self._projects, hostname)

    def get_proxy(self, hostname: str | None) -> FrontendProxy | None:
        """Return the frontend proxy owning a hostname, or None."""
        return _suffix_lookup(self._proxies, hostname)

    def get_id_string_record(self, hostname: str | None) -> Record | None:
        """Return the record with an id-string spec owning a hostname.

        Projects are tried before proxies.
        """
        for record in (self.get_project(hostname), self.get_proxy(hostname)):
            if record is not None and record.id_string is not None:
                return record
        return None

    def find_by_name(self, name: str) -> Record | None:
        """Return the record with an id-string spec named exactly ``name``.

        Projects are tried before proxies.
        """
        for table in (self._projects, self._proxies):
            record = table.get(name)
            if record is not None and record.id_string is not None:
                return record
        return None


def load_catalog(path: Path) -> Catalog:
    """Load a catalog from a YAML or JSON file.

    Args:
        path: Path to the catalog file

    Returns:
        The loaded Catalog

    Raises:
        CatalogError: If the file cannot be read or parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            # Tab-indented JSON is not valid YAML
            if Path(path).suffix.lower() == ".json":
                raw = json.load(f)
            else:
                raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise CatalogError(f"Cannot read catalog file {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Invalid catalog file {path}: {e}") from e
    return Catalog.from_data(raw)


def load_catalogs(paths: Iterable[Path], include_builtin: bool = True) -> Catalog:
    """Load and merge catalog files, optionally on top of the bundled catalog."""
    catalogs = [Catalog.builtin()] if include_builtin else []
    catalogs.extend(load_catalog(Path(p).expanduser()) for p in paths)
    return Catalog.merged(*catalogs)
