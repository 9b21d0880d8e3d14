"""Catalog record types for wikiprojects.

Records are built from mediawiki-projects-list style dictionaries. The
schema defaults are applied here so the rest of the package can rely on
every field being present.
"""

from dataclasses import dataclass, field
from typing import Any


class CatalogError(ValueError):
    """A catalog file or record could not be loaded."""

    pass


def _require(data: dict[str, Any], key: str, kind: str) -> Any:
    """Return a required key from a raw record, raising CatalogError if absent."""
    try:
        return data[key]
    except KeyError:
        name = data.get("name", "<unnamed>")
        raise CatalogError(f"{kind} {name!r} is missing required key {key!r}") from None


@dataclass
class IdStringSpec:
    """How a multi-wiki record turns captures into id strings and back."""

    id_pattern: str
    path_templates: list[str]
    separator: str = "."
    direction: str = "desc"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IdStringSpec":
        """Create an IdStringSpec from a raw ``idString`` mapping."""
        return cls(
            id_pattern=_require(data, "regex", "idString"),
            path_templates=list(_require(data, "scriptPaths", "idString")),
            separator=data.get("separator") or ".",
            direction=data.get("direction") or "desc",
        )


@dataclass
class WikiProject:
    """A MediaWiki project."""

    name: str
    match_pattern: str
    article_path: str
    script_path: str
    regex_paths: bool = False
    id_string: IdStringSpec | None = None
    wiki_farm: str | None = None
    extensions: list[str] = field(default_factory=list)
    url_space_replacement: str = "_"
    note: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WikiProject":
        """Create a WikiProject from a catalog entry, applying schema defaults."""
        id_string = data.get("idString")
        return cls(
            name=_require(data, "name", "wikiProject"),
            match_pattern=_require(data, "regex", "wikiProject"),
            article_path=_require(data, "articlePath", "wikiProject"),
            script_path=_require(data, "scriptPath", "wikiProject"),
            regex_paths=bool(data.get("regexPaths", False)),
            id_string=IdStringSpec.from_dict(id_string) if id_string else None,
            wiki_farm=data.get("wikiFarm"),
            extensions=list(data.get("extensions") or []),
            url_space_replacement=data.get("urlSpaceReplacement") or "_",
            note=data.get("note"),
        )


@dataclass
class FrontendProxy:
    """A frontend proxy mirroring wikis under its own hostname.

    The name, article and script paths are full URL templates and are
    always filled from the match pattern's captures.
    """

    name: str
    match_pattern: str
    name_path: str
    article_path: str
    script_path: str
    relative_fix: str | None = None
    id_string: IdStringSpec | None = None
    note: str | None = None

    @property
    def regex_paths(self) -> bool:
        return True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FrontendProxy":
        """Create a FrontendProxy from a catalog entry, applying schema defaults."""
        id_string = data.get("idString")
        return cls(
            name=_require(data, "name", "frontendProxy"),
            match_pattern=_require(data, "regex", "frontendProxy"),
            name_path=_require(data, "namePath", "frontendProxy"),
            article_path=_require(data, "articlePath", "frontendProxy"),
            script_path=_require(data, "scriptPath", "frontendProxy"),
            relative_fix=data.get("relativeFix"),
            id_string=IdStringSpec.from_dict(id_string) if id_string else None,
            note=data.get("note"),
        )


Record = WikiProject | FrontendProxy
