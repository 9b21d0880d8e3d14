"""Tests for catalog loading and hostname resolution."""

import json
from pathlib import Path

import pytest

from wikiprojects.catalog import (
    Catalog,
    extract_hostname,
    load_catalog,
    load_catalogs,
)
from wikiprojects.records import CatalogError, FrontendProxy, WikiProject

from tests.conftest import CATALOG_DATA


class TestExtractHostname:
    """Tests for extract_hostname()."""

    def test_full_url(self):
        assert extract_hostname("https://en.example.org/wiki/Main_Page") == "en.example.org"

    def test_bare_hostname(self):
        assert extract_hostname("en.example.org") == "en.example.org"

    def test_hostname_with_path(self):
        assert extract_hostname("example.org/wiki/Main_Page") == "example.org"

    def test_strips_userinfo(self):
        """Credentials in front of the hostname are not part of it."""
        assert extract_hostname("https://user:pw@example.org/w/") == "example.org"

    def test_no_dotted_part(self):
        """Returns None when none of the leading parts looks like a hostname."""
        assert extract_hostname("/wiki/Main_Page") is None
        assert extract_hostname("") is None

    def test_only_first_three_parts(self):
        """Dotted path segments further in are not hostname candidates."""
        assert extract_hostname("a/b/c/example.org") is None


class TestHostnameResolution:
    """Tests for Catalog.get_project() and Catalog.get_proxy()."""

    def test_exact_name(self, catalog):
        assert catalog.get_project("example.org").name == "example.org"

    def test_subdomain_matches_suffix(self, catalog):
        """Any subdomain resolves to the record of its suffix."""
        assert catalog.get_project("a.b.example.org").name == "example.org"

    def test_suffix_respects_label_boundary(self, catalog):
        """otherexample.org is not a subdomain of example.org."""
        assert catalog.get_project("otherexample.org") is None

    def test_unknown_hostname(self, catalog):
        assert catalog.get_project("example.com") is None
        assert catalog.get_project("example.org.evil.com") is None

    def test_empty_hostname(self, catalog):
        assert catalog.get_project("") is None
        assert catalog.get_project(None) is None

    def test_projects_and_proxies_are_separate(self, catalog):
        assert catalog.get_proxy("mirror.test").name == "mirror.test"
        assert catalog.get_project("mirror.test") is None
        assert catalog.get_proxy("example.org") is None

    def test_id_string_record_requires_id_string(self, catalog):
        """Only records with an id-string spec are returned."""
        assert catalog.get_id_string_record("starwars.farm.test").name == "farm.test"
        assert catalog.get_id_string_record("mirror.test").name == "mirror.test"
        assert catalog.get_id_string_record("example.org") is None

    def test_find_by_name_is_exact(self, catalog):
        """Names are not suffix-resolved."""
        assert catalog.find_by_name("farm.test").name == "farm.test"
        assert catalog.find_by_name("starwars.farm.test") is None

    def test_find_by_name_requires_id_string(self, catalog):
        assert catalog.find_by_name("example.org") is None
        assert catalog.find_by_name("mirror.test").name == "mirror.test"


class TestRecordDefaults:
    """Tests for schema defaults applied when loading records."""

    def test_project_defaults(self):
        project = WikiProject.from_dict(
            {"name": "a.test", "regex": r"(a\.test)", "articlePath": "/wiki/", "scriptPath": "/w/"}
        )
        assert project.regex_paths is False
        assert project.id_string is None
        assert project.wiki_farm is None
        assert project.extensions == []
        assert project.url_space_replacement == "_"
        assert project.note is None

    def test_id_string_defaults(self, catalog):
        spec = catalog.get_project("farm.test").id_string
        assert spec.separator == "."
        assert spec.direction == "desc"
        assert spec.path_templates == ["https://$1.farm.test/", "https://$2.farm.test/$1/"]

    def test_id_string_explicit_values(self, catalog):
        spec = catalog.get_project("ascfarm.test").id_string
        assert spec.separator == "_"
        assert spec.direction == "asc"

    def test_proxy_defaults(self):
        proxy = FrontendProxy.from_dict(
            {
                "name": "p.test",
                "regex": r"(p\.test)",
                "namePath": "https://p.test/",
                "articlePath": "https://p.test/wiki/",
                "scriptPath": "https://example.org/w/",
            }
        )
        assert proxy.relative_fix is None
        assert proxy.note is None
        assert proxy.regex_paths is True

    def test_missing_required_key(self):
        with pytest.raises(CatalogError, match="articlePath"):
            WikiProject.from_dict({"name": "a.test", "regex": "(a)", "scriptPath": "/"})


class TestLoadCatalog:
    """Tests for catalog file loading."""

    def test_load_yaml(self, catalog_file):
        catalog = load_catalog(catalog_file)
        assert len(catalog.projects) == len(CATALOG_DATA["wikiProjects"])
        assert len(catalog.proxies) == len(CATALOG_DATA["frontendProxies"])

    def test_load_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(CATALOG_DATA, indent="\t"), encoding="utf-8")
        catalog = load_catalog(path)
        assert catalog.get_project("farm.test") is not None

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Cannot read"):
            load_catalog(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("wikiProjects: [unclosed", encoding="utf-8")
        with pytest.raises(CatalogError, match="Invalid catalog"):
            load_catalog(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert len(load_catalog(path)) == 0

    def test_merged_later_wins(self, catalog):
        override = Catalog(
            [WikiProject(name="example.org", match_pattern=r"(example\.org)",
                         article_path="/view/", script_path="/")]
        )
        merged = Catalog.merged(catalog, override)
        assert merged.get_project("example.org").article_path == "/view/"
        assert merged.get_project("farm.test") is not None

    def test_load_catalogs_without_builtin(self, catalog_file):
        catalog = load_catalogs([catalog_file], include_builtin=False)
        assert catalog.get_project("wikipedia.org") is None
        assert catalog.get_project("example.org") is not None

    def test_load_catalogs_on_top_of_builtin(self, catalog_file):
        catalog = load_catalogs([catalog_file])
        assert catalog.get_project("wikipedia.org") is not None
        assert catalog.get_project("example.org") is not None


class TestBuiltinCatalog:
    """Tests for the bundled catalog file."""

    def test_loads(self):
        catalog = Catalog.builtin()
        assert catalog.get_project("en.wikipedia.org").wiki_farm == "wikimedia"
        assert catalog.get_project("starwars.fandom.com").id_string is not None
        assert catalog.get_proxy("breezewiki.com") is not None

    def test_names_are_suffixes_of_their_patterns(self):
        """Each record name is a plain hostname suffix."""
        catalog = Catalog.builtin()
        for record in catalog.projects + catalog.proxies:
            assert "/" not in record.name
            assert Path(record.name).suffix
