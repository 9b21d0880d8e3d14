"""Shared fixtures: a small catalog covering the record shapes."""

from pathlib import Path

import pytest
import yaml

from wikiprojects.catalog import Catalog
from wikiprojects.resolver import WikiResolver


CATALOG_DATA = {
    "wikiProjects": [
        {
            "name": "example.org",
            "regex": r"(example\.org)",
            "articlePath": "/wiki/",
            "scriptPath": "/w/",
        },
        {
            "name": "farm.test",
            "regex": r"(([a-z\d-]{1,50})\.farm\.test(?:(?!/wiki/)/([a-z-]{2,12})(?=/))?)",
            "articlePath": "/wiki/",
            "scriptPath": "/",
            "wikiFarm": "fandom",
            "idString": {
                "regex": r"((?:[a-z-]{2,12}\.)?[a-z\d-]{1,50})",
                "scriptPaths": ["https://$1.farm.test/", "https://$2.farm.test/$1/"],
            },
        },
        {
            "name": "ascfarm.test",
            "regex": r"(([a-z\d]{1,50})\.ascfarm\.test(?:/([a-z]{2})(?=/))?)",
            "articlePath": "/wiki/",
            "scriptPath": "/w/",
            "idString": {
                "separator": "_",
                "direction": "asc",
                "regex": r"([a-z\d]{1,50}(?:_[a-z]{2})?)",
                "scriptPaths": [
                    "https://$1.ascfarm.test/w/",
                    "https://$1.ascfarm.test/$2/w/",
                ],
            },
        },
        {
            "name": "deep.test",
            "regex": r"(([a-z\d]+)\.deep\.test(?:/([a-z\d]+)(?=/))?)",
            "articlePath": "/wiki/",
            "scriptPath": "/",
            "idString": {
                "regex": r"([a-z\d]+(?:\.[a-z\d]+)*)",
                "scriptPaths": ["https://$1.deep.test/", "https://$2.deep.test/$1/"],
            },
        },
        {
            "name": "opt.test",
            "regex": r"((?:([a-z]+)\.)?opt\.test)",
            "articlePath": "/wiki/",
            "scriptPath": "/w/",
            "idString": {
                "regex": r"([a-z]+)",
                "scriptPaths": ["https://$1.opt.test/w/"],
            },
        },
        {
            "name": "badurl.test",
            "regex": r"(([a-z]+)\.badurl\.test)",
            "articlePath": "/wiki/",
            "scriptPath": "/w/",
            "idString": {
                "regex": r"([a-z]+)",
                "scriptPaths": ["not a url $1"],
            },
        },
        {
            "name": "paths.test",
            "regex": r"(paths\.test)/([a-z\d-]{1,50})",
            "articlePath": "/$2/",
            "scriptPath": "/$2/",
            "regexPaths": True,
            "idString": {
                "regex": r"([a-z\d-]{1,50})",
                "scriptPaths": ["https://paths.test/$1/"],
            },
        },
        {
            "name": "index.test",
            "regex": r"(index\.test)",
            "articlePath": "/index.php?title=",
            "scriptPath": "/",
            "urlSpaceReplacement": "+",
        },
        {
            "name": "view.test",
            "regex": r"(view\.test)",
            "articlePath": "/view/?action=view",
            "scriptPath": "/w/",
        },
        {
            "name": "broken.test",
            "regex": r"(broken\.test",
            "articlePath": "/wiki/",
            "scriptPath": "/w/",
        },
    ],
    "frontendProxies": [
        {
            "name": "mirror.test",
            "regex": r"(mirror\.test)/([a-z\d-]{1,50})",
            "namePath": "https://mirror.test/$2/",
            "articlePath": "https://mirror.test/$2/wiki/",
            "scriptPath": "https://$2.farm.test/",
            "idString": {
                "regex": r"([a-z\d-]{1,50})",
                "scriptPaths": ["https://mirror.test/$1/"],
            },
        },
        {
            "name": "proxy.example",
            "regex": r"(proxy\.example)/([a-z-]{2,12})/([a-z\d-]{1,50})",
            "namePath": "https://proxy.example/$2/$3/?action=view",
            "articlePath": "https://proxy.example/$2/$3/wiki/?action=view",
            "scriptPath": "https://$3.farm.test/$2/",
            "relativeFix": "^/origin",
        },
        {
            "name": "lang.test",
            "regex": r"(lang\.test)(?:/[^?#]*)?\?(?:[^#]*&)?lang=([a-z-]{2,12})",
            "namePath": "https://lang.test/?lang=$2",
            "articlePath": "https://lang.test/wiki/?lang=$2",
            "scriptPath": "https://$2.example.org/w/",
        },
        {
            "name": "strip.test",
            "regex": r"(strip\.test)",
            "namePath": "https://strip.test/",
            "articlePath": "https://strip.test/wiki/",
            "scriptPath": "https://strip.farm.test/",
            "relativeFix": r"^https?://[a-z\d-]+\.farm\.test",
        },
        {
            "name": "plain.test",
            "regex": r"(plain\.test)",
            "namePath": "https://plain.test/",
            "articlePath": "https://plain.test/wiki/",
            "scriptPath": "https://example.org/w/",
        },
    ],
}


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.from_data(CATALOG_DATA)


@pytest.fixture
def resolver(catalog: Catalog) -> WikiResolver:
    return WikiResolver(catalog)


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    """The test catalog written as a YAML file."""
    path = tmp_path / "catalog.yml"
    path.write_text(yaml.safe_dump(CATALOG_DATA), encoding="utf-8")
    return path
