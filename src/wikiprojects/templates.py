"""Positional placeholder templates for wikiprojects.

Path templates reference values by position: ``$1`` is the first value,
``$2`` the second and so on up to ``$9``. The same substitution is used for
filling paths from regex captures and for building URLs from id strings.
"""

import re
from collections.abc import Sequence
from urllib.parse import quote


# Matches a positional placeholder: $1 .. $9
PLACEHOLDER_PATTERN = re.compile(r"\$(\d)")

# Placeholder left in article paths for the page title
TITLE_PLACEHOLDER = "$1"


def fill_template(template: str, values: Sequence[str | None]) -> str:
    """Fill positional placeholders from a sequence of values.

    ``$n`` is replaced by ``values[n - 1]``. Missing or empty values are
    replaced by an empty string.

    Args:
        template: Template string containing $n placeholders
        values: Values in placeholder order (index 0 fills $1)

    Returns:
        The filled template
    """

    def replace(match: re.Match[str]) -> str:
        index = int(match.group(1)) - 1
        if 0 <= index < len(values):
            return values[index] or ""
        return ""

    return PLACEHOLDER_PATTERN.sub(replace, template)


def fill_from_match(template: str, match: re.Match[str]) -> str:
    """Fill a template from a regex match, so that ``$1`` is capture group 1."""
    return fill_template(template, match.groups())


def with_title_placeholder(article_path: str) -> str:
    """Add the page title placeholder to an article path.

    The placeholder goes before the query string when the path carries a
    query that does not end in ``=`` (e.g. ``/wiki/?action=view``), and is
    appended otherwise (e.g. ``/wiki/`` or ``/index.php?title=``).
    """
    if "?" in article_path and not article_path.endswith("="):
        return article_path.replace("?", TITLE_PLACEHOLDER + "?", 1)
    return article_path + TITLE_PLACEHOLDER


def render_title(full_article_path: str, title: str, space_replacement: str = "_") -> str:
    """Put a page title into a full article path template.

    Spaces are replaced by the project's space replacement and the title
    is percent-encoded (keeping characters common in wiki titles readable).
    """
    words = title.strip().split(" ")
    encoded = space_replacement.join(quote(word, safe="/:@!$'()*,;~") for word in words)
    return full_article_path.replace(TITLE_PLACEHOLDER, encoded, 1)
