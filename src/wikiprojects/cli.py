"""Command-line interface for wikiprojects."""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from rich.table import Table

from . import __version__
from .catalog import extract_hostname, load_catalogs
from .config import catalog_paths, get_config_path, init_config, load_config, merge_config
from .console import error, info, stdout, success, warning
from .paths import ProxyResolution, WikiResolution
from .records import CatalogError
from .resolver import WikiResolver


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="wikiprojects",
        description="Resolve URLs to known MediaWiki projects and frontend proxies.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  wikiprojects resolve "https://en.wikipedia.org/wiki/Main_Page"
  wikiprojects resolve --title "Darth Vader" starwars.fandom.com
  wikiprojects id "https://starwars.fandom.com/de/wiki/Yoda"
  wikiprojects url de.starwars fandom.com
  wikiprojects fix breezewiki.com /wiki/Yoda https://breezewiki.com/starwars/wiki/Luke
  wikiprojects list --farm miraheze
  wikiprojects init
""",
    )

    # Configuration
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Use alternate config file",
    )

    parser.add_argument(
        "--catalog",
        action="append",
        default=[],
        metavar="FILE",
        help="Additional catalog file (can be repeated)",
    )

    parser.add_argument(
        "--no-builtin",
        action="store_true",
        help="Don't load the bundled catalog",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show detailed output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    resolve = subparsers.add_parser(
        "resolve", help="Resolve URLs or hostnames to article and script paths"
    )
    resolve.add_argument("input", nargs="+", metavar="INPUT", help="URL or URL-like string")
    resolve.add_argument(
        "--title",
        metavar="TITLE",
        help="Also print the article URL of this page title",
    )

    id_string = subparsers.add_parser("id", help="Convert wiki URLs to id strings")
    id_string.add_argument("url", nargs="+", metavar="URL", help="Full URL of the wiki")

    url = subparsers.add_parser("url", help="Convert an id string back to a URL")
    url.add_argument("id_string", metavar="ID_STRING", help="Id string, e.g. de.starwars")
    url.add_argument("name", metavar="NAME", help="Catalog record name, e.g. fandom.com")

    fix = subparsers.add_parser("fix", help="Rewrite a relative link found on a proxy page")
    fix.add_argument("proxy", metavar="PROXY", help="Proxy hostname or URL")
    fix.add_argument("href", metavar="HREF", help="Link as found on the page")
    fix.add_argument("pagelink", metavar="PAGELINK", help="URL of the page the link was found on")

    list_parser = subparsers.add_parser("list", help="List catalog records")
    list_parser.add_argument("--farm", metavar="FARM", help="Only projects of this wiki farm")
    list_parser.add_argument(
        "--proxies",
        action="store_true",
        help="List frontend proxies instead of projects",
    )

    subparsers.add_parser("init", help="Write an example config file")

    return parser.parse_args(args)


def resolution_to_dict(
    value: str, resolution: WikiResolution | ProxyResolution, title: str | None = None
) -> dict[str, Any]:
    """Flatten a resolution for output."""
    result: dict[str, Any] = {"input": value, "name": resolution.record.name}
    if isinstance(resolution, ProxyResolution):
        result["type"] = "proxy"
        result["full_name_path"] = resolution.full_name_path
    else:
        result["type"] = "project"
        result["wiki_farm"] = resolution.record.wiki_farm
    result["full_article_path"] = resolution.full_article_path
    result["full_script_path"] = resolution.full_script_path
    if title:
        result["article_url"] = resolution.article_url(title)
    return result


def print_results(results: list[dict[str, Any]], as_json: bool) -> None:
    """Print result records as JSON or as indented text blocks."""
    if as_json:
        print(json.dumps(results, indent=2, ensure_ascii=False))
        return
    for result in results:
        print(result["input"])
        for key, value in result.items():
            if key != "input" and value is not None:
                print(f"  {key}: {value}")


def cmd_resolve(resolver: WikiResolver, args: argparse.Namespace, as_json: bool) -> int:
    results: list[dict[str, Any]] = []
    for value in args.input:
        resolution = resolver.resolve_input(value) or resolver.resolve_proxy_input(value)
        if resolution is None:
            warning(f"No known wiki for '{value}'")
            continue
        results.append(resolution_to_dict(value, resolution, args.title))

    print_results(results, as_json)
    return 0 if len(results) == len(args.input) else 1


def cmd_id(resolver: WikiResolver, args: argparse.Namespace, as_json: bool) -> int:
    results: list[dict[str, Any]] = []
    for url in args.url:
        id_string = resolver.url_to_id_string(url)
        if id_string is None:
            warning(f"No id string for '{url}'")
            continue
        results.append({"input": url, "id_string": id_string})

    print_results(results, as_json)
    return 0 if len(results) == len(args.url) else 1


def cmd_url(resolver: WikiResolver, args: argparse.Namespace, as_json: bool) -> int:
    url = resolver.id_string_to_url(args.id_string, args.name)
    if url is None:
        error(f"Id string '{args.id_string}' does not resolve for '{args.name}'")
        return 1
    print_results([{"input": args.id_string, "name": args.name, "url": url}], as_json)
    return 0


def cmd_fix(resolver: WikiResolver, args: argparse.Namespace, as_json: bool) -> int:
    if resolver.get_proxy(extract_hostname(args.proxy) or "") is None:
        warning(f"'{args.proxy}' is not a known frontend proxy")
        return 1

    # Proxies without a fixer serve links that need no rewriting
    fixer = resolver.build_link_fixer(args.proxy)
    href = fixer(args.href, args.pagelink) if fixer else args.href
    print_results([{"input": args.href, "href": href}], as_json)
    return 0


def cmd_list(resolver: WikiResolver, args: argparse.Namespace, as_json: bool) -> int:
    if args.proxies:
        records: list[Any] = resolver.catalog.proxies
    else:
        records = [
            project
            for project in resolver.catalog.projects
            if not args.farm or project.wiki_farm == args.farm
        ]

    if as_json:
        print(json.dumps([asdict(record) for record in records], indent=2, ensure_ascii=False))
        return 0

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="cyan", no_wrap=True)
    if args.proxies:
        table.add_column("Name path")
        table.add_column("Script path")
        for proxy in records:
            table.add_row(proxy.name, proxy.name_path, proxy.script_path)
    else:
        table.add_column("Farm")
        table.add_column("Article path")
        table.add_column("Script path")
        table.add_column("Id strings")
        for project in records:
            table.add_row(
                project.name,
                project.wiki_farm or "",
                project.article_path,
                project.script_path,
                "yes" if project.id_string else "",
            )
    stdout.print(table)
    return 0


COMMANDS = {
    "resolve": cmd_resolve,
    "id": cmd_id,
    "url": cmd_url,
    "fix": cmd_fix,
    "list": cmd_list,
}


def main(args: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command-line arguments (for testing)

    Returns:
        Exit code (0 for success)
    """
    parsed_args = parse_args(args)

    config_path = Path(parsed_args.config) if parsed_args.config else None
    if parsed_args.command == "init":
        try:
            created = init_config(config_path)
        except FileExistsError:
            warning(f"Config file already exists: {config_path or get_config_path()}")
            return 1
        success(f"Created config file: {created}")
        info("Edit this file to add catalog files or change the output format.")
        return 0

    try:
        config = load_config(config_path)
    except (OSError, ValueError) as e:
        error(f"Error loading config: {e}")
        return 1

    # Apply CLI overrides
    overrides: dict[str, Any] = {}
    if parsed_args.catalog:
        overrides["catalogs"] = list(config.get("catalogs") or []) + parsed_args.catalog
    if parsed_args.no_builtin:
        overrides["include_builtin"] = False
    if parsed_args.json:
        overrides["output"] = "json"
    if overrides:
        config = merge_config(config, overrides)

    try:
        catalog = load_catalogs(catalog_paths(config), config.get("include_builtin", True))
    except CatalogError as e:
        error(f"Error loading catalog: {e}")
        return 1

    if parsed_args.verbose:
        info(
            f"Loaded {len(catalog.projects)} projects and "
            f"{len(catalog.proxies)} proxies"
        )

    resolver = WikiResolver(catalog)
    command = COMMANDS[parsed_args.command]
    return command(resolver, parsed_args, config.get("output") == "json")


if __name__ == "__main__":
    sys.exit(main())
