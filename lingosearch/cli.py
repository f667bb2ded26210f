# lingosearch/cli.py
import asyncio
import json
import re
import sys
from pathlib import Path
from typing import Annotated, Any, NoReturn

import cyclopts
import httpx

from lingosearch.client import Elasticsearch
from lingosearch.errors import LingoSearchError
from lingosearch.schema import Index
from lingosearch.search import Search

app = cyclopts.App(
    name="lingosearch",
    help="Build multilingual Elasticsearch queries from simple criteria.",
)

_INT = re.compile(r"-?\d+")


def parse_value(raw: str) -> Any:
    """Parse a criterion value: `12` -> 12, `1,2,3` -> [1, 2, 3], else text."""
    if _INT.fullmatch(raw):
        return int(raw)
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) > 1 and all(_INT.fullmatch(p) for p in parts):
        return [int(p) for p in parts]
    return raw


def parse_criteria(pairs: list[str]) -> dict[str, Any]:
    """Turn `FIELD=VALUE` tokens into a search_by mapping, keeping order."""
    criteria: dict[str, Any] = {}
    for pair in pairs:
        field, sep, value = pair.partition("=")
        if not sep or not field:
            raise ValueError(f"Expected FIELD=VALUE, got {pair!r}")
        criteria[field.strip()] = parse_value(value.strip())
    return criteria


def _load_index(path: Path, name: str) -> Index:
    with path.open() as f:
        return Index(name, json.load(f))


def _build_search(
    search: Search,
    by: list[str],
    fields: list[str],
    query: str | None,
    locale: str | None,
    active: list[str],
    inactive: list[str],
) -> Search:
    if by:
        search = search.search_by(parse_criteria(by))
    if fields:
        if query is None:
            raise ValueError("--fields requires --query")
        search = search.autocomplete(fields, query, locale)
    if active:
        search = search.active_filter(active)
    if inactive:
        search = search.inactive_filter(inactive)
    return search


def _fail(error: Exception) -> NoReturn:
    print(f"Error: {error}", file=sys.stderr)
    sys.exit(1)


@app.command(name="render")
def render(
    mapping: Annotated[Path, cyclopts.Parameter(help="JSON file with the index mapping")],
    index: Annotated[
        str, cyclopts.Parameter(name=["--index", "-i"], help="Index name")
    ] = "index",
    by: Annotated[
        list[str],
        cyclopts.Parameter(name=["--by", "-b"], help="Criterion as FIELD=VALUE (repeatable)"),
    ] = [],
    fields: Annotated[
        list[str],
        cyclopts.Parameter(name=["--fields", "-f"], help="Fields to autocomplete on"),
    ] = [],
    query: Annotated[
        str | None, cyclopts.Parameter(name=["--query", "-q"], help="Autocomplete text")
    ] = None,
    locale: Annotated[
        str | None, cyclopts.Parameter(name=["--locale", "-l"], help="Autocomplete locale")
    ] = None,
    active: Annotated[
        list[str], cyclopts.Parameter(name="--active", help="Keep records active in a locale")
    ] = [],
    inactive: Annotated[
        list[str],
        cyclopts.Parameter(name="--inactive", help="Keep records inactive in a locale"),
    ] = [],
) -> None:
    """Print the request body for the given criteria."""
    if not mapping.exists():
        _fail(FileNotFoundError(f"File not found: {mapping}"))

    try:
        search = _build_search(
            Search(_load_index(mapping, index)), by, fields, query, locale, active, inactive
        )
    except (LingoSearchError, ValueError) as e:
        _fail(e)

    print(json.dumps(search.to_body(), indent=2, ensure_ascii=False))


@app.command(name="search")
def search(
    index: Annotated[str, cyclopts.Parameter(help="Index name")],
    url: Annotated[
        str | None,
        cyclopts.Parameter(name=["--url", "-u"], help="Cluster URL (default: $ELASTICSEARCH_URL)"),
    ] = None,
    by: Annotated[
        list[str],
        cyclopts.Parameter(name=["--by", "-b"], help="Criterion as FIELD=VALUE (repeatable)"),
    ] = [],
    fields: Annotated[
        list[str],
        cyclopts.Parameter(name=["--fields", "-f"], help="Fields to autocomplete on"),
    ] = [],
    query: Annotated[
        str | None, cyclopts.Parameter(name=["--query", "-q"], help="Autocomplete text")
    ] = None,
    locale: Annotated[
        str | None, cyclopts.Parameter(name=["--locale", "-l"], help="Autocomplete locale")
    ] = None,
    active: Annotated[
        list[str], cyclopts.Parameter(name="--active", help="Keep records active in a locale")
    ] = [],
    inactive: Annotated[
        list[str],
        cyclopts.Parameter(name="--inactive", help="Keep records inactive in a locale"),
    ] = [],
    size: Annotated[
        int, cyclopts.Parameter(name=["--size", "-n"], help="Maximum hits")
    ] = 10,
) -> None:
    """Run the criteria against a live index and print the hits."""

    async def run() -> list[dict[str, Any]]:
        async with Elasticsearch(url) as client:
            target = await client.get_index(index)
            built = _build_search(
                Search(target), by, fields, query, locale, active, inactive
            )
            return await client.hits(built, size)

    try:
        hits = asyncio.run(run())
    except (LingoSearchError, ValueError, httpx.HTTPError) as e:
        _fail(e)

    print(json.dumps({"hits": hits, "total": len(hits)}, indent=2, ensure_ascii=False))
    print(f"\nTotal: {len(hits)} hits", file=sys.stderr)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
