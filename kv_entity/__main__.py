"""Interface for ``python -m kv_entity``."""

from __future__ import annotations

import asyncio
import json
import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ._version import version
from .options import MapOptions, ParserOptions
from .parser import DictParser
from .schema import schema_from_dict


if TYPE_CHECKING:
    from collections.abc import Sequence


__all__ = ["main"]


def _load_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def main(args: Sequence[str] | None = None) -> None:
    """Decode a JSON object of flat keys against a JSON entity schema."""
    parser = ArgumentParser(description="Decode flat delimiter-keyed values into a nested entity.")
    _ = parser.add_argument("-v", "--version", action="version", version=version)
    _ = parser.add_argument("--source", help="JSON file holding one object of flat keys")
    _ = parser.add_argument("--schema", help="JSON file holding the entity schema")
    _ = parser.add_argument(
        "--allow",
        action="append",
        default=[],
        metavar="PATH",
        help="whitelisted field path; repeat for each path",
    )
    _ = parser.add_argument("--delimiter", default="_", help="path separator (default: _)")
    _ = parser.add_argument("--no-overwrite", action="store_true", help="keep values already present")
    namespace = parser.parse_args(args)

    if namespace.source is None or namespace.schema is None:
        parser.error("--source and --schema are required")

    source = _load_json(namespace.source)
    if not isinstance(source, dict):
        parser.error("--source must contain a JSON object")

    try:
        dict_parser = DictParser(source, ParserOptions(delimiter=namespace.delimiter))
        entity_schema = schema_from_dict(_load_json(namespace.schema))
    except ValueError as error:
        parser.error(str(error))

    target: dict[str, Any] = {}
    _ = asyncio.run(
        dict_parser.map(target, entity_schema, namespace.allow, MapOptions(overwrite=not namespace.no_overwrite))
    )
    _ = sys.stdout.write(json.dumps(target, indent=2) + "\n")


if __name__ == "__main__":
    main()
