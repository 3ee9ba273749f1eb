# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Command-line interface.

Usage:
    # Print the model of a schema
    genro-xsdgen order.xsd --json

    # Generate class scaffolding
    genro-xsdgen order.xsd -o generated/

    # Extra namespace bindings, extended rules, last-wins on duplicates
    genro-xsdgen order.xsd --ns tns=urn:orders,ext=urn:ext --extended --last-wins --json

    # Save the model in TYTX format
    genro-xsdgen order.xsd --save order.model.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from genro_toolbox import smartsplit

from .config import SchemaConfig
from .const import ELEMENTS_KEY, ON_DUPLICATE_LAST_WINS, ON_MISSING_SKIP
from .driver import SchemaDriver
from .exceptions import ConfigError, XsdGenError

logger = logging.getLogger(__name__)


def parse_namespaces(value: str | None) -> dict[str, str]:
    """Parse 'p1=uri1,p2=uri2' into a bindings dict.

    Raises:
        ConfigError: On an item without '='.
    """
    bindings: dict[str, str] = {}
    if not value:
        return bindings
    for item in smartsplit(value, ","):
        item = item.strip()
        if not item:
            continue
        prefix, sep, uri = item.partition("=")
        if not sep or not prefix.strip():
            raise ConfigError(f"Invalid namespace binding '{item}', expected PREFIX=URI")
        bindings[prefix.strip()] = uri.strip()
    return bindings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genro-xsdgen",
        description="Generate class scaffolding from an XML Schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("input", nargs="?", type=Path, help="Input XSD file path")
    parser.add_argument("--url", type=str, help="URL of the XSD (not supported)")
    parser.add_argument("-o", "--output", type=Path, help="Output directory for generated classes")
    parser.add_argument("--ns", type=str, help="Extra namespace bindings: PREFIX=URI,...")
    parser.add_argument(
        "--extended",
        action="store_true",
        help="Also record restrictions, facets, enumerations and groups",
    )
    parser.add_argument(
        "--last-wins",
        action="store_true",
        help="On duplicate sibling keys keep the last one instead of failing",
    )
    parser.add_argument(
        "--skip-missing",
        action="store_true",
        help="Drop constructs without name/ref instead of failing",
    )
    parser.add_argument("--json", action="store_true", help="Print the model as JSON")
    parser.add_argument("--save", type=Path, help="Save the model in TYTX format (.json or .mp)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print diagnostic info")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point. Returns the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SchemaConfig(
            schema_file=args.input,
            schema_url=args.url,
            namespaces=parse_namespaces(args.ns),
            on_duplicate=ON_DUPLICATE_LAST_WINS if args.last_wins else "error",
            on_missing_identifier=ON_MISSING_SKIP if args.skip_missing else "error",
            extended=args.extended,
            output_dir=args.output,
        )
        driver = SchemaDriver(config)
        model = driver.build_model()

        if args.verbose:
            elements = model[ELEMENTS_KEY]
            print(f"  Found {sum(1 for _ in elements.contexts())} top-level constructs")
            print(f"  Found {sum(1 for _ in model.walk())} model entries")

        if args.json:
            print(model.to_json())

        if args.save:
            args.save.parent.mkdir(parents=True, exist_ok=True)
            transport = "msgpack" if args.save.suffix == ".mp" else "json"
            model.to_tytx(transport=transport, filename=str(args.save))
            print(f"Saved model to {args.save}")

        written = driver.emit(model)
        if args.output is not None:
            print(f"Generated {len(written)} files in {args.output}")
    except XsdGenError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
