from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional, Sequence

from .core.constants import ALL_SHAPES, REQUIRED_FIELDS, SHAPE_LABELS, UNITS
from .core.export_results import (
    SectionExportError,
    export_catalog_csv,
    export_properties_csv,
    export_properties_json,
    format_value,
    property_rows,
)
from .core.library_store import search_standard_sections
from .core.model import _camel, default_dimensions, dimensions_from_dict
from .core.report_export import export_section_report_html
from .core.section_props import calculate


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="minisection",
        description="Compute area, moments of inertia, section moduli and radii of gyration.",
        epilog="Fields per shape: " + "; ".join(f"{s}: {', '.join(REQUIRED_FIELDS[s])}" for s in ALL_SHAPES),
    )
    p.add_argument("shape", choices=ALL_SHAPES)
    p.add_argument("values", nargs="*", metavar="FIELD=VALUE",
                   help="dimensions in mm, e.g. outerDiameter=100; omitted fields take the default size")
    p.add_argument("--catalog", action="store_true", help="list standard sections of SHAPE instead")
    p.add_argument("--search", default="", help="filter the catalog by designation")
    p.add_argument("--extra-catalog", metavar="PATH", help="JSON file with additional standard sections")
    p.add_argument("--name", help="designation printed in the report")
    p.add_argument("--csv", metavar="PATH", help="write results to CSV")
    p.add_argument("--json", metavar="PATH", help="write results to JSON")
    p.add_argument("--html", metavar="PATH", help="write an HTML report")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def _parse_assignments(items: Sequence[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"expected FIELD=VALUE, got {item!r}")
        # snake_case names are accepted and stored under the camelCase field name
        out[_camel(key.strip())] = value.strip()
    return out


def _run_catalog(args: argparse.Namespace) -> int:
    sections = search_standard_sections(args.shape, args.search, args.extra_catalog)
    if not sections:
        print(f"No standard sections for {SHAPE_LABELS[args.shape]}.")
        return 0
    width = max(len(s.name) for s in sections)
    for s in sections:
        p = s.properties
        print(f"{s.name:<{width}}  A={format_value(p.area):>10}  Ix={format_value(p.moment_of_inertia_x):>10}"
              f"  Zx={format_value(p.section_modulus_x):>10}")
    if args.csv:
        export_catalog_csv(sections, args.csv)
    return 0


def _run_calculation(args: argparse.Namespace) -> int:
    given = _parse_assignments(args.values)
    unknown = sorted(set(given) - set(REQUIRED_FIELDS[args.shape]))
    if unknown:
        logging.warning("Ignoring fields not used by %s: %s", args.shape, ", ".join(unknown))
    merged = {**default_dimensions(args.shape).to_dict(), **given}
    result = calculate(args.shape, dimensions_from_dict(args.shape, merged))

    print(f"{SHAPE_LABELS[args.shape]} ({args.shape})")
    for field, v in result.dimensions.values().items():
        print(f"  {field} = {'-' if v is None else f'{v:g}'} {UNITS}")
    if result.properties is None:
        for msg in result.errors:
            print(f"  ! {msg}")
    else:
        for label, sym, v, unit in property_rows(args.shape, result.properties):
            print(f"  {label:<28} {sym:<3} {format_value(v):>12} {unit}")

    if args.csv:
        export_properties_csv([result], args.csv)
    if args.json:
        export_properties_json([result], args.json)
    if args.html:
        export_section_report_html(result, args.html, name=args.name)
    return 0 if result.ok else 1


def run(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    try:
        if args.catalog:
            return _run_catalog(args)
        return _run_calculation(args)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    except (SectionExportError, OSError):
        logging.exception("Export failed")
        return 2
    return 0


def main():
    sys.exit(run())
