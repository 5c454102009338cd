"""Write every built-in standard section, with computed properties, to CSV.

Usage:
    python tools/generate_catalog.py [OUTPUT.csv]
"""
from __future__ import annotations
from pathlib import Path
import sys

from minisection.core.export_results import export_catalog_csv
from minisection.core.library_store import load_catalog

ROOT = Path(__file__).resolve().parents[1]
OUT = ROOT / 'standard_sections.csv'


def main(argv: list[str]) -> None:
    out = Path(argv[0]) if argv else OUT
    catalog = load_catalog()
    sections = [s for shape_sections in catalog.values() for s in shape_sections]
    export_catalog_csv(sections, out)
    counts = ', '.join(f'{shape}={len(v)}' for shape, v in catalog.items())
    print(f'Wrote {len(sections)} sections to {out} ({counts})')


if __name__ == '__main__':
    main(sys.argv[1:])
