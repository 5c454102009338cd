from __future__ import annotations

import csv
import json
import platform
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .. import __version__
from .constants import (
    CENTROID_SHAPES,
    EXPONENT_THRESHOLD,
    GROUPING_THRESHOLD,
    ISOTROPIC_SHAPES,
    REQUIRED_FIELDS,
    UNITS,
)
from .library_store import StandardSection
from .model import CalcResult, SectionProperties


class SectionExportError(RuntimeError):
    """Raised when there is nothing valid to export."""


PropertyRow = Tuple[str, str, float, str]  # label, symbol, value, unit

PROPERTY_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("area", "A_mm2"),
    ("centroid_x", "Cx_mm"),
    ("centroid_y", "Cy_mm"),
    ("moment_of_inertia_x", "Ix_mm4"),
    ("moment_of_inertia_y", "Iy_mm4"),
    ("section_modulus_x", "Zx_mm3"),
    ("section_modulus_y", "Zy_mm3"),
    ("radius_of_gyration_x", "ix_mm"),
    ("radius_of_gyration_y", "iy_mm"),
)


def format_value(value: float) -> str:
    """Format a property for display: 4.909e+6, 98,174.8, 12.50, 0.1235."""
    if value == 0:
        return "0"
    mag = abs(value)
    if mag >= EXPONENT_THRESHOLD:
        mantissa, exp = f"{value:.3e}".split("e")
        return f"{mantissa}e{int(exp):+d}"
    if mag >= GROUPING_THRESHOLD:
        text = f"{value:,.1f}"
        return text[:-2] if text.endswith(".0") else text
    if mag >= 1:
        return f"{value:.2f}"
    return f"{value:#.4g}"


def property_rows(shape: str, props: SectionProperties) -> List[PropertyRow]:
    """Labelled result rows; round shapes get a single I/Z/i row each."""
    rows: List[PropertyRow] = [("Area", "A", props.area, f"{UNITS}²")]
    if shape in CENTROID_SHAPES:
        if props.centroid_x is not None:
            rows.append(("Centroid X", "Cx", props.centroid_x, UNITS))
        if props.centroid_y is not None:
            rows.append(("Centroid Y", "Cy", props.centroid_y, UNITS))
    if shape in ISOTROPIC_SHAPES:
        rows += [
            ("Moment of inertia", "I", props.moment_of_inertia_x, f"{UNITS}⁴"),
            ("Section modulus", "Z", props.section_modulus_x, f"{UNITS}³"),
            ("Radius of gyration", "i", props.radius_of_gyration_x, UNITS),
        ]
    else:
        rows += [
            ("Moment of inertia about X", "Ix", props.moment_of_inertia_x, f"{UNITS}⁴"),
            ("Moment of inertia about Y", "Iy", props.moment_of_inertia_y, f"{UNITS}⁴"),
            ("Section modulus about X", "Zx", props.section_modulus_x, f"{UNITS}³"),
            ("Section modulus about Y", "Zy", props.section_modulus_y, f"{UNITS}³"),
            ("Radius of gyration about X", "ix", props.radius_of_gyration_x, UNITS),
            ("Radius of gyration about Y", "iy", props.radius_of_gyration_y, UNITS),
        ]
    return rows


def _property_columns(records: Sequence[Optional[SectionProperties]]) -> Dict[str, np.ndarray]:
    cols: Dict[str, np.ndarray] = {}
    for attr, header in PROPERTY_COLUMNS:
        values = [getattr(p, attr) if p is not None else None for p in records]
        cols[header] = np.array([np.nan if v is None else v for v in values], dtype=float)
    return cols


def _cell(v: float) -> Any:
    return "" if np.isnan(v) else float(v)


def _dimension_fields(shapes: Iterable[str]) -> List[str]:
    names: List[str] = []
    for shape in shapes:
        for name in REQUIRED_FIELDS[shape]:
            if name not in names:
                names.append(name)
    return names


def export_properties_csv(results: Iterable[CalcResult], csv_path: str | Path) -> Path:
    """One row per calculation: shape, dimensions, properties and any validation errors."""
    results = list(results)
    if not results:
        raise SectionExportError("No calculation results to export.")

    dim_fields = _dimension_fields(r.shape for r in results)
    cols = _property_columns([r.properties for r in results])

    fieldnames = ["shape", *[f"{f}_mm" for f in dim_fields], *cols.keys(), "errors"]
    out = Path(csv_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="", encoding="utf-8-sig") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for idx, res in enumerate(results):
            dims = res.dimensions.values()
            row: Dict[str, Any] = {"shape": res.shape, "errors": "; ".join(res.errors)}
            for name in dim_fields:
                v = dims.get(name)
                row[f"{name}_mm"] = "" if v is None else float(v)
            for key, values in cols.items():
                row[key] = _cell(values[idx])
            writer.writerow(row)
    return out


def export_catalog_csv(sections: Iterable[StandardSection], csv_path: str | Path) -> Path:
    sections = list(sections)
    if not sections:
        raise SectionExportError("No standard sections to export.")

    dim_fields = _dimension_fields(s.shape for s in sections)
    cols = _property_columns([s.properties for s in sections])

    fieldnames = ["id", "name", "shape", *[f"{f}_mm" for f in dim_fields], *cols.keys()]
    out = Path(csv_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="", encoding="utf-8-sig") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for idx, sec in enumerate(sections):
            dims = sec.dimensions.values()
            row: Dict[str, Any] = {"id": sec.id, "name": sec.name, "shape": sec.shape}
            for name in dim_fields:
                v = dims.get(name)
                row[f"{name}_mm"] = "" if v is None else float(v)
            for key, values in cols.items():
                row[key] = _cell(values[idx])
            writer.writerow(row)
    return out


def result_to_dict(res: CalcResult) -> Dict[str, Any]:
    return {
        "type": res.shape,
        "dimensions": res.dimensions.to_dict(),
        "properties": res.properties.to_dict() if res.properties is not None else None,
        "errors": list(res.errors),
    }


def export_properties_json(results: Iterable[CalcResult], json_path: str | Path) -> Path:
    results = list(results)
    if not results:
        raise SectionExportError("No calculation results to export.")
    payload = {
        "app": "miniSection",
        "version": __version__,
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "python": platform.python_version(),
        "units": UNITS,
        "results": [result_to_dict(r) for r in results],
    }
    out = Path(json_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return out
