from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .constants import ALL_SHAPES
from .model import (
    BoxDimensions,
    ChannelDimensions,
    CircleDimensions,
    Dimensions,
    HBeamDimensions,
    LAngleDimensions,
    PipeDimensions,
    SectionProperties,
    SectionShapeError,
    dimensions_from_dict,
)
from .section_props import compute

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StandardSection:
    id: str
    name: str
    shape: str
    dimensions: Dimensions
    properties: SectionProperties

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.shape,
            "dimensions": self.dimensions.to_dict(),
            "properties": self.properties.to_dict(),
        }


def _builtin_data_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "data"


def builtin_catalog_path() -> Path:
    return _builtin_data_dir() / "standard_sections.json"


def _read_json(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        log.warning("Could not read section catalog %s", path, exc_info=True)
        return {}


def _num(v: Optional[float]) -> str:
    # 34.0 -> '34', 21.7 -> '21.7'
    return f"{v:g}"


def section_name(dims: Dimensions) -> str:
    """Designation of a catalog entry, e.g. ``H400×200×8×13`` or ``L75×50×6``."""
    if isinstance(dims, CircleDimensions):
        return f"φ{_num(dims.diameter)}"
    if isinstance(dims, PipeDimensions):
        t = (dims.outer_diameter - dims.inner_diameter)/2.0
        return f"φ{_num(dims.outer_diameter)}×{t:.1f}t"
    if isinstance(dims, BoxDimensions):
        return f"□{_num(dims.outer_width)}×{_num(dims.outer_height)}×{_num(dims.thickness)}"
    if isinstance(dims, HBeamDimensions):
        return (f"H{_num(dims.web_height)}×{_num(dims.flange_width)}"
                f"×{_num(dims.web_thickness)}×{_num(dims.flange_thickness)}")
    if isinstance(dims, LAngleDimensions):
        return f"L{_num(dims.leg_a)}×{_num(dims.leg_b)}×{_num(dims.leg_thickness)}"
    if isinstance(dims, ChannelDimensions):
        return (f"[{_num(dims.channel_height)}×{_num(dims.channel_width)}"
                f"×{_num(dims.channel_web_thickness)}×{_num(dims.channel_flange_thickness)}")
    # Plain rectangles have no standard designation.
    return "×".join(_num(v) for v in dims.values().values())


@lru_cache(maxsize=None)
def _cached_compute(dims: Dimensions) -> Optional[SectionProperties]:
    # Results are pure functions of the frozen dimension record; never invalidated.
    return compute(dims.shape, dims)


def _build_sections(shape: str, entries: Iterable[dict]) -> List[StandardSection]:
    out: List[StandardSection] = []
    for i, raw in enumerate(entries):
        dims = dimensions_from_dict(shape, raw)
        props = _cached_compute(dims)
        if props is None:
            log.warning("Skipping invalid %s catalog entry %s", shape, raw)
            continue
        out.append(StandardSection(f"{shape}-{i}", section_name(dims), shape, dims, props))
    return out


def merge_by_name(existing: List[StandardSection], incoming: Iterable[StandardSection]) -> None:
    """Append incoming entries whose name is not yet in *existing*."""
    existing_names = {s.name for s in existing}
    for sec in incoming:
        if not sec.name or sec.name in existing_names:
            continue
        existing.append(sec)
        existing_names.add(sec.name)


def load_catalog(extra_path: str | Path | None = None) -> Dict[str, List[StandardSection]]:
    """All standard sections keyed by shape, built-in data first.

    Entries from *extra_path* (same JSON layout as the built-in file) are merged
    in by designation; duplicates of a built-in name are ignored.
    """
    builtin = _read_json(builtin_catalog_path()).get("sections", {})
    catalog = {shape: _build_sections(shape, builtin.get(shape, [])) for shape in ALL_SHAPES}
    if extra_path is not None:
        extra = _read_json(Path(extra_path)).get("sections", {})
        for shape, entries in extra.items():
            if shape not in catalog:
                log.warning("Ignoring catalog entries for unknown shape %r", shape)
                continue
            incoming = _build_sections(shape, entries)
            # Keep ids unique within the shape.
            offset = len(catalog[shape])
            incoming = [
                StandardSection(f"{shape}-{offset + k}", s.name, s.shape, s.dimensions, s.properties)
                for k, s in enumerate(incoming)
            ]
            merge_by_name(catalog[shape], incoming)
    return catalog


def load_standard_sections(shape: str, extra_path: str | Path | None = None) -> List[StandardSection]:
    if shape not in ALL_SHAPES:
        raise SectionShapeError(f"Unknown section shape {shape!r}")
    return load_catalog(extra_path)[shape]


def search_standard_sections(shape: str, query: str = "", extra_path: str | Path | None = None) -> List[StandardSection]:
    """Case-insensitive substring match on the designation; a blank query returns everything."""
    sections = load_standard_sections(shape, extra_path)
    q = query.strip().lower()
    if not q:
        return sections
    return [s for s in sections if q in s.name.lower()]


def find_standard_section(name: str, extra_path: str | Path | None = None) -> StandardSection:
    for sections in load_catalog(extra_path).values():
        for sec in sections:
            if sec.name == name:
                return sec
    raise ValueError(
        f"Standard section '{name}' not found. "
        f"Use load_standard_sections() to see available designations."
    )
