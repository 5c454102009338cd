from __future__ import annotations
from dataclasses import dataclass, fields, asdict
from collections.abc import Mapping
from typing import Any, ClassVar, Dict, Optional, Tuple, Type, Union
import logging

from .constants import DEFAULT_DIMENSIONS

log = logging.getLogger(__name__)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class SectionShapeError(ValueError):
    """Raised when a shape tag is unknown or does not match its dimension record."""


@dataclass(frozen=True)
class _DimensionsBase:
    # Every field is a length in mm; None means the caller left it empty.
    shape: ClassVar[str] = ""

    def values(self) -> Dict[str, Optional[float]]:
        """Field values keyed by caller-facing (camelCase) name, in declaration order."""
        return {_camel(f.name): getattr(self, f.name) for f in fields(self)}

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in self.values().items() if v is not None}


@dataclass(frozen=True)
class CircleDimensions(_DimensionsBase):
    shape: ClassVar[str] = "circle"
    diameter: Optional[float] = None


@dataclass(frozen=True)
class PipeDimensions(_DimensionsBase):
    shape: ClassVar[str] = "pipe"
    outer_diameter: Optional[float] = None
    inner_diameter: Optional[float] = None


@dataclass(frozen=True)
class RectangleDimensions(_DimensionsBase):
    shape: ClassVar[str] = "rectangle"
    width: Optional[float] = None
    height: Optional[float] = None


@dataclass(frozen=True)
class BoxDimensions(_DimensionsBase):
    # Uniform wall thickness on all four sides.
    shape: ClassVar[str] = "box"
    outer_width: Optional[float] = None
    outer_height: Optional[float] = None
    thickness: Optional[float] = None


@dataclass(frozen=True)
class HBeamDimensions(_DimensionsBase):
    # web_height is the overall depth including both flanges.
    shape: ClassVar[str] = "h-beam"
    flange_width: Optional[float] = None
    web_height: Optional[float] = None
    flange_thickness: Optional[float] = None
    web_thickness: Optional[float] = None


@dataclass(frozen=True)
class LAngleDimensions(_DimensionsBase):
    # leg_a runs along X, leg_b along Y, both measured from the outer corner.
    shape: ClassVar[str] = "l-angle"
    leg_a: Optional[float] = None
    leg_b: Optional[float] = None
    leg_thickness: Optional[float] = None


@dataclass(frozen=True)
class ChannelDimensions(_DimensionsBase):
    shape: ClassVar[str] = "channel"
    channel_width: Optional[float] = None
    channel_height: Optional[float] = None
    channel_flange_thickness: Optional[float] = None
    channel_web_thickness: Optional[float] = None


Dimensions = Union[
    CircleDimensions,
    PipeDimensions,
    RectangleDimensions,
    BoxDimensions,
    HBeamDimensions,
    LAngleDimensions,
    ChannelDimensions,
]

DIMENSION_TYPES: Dict[str, Type[_DimensionsBase]] = {
    cls.shape: cls
    for cls in (
        CircleDimensions,
        PipeDimensions,
        RectangleDimensions,
        BoxDimensions,
        HBeamDimensions,
        LAngleDimensions,
        ChannelDimensions,
    )
}


def _coerce_length(key: str, raw: Any) -> Optional[float]:
    if raw is None:
        return None
    if isinstance(raw, str) and not raw.strip():
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        # Unparseable form input counts as a missing value.
        log.debug("Ignoring non-numeric value %r for %s", raw, key)
        return None


def dimensions_from_dict(shape: str, data: Mapping[str, Any]) -> Dimensions:
    """Build the dimension record for *shape* from a flat mapping.

    Keys may be camelCase (``outerDiameter``) or snake_case
    (``outer_diameter``); keys that do not belong to the shape are ignored.
    """
    cls = DIMENSION_TYPES.get(shape)
    if cls is None:
        raise SectionShapeError(f"Unknown section shape {shape!r}")
    kwargs: Dict[str, Optional[float]] = {}
    for f in fields(cls):
        camel = _camel(f.name)
        if camel in data:
            kwargs[f.name] = _coerce_length(camel, data[camel])
        elif f.name in data:
            kwargs[f.name] = _coerce_length(f.name, data[f.name])
    return cls(**kwargs)  # type: ignore[return-value]


def coerce_dimensions(shape: str, dims: Union[Dimensions, Mapping[str, Any]]) -> Dimensions:
    """Accept a dimension record or a mapping and check it belongs to *shape*."""
    if shape not in DIMENSION_TYPES:
        raise SectionShapeError(f"Unknown section shape {shape!r}")
    if isinstance(dims, Mapping):
        return dimensions_from_dict(shape, dims)
    if not isinstance(dims, DIMENSION_TYPES[shape]):
        raise SectionShapeError(
            f"{type(dims).__name__} does not describe a {shape!r} section"
        )
    return dims


def default_dimensions(shape: str) -> Dimensions:
    """Dimensions a new calculation of *shape* starts from."""
    if shape not in DEFAULT_DIMENSIONS:
        raise SectionShapeError(f"Unknown section shape {shape!r}")
    return dimensions_from_dict(shape, DEFAULT_DIMENSIONS[shape])


@dataclass(frozen=True)
class SectionProperties:
    # mm, mm^2, mm^3, mm^4. X is the strong (horizontal) axis.
    area: float
    moment_of_inertia_x: float
    moment_of_inertia_y: float
    section_modulus_x: float
    section_modulus_y: float
    radius_of_gyration_x: float
    radius_of_gyration_y: float
    centroid_x: Optional[float] = None
    centroid_y: Optional[float] = None

    def to_dict(self) -> Dict[str, float]:
        return {_camel(k): v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class CalcResult:
    """Outcome of one calculation: a property record or the reasons there is none."""

    shape: str
    dimensions: Dimensions
    properties: Optional[SectionProperties] = None
    errors: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.properties is not None and not self.errors
