from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union
import logging
import math

import numpy as np

from .model import (
    BoxDimensions,
    CalcResult,
    ChannelDimensions,
    CircleDimensions,
    Dimensions,
    HBeamDimensions,
    LAngleDimensions,
    PipeDimensions,
    RectangleDimensions,
    SectionProperties,
    SectionShapeError,
    coerce_dimensions,
)
from .validation import validate_dimensions

log = logging.getLogger(__name__)

# Every formula below assumes validated, strictly positive dimensions.
# X is the horizontal (strong) axis, Y the vertical (weak) axis.


@dataclass(frozen=True)
class _Rect:
    """Axis-aligned sub-rectangle, placed by its lower-left corner."""

    x0: float
    y0: float
    b: float  # along X
    h: float  # along Y


@dataclass(frozen=True)
class _Composite:
    area: float
    cx: float
    cy: float
    Ix: float  # about the composite centroid, horizontal axis
    Iy: float  # about the composite centroid, vertical axis


def _composite(parts: Sequence[_Rect]) -> _Composite:
    """Area-weighted centroid and parallel-axis inertias of non-overlapping rectangles."""
    b = np.array([p.b for p in parts], dtype=float)
    h = np.array([p.h for p in parts], dtype=float)
    a = b*h
    x = np.array([p.x0 for p in parts], dtype=float) + b/2.0
    y = np.array([p.y0 for p in parts], dtype=float) + h/2.0
    area = float(a.sum())
    cx = float((a*x).sum()) / area
    cy = float((a*y).sum()) / area
    Ix = float((b*h**3/12.0 + a*(y - cy)**2).sum())
    Iy = float((h*b**3/12.0 + a*(x - cx)**2).sum())
    return _Composite(area, cx, cy, Ix, Iy)


def _governing_modulus(I: float, c: float, extent: float) -> float:
    # The fibre farthest from the centroid governs.
    return I / max(c, extent - c)


def _props(A: float, Ix: float, Iy: float, Zx: float, Zy: float,
           cx: Optional[float] = None, cy: Optional[float] = None) -> SectionProperties:
    return SectionProperties(
        area=A,
        moment_of_inertia_x=Ix,
        moment_of_inertia_y=Iy,
        section_modulus_x=Zx,
        section_modulus_y=Zy,
        radius_of_gyration_x=math.sqrt(Ix/A),
        radius_of_gyration_y=math.sqrt(Iy/A),
        centroid_x=cx,
        centroid_y=cy,
    )


def circle_solid(d: float) -> SectionProperties:
    r = d/2.0
    A = math.pi*r*r
    I = math.pi*d**4/64.0
    Z = math.pi*d**3/32.0
    return _props(A, I, I, Z, Z)


def circle_hollow(D: float, d: float) -> SectionProperties:
    """Concentric round pipe, outer diameter D and inner diameter d."""
    # factored forms; D*D - d*d cancels for very thin walls
    A = math.pi/4.0*(D - d)*(D + d)
    I = math.pi/64.0*(D - d)*(D + d)*(D*D + d*d)
    Z = I/(D/2.0)
    return _props(A, I, I, Z, Z)


def rect_solid(b: float, h: float) -> SectionProperties:
    # b along X, h along Y
    A = b*h
    Ix = b*h**3/12.0
    Iy = h*b**3/12.0
    Zx = b*h**2/6.0
    Zy = h*b**2/6.0
    return _props(A, Ix, Iy, Zx, Zy)


def rect_hollow(b: float, h: float, t: float) -> SectionProperties:
    """Rectangular tube (outer b x h, uniform wall thickness t).

    Summed from two full-width walls top and bottom and two side walls of
    height ``h-2t`` between them.
    """
    hi = h - 2*t
    A = 2*t*(b + h - 2*t)
    Ix = 2*(b*t**3/12.0 + b*t*((h - t)/2.0)**2) + 2*(t*hi**3/12.0)
    Iy = 2*(t*b**3/12.0) + 2*(hi*t**3/12.0 + hi*t*((b - t)/2.0)**2)
    Zx = Ix/(h/2.0)
    Zy = Iy/(b/2.0)
    return _props(A, Ix, Iy, Zx, Zy)


def h_section(b: float, h: float, tf: float, tw: float) -> SectionProperties:
    """Doubly symmetric H/I section: flange width b, overall depth h."""
    web_h = h - 2*tf
    A = 2*b*tf + web_h*tw
    # strong axis: flanges offset by (h - tf)/2, web on the axis
    Ix = 2*(b*tf**3/12.0 + b*tf*((h - tf)/2.0)**2) + tw*web_h**3/12.0
    # weak axis: flanges and web share the vertical centerline, no offsets
    Iy = 2*(tf*b**3/12.0) + web_h*tw**3/12.0
    Zx = Ix/(h/2.0)
    Zy = Iy/(b/2.0)
    return _props(A, Ix, Iy, Zx, Zy)


def l_angle(leg_a: float, leg_b: float, t: float) -> SectionProperties:
    """Angle with leg_a along X and leg_b along Y, outer corner at the origin.

    Leg A is the full ``leg_a x t`` rectangle; leg B contributes only the
    ``t x (leg_b - t)`` part above it so the corner is counted once. The
    reported centroid is measured from the outer corner.
    """
    c = _composite([
        _Rect(0.0, 0.0, leg_a, t),
        _Rect(0.0, t, t, leg_b - t),
    ])
    Zx = _governing_modulus(c.Ix, c.cy, leg_b)
    Zy = _governing_modulus(c.Iy, c.cx, leg_a)
    return _props(c.area, c.Ix, c.Iy, Zx, Zy, c.cx, c.cy)


def channel_section(b: float, h: float, tf: float, tw: float) -> SectionProperties:
    """Channel with its web on the left; centroid_x is measured from the web's outer face."""
    web_h = h - 2*tf
    # flanges span the full width, the web fills the gap between them
    by_flanges = _composite([
        _Rect(0.0, 0.0, b, tf),
        _Rect(0.0, h - tf, b, tf),
        _Rect(0.0, tf, tw, web_h),
    ])
    # web spans the full height, flanges only protrude beyond it
    by_web = _composite([
        _Rect(0.0, 0.0, tw, h),
        _Rect(tw, 0.0, b - tw, tf),
        _Rect(tw, h - tf, b - tw, tf),
    ])
    Ix = by_web.Ix
    Iy = by_flanges.Iy
    cx = by_flanges.cx
    Zx = Ix/(h/2.0)
    Zy = _governing_modulus(Iy, cx, b)
    return _props(by_flanges.area, Ix, Iy, Zx, Zy, cx, h/2.0)


def _dispatch(dims: Dimensions) -> SectionProperties:
    if isinstance(dims, CircleDimensions):
        return circle_solid(dims.diameter)
    elif isinstance(dims, PipeDimensions):
        return circle_hollow(dims.outer_diameter, dims.inner_diameter)
    elif isinstance(dims, RectangleDimensions):
        return rect_solid(dims.width, dims.height)
    elif isinstance(dims, BoxDimensions):
        return rect_hollow(dims.outer_width, dims.outer_height, dims.thickness)
    elif isinstance(dims, HBeamDimensions):
        return h_section(dims.flange_width, dims.web_height, dims.flange_thickness, dims.web_thickness)
    elif isinstance(dims, LAngleDimensions):
        return l_angle(dims.leg_a, dims.leg_b, dims.leg_thickness)
    elif isinstance(dims, ChannelDimensions):
        return channel_section(
            dims.channel_width, dims.channel_height, dims.channel_flange_thickness, dims.channel_web_thickness
        )
    log.error("No section formula for %r", dims)
    raise SectionShapeError(f"No section formula for {type(dims).__name__}")


def compute(shape: str, dims: Union[Dimensions, Mapping[str, Any]]) -> Optional[SectionProperties]:
    """Section properties of *dims*, or ``None`` when the dimensions are invalid."""
    record = coerce_dimensions(shape, dims)
    if validate_dimensions(record):
        return None
    props = _dispatch(record)
    log.debug("Computed %s %s -> A=%g", shape, record.to_dict(), props.area)
    return props


def calculate(shape: str, dims: Union[Dimensions, Mapping[str, Any]]) -> CalcResult:
    """Like :func:`compute`, but reports the validation messages alongside."""
    record = coerce_dimensions(shape, dims)
    errors = tuple(m.text for m in validate_dimensions(record))
    if errors:
        return CalcResult(shape=shape, dimensions=record, errors=errors)
    return CalcResult(shape=shape, dimensions=record, properties=_dispatch(record))
