from __future__ import annotations

from typing import Dict, Final, Literal, Tuple

SHAPE = Literal["circle", "pipe", "rectangle", "box", "h-beam", "l-angle", "channel"]

ALL_SHAPES: Final[Tuple[SHAPE, ...]] = ("circle", "pipe", "rectangle", "box", "h-beam", "l-angle", "channel")

# Shapes whose principal axes are not through an obvious geometric center.
CENTROID_SHAPES: Final[Tuple[SHAPE, ...]] = ("l-angle", "channel")
ISOTROPIC_SHAPES: Final[Tuple[SHAPE, ...]] = ("circle", "pipe")

# Caller-facing (camelCase) field names, in input order.
REQUIRED_FIELDS: Final[Dict[str, Tuple[str, ...]]] = {
    "circle": ("diameter",),
    "pipe": ("outerDiameter", "innerDiameter"),
    "rectangle": ("width", "height"),
    "box": ("outerWidth", "outerHeight", "thickness"),
    "h-beam": ("flangeWidth", "webHeight", "flangeThickness", "webThickness"),
    "l-angle": ("legA", "legB", "legThickness"),
    "channel": ("channelWidth", "channelHeight", "channelFlangeThickness", "channelWebThickness"),
}

FIELD_LABELS: Final[Dict[str, str]] = {
    "diameter": "Diameter D",
    "outerDiameter": "Outer diameter D",
    "innerDiameter": "Inner diameter d",
    "width": "Width B",
    "height": "Height H",
    "outerWidth": "Outer width B",
    "outerHeight": "Outer height H",
    "thickness": "Wall thickness t",
    "flangeWidth": "Flange width B",
    "webHeight": "Overall height H",
    "flangeThickness": "Flange thickness tf",
    "webThickness": "Web thickness tw",
    "legA": "Leg A",
    "legB": "Leg B",
    "legThickness": "Leg thickness t",
    "channelWidth": "Flange width B",
    "channelHeight": "Overall height H",
    "channelFlangeThickness": "Flange thickness tf",
    "channelWebThickness": "Web thickness tw",
}

SHAPE_LABELS: Final[Dict[str, str]] = {
    "circle": "Solid round",
    "pipe": "Round pipe",
    "rectangle": "Solid rectangle",
    "box": "Rectangular tube",
    "h-beam": "H-beam",
    "l-angle": "Angle",
    "channel": "Channel",
}

# Values the dimension form is pre-filled with when a shape is selected (mm).
DEFAULT_DIMENSIONS: Final[Dict[str, Dict[str, float]]] = {
    "circle": {"diameter": 100.0},
    "pipe": {"outerDiameter": 100.0, "innerDiameter": 80.0},
    "rectangle": {"width": 100.0, "height": 200.0},
    "box": {"outerWidth": 100.0, "outerHeight": 200.0, "thickness": 10.0},
    "h-beam": {"flangeWidth": 200.0, "webHeight": 400.0, "flangeThickness": 16.0, "webThickness": 10.0},
    "l-angle": {"legA": 100.0, "legB": 100.0, "legThickness": 10.0},
    "channel": {
        "channelWidth": 75.0,
        "channelHeight": 150.0,
        "channelFlangeThickness": 10.0,
        "channelWebThickness": 6.0,
    },
}

UNITS: Final[str] = "mm"

# Result formatting thresholds.
EXPONENT_THRESHOLD: Final[float] = 1e6
GROUPING_THRESHOLD: Final[float] = 1000.0

# Accepted dimension range (mm); keeps fourth powers and their ratios inside float range.
MIN_LENGTH: Final[float] = 1e-50
MAX_LENGTH: Final[float] = 1e50
