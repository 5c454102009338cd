"""Cross-section property calculator for standard structural profiles."""

__version__ = "0.1.0"

from .core.model import (  # noqa: E402
    BoxDimensions,
    CalcResult,
    ChannelDimensions,
    CircleDimensions,
    HBeamDimensions,
    LAngleDimensions,
    PipeDimensions,
    RectangleDimensions,
    SectionProperties,
    SectionShapeError,
    default_dimensions,
    dimensions_from_dict,
)
from .core.section_props import calculate, compute  # noqa: E402
from .core.validation import validate  # noqa: E402

__all__ = [
    "BoxDimensions",
    "CalcResult",
    "ChannelDimensions",
    "CircleDimensions",
    "HBeamDimensions",
    "LAngleDimensions",
    "PipeDimensions",
    "RectangleDimensions",
    "SectionProperties",
    "SectionShapeError",
    "calculate",
    "compute",
    "default_dimensions",
    "dimensions_from_dict",
    "validate",
]
