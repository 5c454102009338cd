from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
import logging
import math

from .constants import MAX_LENGTH, MIN_LENGTH
from .model import Dimensions, coerce_dimensions

log = logging.getLogger(__name__)


@dataclass
class ValidationMessage:
    field: str  # caller-facing field name, e.g. 'outerDiameter'
    text: str


ValidationRule = Callable[[Dict[str, Optional[float]]], List[ValidationMessage]]


def _usable(v: Optional[float]) -> bool:
    return v is not None and math.isfinite(v) and v > 0


def _rule_positive_fields(vals: Dict[str, Optional[float]]) -> List[ValidationMessage]:
    return [ValidationMessage(name, f"{name} must be positive") for name, v in vals.items() if not _usable(v)]


def _rule_in_range(vals: Dict[str, Optional[float]]) -> List[ValidationMessage]:
    return [
        ValidationMessage(name, f"{name} is out of range")
        for name, v in vals.items()
        if _usable(v) and not MIN_LENGTH <= v <= MAX_LENGTH
    ]


def _rule_smaller(thin: str, wide: str, factor: float = 1.0) -> ValidationRule:
    """``factor * thin < wide``, checked only once both fields passed the positivity rule."""
    prefix = "" if factor == 1.0 else f"{factor:g} x "

    def rule(vals: Dict[str, Optional[float]]) -> List[ValidationMessage]:
        a, b = vals.get(thin), vals.get(wide)
        if not (_usable(a) and _usable(b)):
            return []
        if factor * a >= b:
            return [ValidationMessage(thin, f"{prefix}{thin} must be smaller than {wide}")]
        return []

    rule.__name__ = f"_rule_{thin}_lt_{wide}"
    return rule


# Presence and range checks run first, then cross-field consistency, in this order.
SHAPE_RULES: Dict[str, List[ValidationRule]] = {
    "circle": [_rule_positive_fields, _rule_in_range],
    "pipe": [
        _rule_positive_fields,
        _rule_in_range,
        _rule_smaller("innerDiameter", "outerDiameter"),
    ],
    "rectangle": [_rule_positive_fields, _rule_in_range],
    "box": [
        _rule_positive_fields,
        _rule_in_range,
        _rule_smaller("thickness", "outerWidth", factor=2.0),
        _rule_smaller("thickness", "outerHeight", factor=2.0),
    ],
    "h-beam": [
        _rule_positive_fields,
        _rule_in_range,
        _rule_smaller("flangeThickness", "webHeight", factor=2.0),
        _rule_smaller("webThickness", "flangeWidth"),
    ],
    "l-angle": [
        _rule_positive_fields,
        _rule_in_range,
        _rule_smaller("legThickness", "legA"),
        _rule_smaller("legThickness", "legB"),
    ],
    "channel": [
        _rule_positive_fields,
        _rule_in_range,
        _rule_smaller("channelFlangeThickness", "channelHeight", factor=2.0),
        _rule_smaller("channelWebThickness", "channelWidth"),
    ],
}


def validate_dimensions(dims: Dimensions) -> List[ValidationMessage]:
    """Run every rule of the record's shape and collect all messages."""
    vals = dims.values()
    msgs: List[ValidationMessage] = []
    for rule in SHAPE_RULES[dims.shape]:
        msgs.extend(rule(vals))
    if msgs:
        log.debug("Rejected %s dimensions %s: %s", dims.shape, vals, [m.text for m in msgs])
    return msgs


def validate(shape: str, dims: Union[Dimensions, Mapping[str, Any]]) -> List[str]:
    """Return the violation messages for *dims*; an empty list means acceptable."""
    return [m.text for m in validate_dimensions(coerce_dimensions(shape, dims))]
