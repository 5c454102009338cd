"""Minimal section property demos.

Usage:
    python examples/section_demo.py

Requires numpy installed in the runtime environment.
"""
from __future__ import annotations

from minisection import HBeamDimensions, LAngleDimensions, PipeDimensions, calculate, compute, validate
from minisection.core.export_results import format_value, property_rows


def run_demo(shape: str, dims) -> None:
    res = calculate(shape, dims)
    print(f"\n[{shape}] {dims.to_dict()}")
    if not res.ok:
        for msg in res.errors:
            print(f"  invalid: {msg}")
        return
    for label, sym, v, unit in property_rows(shape, res.properties):
        print(f"  {sym:<3} {format_value(v):>12} {unit}  ({label})")


if __name__ == "__main__":
    run_demo("h-beam", HBeamDimensions(flange_width=200, web_height=400, flange_thickness=16, web_thickness=10))
    run_demo("l-angle", LAngleDimensions(leg_a=75, leg_b=50, leg_thickness=6))
    run_demo("pipe", PipeDimensions(outer_diameter=100, inner_diameter=120))

    # Plain mappings work too, e.g. straight from a form.
    print("\n", validate("channel", {"channelWidth": 75, "channelHeight": 150}))
    print(compute("circle", {"diameter": "100"}))
