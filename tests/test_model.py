import dataclasses
import unittest

from minisection.core.model import (
    CalcResult,
    ChannelDimensions,
    CircleDimensions,
    HBeamDimensions,
    PipeDimensions,
    SectionProperties,
    SectionShapeError,
    coerce_dimensions,
    default_dimensions,
    dimensions_from_dict,
)


class TestDimensions(unittest.TestCase):
    def test_from_dict_accepts_camel_and_snake_case(self):
        a = dimensions_from_dict("pipe", {"outerDiameter": 100, "innerDiameter": 80})
        b = dimensions_from_dict("pipe", {"outer_diameter": "100", "inner_diameter": 80.0})
        self.assertEqual(a, PipeDimensions(outer_diameter=100.0, inner_diameter=80.0))
        self.assertEqual(a, b)

    def test_from_dict_ignores_fields_of_other_shapes(self):
        dims = dimensions_from_dict("circle", {"diameter": 50, "width": 10, "legA": 3})
        self.assertEqual(dims, CircleDimensions(diameter=50.0))

    def test_blank_and_unparseable_values_become_missing(self):
        dims = dimensions_from_dict("pipe", {"outerDiameter": "  ", "innerDiameter": "n/a"})
        self.assertIsNone(dims.outer_diameter)
        self.assertIsNone(dims.inner_diameter)

    def test_to_dict_uses_caller_names_and_skips_missing(self):
        dims = ChannelDimensions(channel_width=75.0, channel_height=150.0)
        self.assertEqual(dims.to_dict(), {"channelWidth": 75.0, "channelHeight": 150.0})
        self.assertEqual(
            list(dims.values()),
            ["channelWidth", "channelHeight", "channelFlangeThickness", "channelWebThickness"],
        )

    def test_records_are_immutable(self):
        dims = CircleDimensions(diameter=10.0)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            dims.diameter = 20.0

    def test_shape_tags(self):
        self.assertEqual(CircleDimensions.shape, "circle")
        self.assertEqual(HBeamDimensions().shape, "h-beam")

    def test_coerce_rejects_foreign_records_and_unknown_shapes(self):
        with self.assertRaises(SectionShapeError):
            coerce_dimensions("circle", PipeDimensions(outer_diameter=1.0, inner_diameter=0.5))
        with self.assertRaises(SectionShapeError):
            dimensions_from_dict("octagon", {})

    def test_default_dimensions(self):
        self.assertEqual(default_dimensions("circle"), CircleDimensions(diameter=100.0))
        self.assertEqual(
            default_dimensions("h-beam"),
            HBeamDimensions(flange_width=200.0, web_height=400.0, flange_thickness=16.0, web_thickness=10.0),
        )
        with self.assertRaises(SectionShapeError):
            default_dimensions("ellipse")


class TestSectionProperties(unittest.TestCase):
    def test_to_dict_omits_absent_centroid(self):
        props = SectionProperties(1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0)
        d = props.to_dict()
        self.assertEqual(d["momentOfInertiaX"], 2.0)
        self.assertEqual(d["radiusOfGyrationY"], 7.0)
        self.assertNotIn("centroidX", d)
        self.assertNotIn("centroidY", d)

    def test_to_dict_keeps_centroid_when_present(self):
        props = SectionProperties(1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, centroid_x=8.0, centroid_y=9.0)
        d = props.to_dict()
        self.assertEqual((d["centroidX"], d["centroidY"]), (8.0, 9.0))

    def test_calc_result_ok(self):
        dims = CircleDimensions()
        self.assertFalse(CalcResult("circle", dims, errors=("diameter must be positive",)).ok)
        props = SectionProperties(1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0)
        self.assertTrue(CalcResult("circle", CircleDimensions(diameter=1.0), properties=props).ok)


if __name__ == "__main__":
    unittest.main()
