import json
import unittest

from minisection.core.library_store import (
    builtin_catalog_path,
    find_standard_section,
    load_catalog,
    load_standard_sections,
    search_standard_sections,
    section_name,
)
from minisection.core.model import (
    ChannelDimensions,
    HBeamDimensions,
    PipeDimensions,
    RectangleDimensions,
    SectionShapeError,
)
from minisection.core.section_props import compute


class TestBuiltinCatalog(unittest.TestCase):
    def test_builtin_file_is_packaged(self):
        self.assertTrue(builtin_catalog_path().exists())

    def test_entry_counts_per_shape(self):
        counts = {shape: len(v) for shape, v in load_catalog().items()}
        self.assertEqual(
            counts,
            {"circle": 16, "pipe": 13, "rectangle": 0, "box": 25, "h-beam": 53, "l-angle": 29, "channel": 9},
        )

    def test_designations(self):
        catalog = load_catalog()
        self.assertEqual(catalog["circle"][0].name, "φ10")
        self.assertEqual(catalog["pipe"][0].name, "φ21.7×2.9t")
        self.assertEqual(catalog["box"][0].name, "□50×50×2.3")
        self.assertEqual(catalog["h-beam"][0].name, "H100×50×5×7")
        self.assertEqual(catalog["l-angle"][0].name, "L25×25×3")
        self.assertEqual(catalog["channel"][0].name, "[75×40×5×5")

    def test_ids_are_unique_within_a_shape(self):
        for shape, sections in load_catalog().items():
            ids = [s.id for s in sections]
            self.assertEqual(len(ids), len(set(ids)), shape)

    def test_properties_match_direct_computation(self):
        sec = load_standard_sections("h-beam")[0]
        self.assertEqual(sec.properties, compute("h-beam", sec.dimensions))
        self.assertEqual(sec.to_dict()["type"], "h-beam")
        self.assertEqual(sec.to_dict()["dimensions"]["webHeight"], 100.0)

    def test_unknown_shape(self):
        with self.assertRaises(SectionShapeError):
            load_standard_sections("hexagon")


class TestSearch(unittest.TestCase):
    def test_case_insensitive_substring(self):
        names = [s.name for s in search_standard_sections("h-beam", "h400")]
        self.assertEqual(names, ["H400×200×8×13", "H400×400×13×21"])

    def test_blank_query_returns_everything(self):
        self.assertEqual(len(search_standard_sections("channel", "  ")), 9)

    def test_find_by_exact_name(self):
        sec = find_standard_section("L75×50×6")
        self.assertEqual(sec.shape, "l-angle")
        self.assertIsNotNone(sec.properties.centroid_x)

    def test_find_unknown_name(self):
        with self.assertRaises(ValueError):
            find_standard_section("H9999×1×1×1")


class TestSectionName(unittest.TestCase):
    def test_pipe_wall_is_rounded(self):
        self.assertEqual(section_name(PipeDimensions(outer_diameter=48.6, inner_diameter=42.6)), "φ48.6×3.0t")

    def test_h_beam_and_channel_order(self):
        self.assertEqual(
            section_name(HBeamDimensions(flange_width=200, web_height=400, flange_thickness=13, web_thickness=8)),
            "H400×200×8×13",
        )
        self.assertEqual(
            section_name(ChannelDimensions(channel_width=75, channel_height=150,
                                           channel_flange_thickness=10, channel_web_thickness=6.5)),
            "[150×75×6.5×10",
        )

    def test_rectangle(self):
        self.assertEqual(section_name(RectangleDimensions(width=100, height=200)), "100×200")


def test_extra_catalog_is_merged_by_name(tmp_path):
    extra = tmp_path / "extra.json"
    extra.write_text(json.dumps({"sections": {
        "circle": [{"diameter": 10}, {"diameter": 120}],
        "pipe": [{"outerDiameter": 50, "innerDiameter": 60}],
        "octagon": [{"side": 1}],
    }}), encoding="utf-8")

    catalog = load_catalog(extra)
    assert len(catalog["circle"]) == 17
    added = catalog["circle"][-1]
    assert added.name == "φ120"
    assert added.id == "circle-17"
    # The invalid pipe is skipped.
    assert len(catalog["pipe"]) == 13
    assert "octagon" not in catalog


def test_unreadable_extra_catalog_is_ignored(tmp_path):
    extra = tmp_path / "broken.json"
    extra.write_text("{not json", encoding="utf-8")
    assert len(load_standard_sections("circle", extra)) == 16
    assert len(load_standard_sections("circle", tmp_path / "missing.json")) == 16


def test_search_includes_extra_entries(tmp_path):
    extra = tmp_path / "extra.json"
    extra.write_text(json.dumps({"sections": {"l-angle": [{"legA": 200, "legB": 90, "legThickness": 9}]}}),
                     encoding="utf-8")
    names = [s.name for s in search_standard_sections("l-angle", "l200", extra)]
    assert "L200×90×9" in names
