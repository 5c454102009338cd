import unittest

from minisection.core.model import HBeamDimensions, PipeDimensions
from minisection.core.report_export import build_section_report_html, export_section_report_html
from minisection.core.section_props import calculate


class TestSectionReport(unittest.TestCase):
    def test_valid_section(self):
        res = calculate("h-beam", HBeamDimensions(flange_width=200.0, web_height=400.0,
                                                  flange_thickness=16.0, web_thickness=10.0))
        html = build_section_report_html(res, name="H400×200×10×16")
        self.assertIn("1. Summary", html)
        self.assertIn("3. Section properties", html)
        self.assertIn("H-beam", html)
        self.assertIn("H400×200×10×16", html)
        self.assertIn("Flange thickness tf", html)
        self.assertIn("10,080", html)
        self.assertIn("<td>OK</td>", html)

    def test_invalid_section_lists_messages(self):
        res = calculate("pipe", PipeDimensions(outer_diameter=100.0, inner_diameter=120.0))
        html = build_section_report_html(res)
        self.assertIn("3. Invalid dimensions", html)
        self.assertIn("innerDiameter must be smaller than outerDiameter", html)
        self.assertIn("1 problem(s)", html)
        self.assertNotIn("Designation", html)

    def test_values_are_escaped(self):
        res = calculate("pipe", PipeDimensions(outer_diameter=100.0, inner_diameter=80.0))
        html = build_section_report_html(res, name="<b>pipe</b>")
        self.assertIn("&lt;b&gt;pipe&lt;/b&gt;", html)
        self.assertNotIn("<b>pipe</b>", html)


def test_export_section_report_html(tmp_path):
    res = calculate("pipe", PipeDimensions(outer_diameter=100.0, inner_diameter=80.0))
    out = export_section_report_html(res, tmp_path / "report.html", name="φ100×10.0t")
    text = out.read_text(encoding="utf-8")
    assert text.startswith("<!doctype html>")
    assert "Round pipe" in text
    assert "φ100×10.0t" in text


def test_export_creates_missing_directories(tmp_path):
    res = calculate("pipe", PipeDimensions(outer_diameter=100.0, inner_diameter=80.0))
    out = export_section_report_html(res, tmp_path / "reports" / "2024" / "pipe.html")
    assert out.exists()
    assert "Units: mm" in out.read_text(encoding="utf-8")
