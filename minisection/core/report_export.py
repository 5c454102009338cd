from __future__ import annotations

from datetime import datetime
from html import escape
from pathlib import Path
from typing import Optional

from .constants import FIELD_LABELS, SHAPE_LABELS, UNITS
from .export_results import format_value, property_rows
from .model import CalcResult


def build_section_report_html(result: CalcResult, *, name: Optional[str] = None,
                              title: str = "miniSection cross-section report") -> str:
    summary_rows = _summary_rows(result, name)
    dim_rows = _dimension_rows(result)
    if result.properties is not None:
        results_html = _table_html(
            ["Property", "Symbol", "Value", "Unit"],
            [[label, sym, format_value(v), unit] for label, sym, v, unit in property_rows(result.shape, result.properties)],
        )
    else:
        results_html = _table_html(["Validation message"], [[msg] for msg in result.errors])

    return f"""<!doctype html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <title>{escape(title)}</title>
  <style>
    body {{ font-family: 'Segoe UI', Arial, sans-serif; margin: 18px 24px; color: #222; }}
    h1 {{ font-size: 22px; margin: 0 0 8px; }}
    h2 {{ font-size: 16px; margin: 18px 0 8px; border-left: 4px solid #2f6fab; padding-left: 8px; }}
    .meta {{ color: #666; font-size: 12px; margin-bottom: 8px; }}
    table {{ width: 100%; border-collapse: collapse; font-size: 12px; margin: 6px 0 10px; }}
    th, td {{ border: 1px solid #d9d9d9; padding: 6px; text-align: left; vertical-align: top; }}
    th {{ background: #f6f8fa; }}
    .muted {{ color: #777; font-style: italic; }}
  </style>
</head>
<body>
  <h1>{escape(title)}</h1>
  <div class=\"meta\">Generated: {datetime.now().isoformat(timespec="seconds")} | Units: {UNITS}</div>

  <h2>1. Summary</h2>
  {_table_html(['Item', 'Value'], summary_rows)}

  <h2>2. Dimensions</h2>
  {_table_html(['Dimension', 'Field', f'Value ({UNITS})'], dim_rows)}

  <h2>3. {'Section properties' if result.properties is not None else 'Invalid dimensions'}</h2>
  {results_html}
</body>
</html>
"""


def export_section_report_html(result: CalcResult, output_path: str | Path, *, name: Optional[str] = None) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(build_section_report_html(result, name=name), encoding="utf-8")
    return path


def _table_html(headers: list[str], rows: list[list[str]]) -> str:
    thead = "".join(f"<th>{escape(h)}</th>" for h in headers)
    if not rows:
        tbody = f"<tr><td class='muted' colspan='{len(headers)}'>No data</td></tr>"
    else:
        body_rows = []
        for row in rows:
            body_rows.append("<tr>" + "".join(f"<td>{escape(str(v))}</td>" for v in row) + "</tr>")
        tbody = "".join(body_rows)
    return f"<table><thead><tr>{thead}</tr></thead><tbody>{tbody}</tbody></table>"


def _summary_rows(result: CalcResult, name: Optional[str]) -> list[list[str]]:
    rows = [["Shape", SHAPE_LABELS.get(result.shape, result.shape)]]
    if name:
        rows.append(["Designation", name])
    rows.append(["Status", "OK" if result.ok else f"{len(result.errors)} problem(s)"])
    return rows


def _dimension_rows(result: CalcResult) -> list[list[str]]:
    rows: list[list[str]] = []
    for field, v in result.dimensions.values().items():
        rows.append([FIELD_LABELS.get(field, field), field, "-" if v is None else f"{v:g}"])
    return rows
