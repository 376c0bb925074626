from __future__ import annotations

import math
from pathlib import Path
from typing import List, Optional

from openpyxl import Workbook
from openpyxl.formatting.rule import ColorScaleRule
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from jtlstats.grouping import GROUPING_DIMENSIONS
from jtlstats.report import header_row
from jtlstats.stats import StatBlock
from jtlstats.summarizer import Summarizer, SummaryRow

HIGHLIGHT_COLUMN = "TTLB 95th Percentile"

NUMBER_FORMAT = "0.00"


def _num(value: Optional[float]) -> Optional[float]:
	if value is None or math.isnan(value):
		return None
	return value


def _block(block: Optional[StatBlock]) -> List[Optional[float]]:
	if block is None:
		return [None] * 7
	return [_num(v) for v in block.as_list()]


def row_values(row: SummaryRow, include_moving_rate: bool) -> list:
	category = "Aggregate" if row.is_aggregate else row.dimension.value
	values = [category, row.key_as_string(), row.total_count, row.failed_count]
	values += _block(row.ttfb)
	values += _block(row.ttlb)
	values.append(_num(row.overall_rate))
	if include_moving_rate:
		values += _block(row.moving_rate)
	return values


def autosize_columns(ws) -> None:
	"""
	Automatically adjust column widths based on content.
	"""
	for col in ws.columns:
		max_len = 0
		col_letter = col[0].column_letter
		for cell in col:
			value = "" if cell.value is None else str(cell.value)
			max_len = max(max_len, len(value))
		ws.column_dimensions[col_letter].width = min(max(10, max_len + 2), 45)


def add_excel_table(ws, name: str) -> None:
	if ws.max_row < 2:
		return
	ref = f"A1:{get_column_letter(ws.max_column)}{ws.max_row}"
	table = Table(displayName=name, ref=ref)
	table.tableStyleInfo = TableStyleInfo(
		name="TableStyleMedium9",
		showFirstColumn=False,
		showLastColumn=False,
		showRowStripes=True,
		showColumnStripes=False,
	)
	ws.add_table(table)


def format_sheet(ws) -> None:
	"""
	Bold header, frozen header row, two-decimal statistics, and a color scale
	over the TTLB 95th percentile column.
	"""
	header_font = Font(bold=True)
	for cell in ws[1]:
		cell.font = header_font
		cell.alignment = Alignment(horizontal="center", vertical="center")

	ws.freeze_panes = "A2"

	# Columns after Category/Key/Total/Failed hold statistics
	for col_idx in range(5, ws.max_column + 1):
		for row_idx in range(2, ws.max_row + 1):
			ws.cell(row=row_idx, column=col_idx).number_format = NUMBER_FORMAT

	headers = [c.value for c in ws[1]]
	if HIGHLIGHT_COLUMN in headers and ws.max_row >= 2:
		j = headers.index(HIGHLIGHT_COLUMN) + 1
		rng = f"{ws.cell(2, j).coordinate}:{ws.cell(ws.max_row, j).coordinate}"
		ws.conditional_formatting.add(
			rng,
			ColorScaleRule(
				start_type="min", start_color="63BE7B",
				mid_type="percentile", mid_value=50, mid_color="FFEB84",
				end_type="max", end_color="F8696B",
			)
		)

	autosize_columns(ws)


def build_workbook(summarizer: Summarizer, include_moving_rate: bool = False) -> Workbook:
	wb = Workbook()
	wb.remove(wb.active)
	header = header_row(include_moving_rate)

	ws = wb.create_sheet("Aggregate")
	ws.append(header)
	ws.append(row_values(summarizer.aggregate_summary(), include_moving_rate))
	format_sheet(ws)
	add_excel_table(ws, "T_AGGREGATE")

	computed = set(summarizer.computed_dimensions())
	for d in GROUPING_DIMENSIONS:
		if d not in computed:
			continue
		ws = wb.create_sheet(d.value[:31])
		ws.append(header)
		for s in summarizer.summaries_for(d):
			ws.append(row_values(s, include_moving_rate))
		format_sheet(ws)
		add_excel_table(ws, f"T_{d.name}")

	return wb


def write_workbook(path: Path, summarizer: Summarizer, include_moving_rate: bool = False) -> Path:
	out_path = Path(path)
	out_path.parent.mkdir(parents=True, exist_ok=True)
	build_workbook(summarizer, include_moving_rate).save(out_path)
	return out_path
