"""
CSV summary output and timestamp marker files.

The summary has one "Aggregate" row followed by one row per key for each
grouping dimension. Cells that do not apply to a row, or statistics with no
samples behind them, are written as "-".
"""

from __future__ import annotations

import csv
import io
import math
from pathlib import Path
from typing import List, Optional, Tuple

from jtlstats.grouping import GROUPING_DIMENSIONS
from jtlstats.stats import StatBlock
from jtlstats.summarizer import Summarizer, SummaryRow

NOT_APPLICABLE = "-"

STAT_NAMES = ["Mean", "Median", "Stdev", "Minimum", "Maximum", "5th Percentile", "95th Percentile"]

BASE_HEADER = (
	["Category", "Key", "Total Requests Made", "Failed Requests"]
	+ [f"TTFB {s}" for s in STAT_NAMES]
	+ [f"TTLB {s}" for s in STAT_NAMES]
	+ ["Overall TPS"]
)

MOVING_HEADER = [f"Moving TPS {s}" for s in STAT_NAMES]


def fmt_num(value: Optional[float]) -> str:
	if value is None or math.isnan(value):
		return NOT_APPLICABLE
	return f"{value:.2f}"


def fmt_block(block: Optional[StatBlock]) -> List[str]:
	if block is None:
		return [NOT_APPLICABLE] * len(STAT_NAMES)
	return [fmt_num(v) for v in block.as_list()]


def header_row(include_moving_rate: bool) -> List[str]:
	return BASE_HEADER + (MOVING_HEADER if include_moving_rate else [])


def summary_row_cells(row: SummaryRow, include_moving_rate: bool) -> List[str]:
	category = "Aggregate" if row.is_aggregate else row.dimension.value
	cells = [
		category,
		row.key_as_string(),
		str(row.total_count),
		str(row.failed_count),
	]
	cells += fmt_block(row.ttfb)
	cells += fmt_block(row.ttlb)
	cells.append(fmt_num(row.overall_rate))
	if include_moving_rate:
		cells += fmt_block(row.moving_rate)
	return cells


def summary_rows(summarizer: Summarizer, include_moving_rate: bool = False) -> List[List[str]]:
	"""Header plus every summary row, in report order."""
	rows = [header_row(include_moving_rate)]
	rows.append(summary_row_cells(summarizer.aggregate_summary(), include_moving_rate))
	computed = set(summarizer.computed_dimensions())
	for d in GROUPING_DIMENSIONS:
		if d not in computed:
			continue
		for s in summarizer.summaries_for(d):
			rows.append(summary_row_cells(s, include_moving_rate))
	return rows


def summary_csv_text(summarizer: Summarizer, include_moving_rate: bool = False) -> str:
	buf = io.StringIO()
	w = csv.writer(buf, lineterminator="\n")
	w.writerows(summary_rows(summarizer, include_moving_rate))
	return buf.getvalue()


def write_summary(path: Path, text: str) -> None:
	path = Path(path)
	path.parent.mkdir(parents=True, exist_ok=True)
	with path.open("w", newline="") as f:
		f.write(text)


def timestamp_seconds(summarizer: Summarizer) -> Tuple[int, int]:
	"""First and last record timestamps, floored to whole seconds."""
	return summarizer.first_timestamp_ms() // 1000, summarizer.last_timestamp_ms() // 1000


def write_timestamp_files(directory: Path, summarizer: Summarizer) -> Tuple[Path, Path]:
	"""
	Write start.ts and end.ts into directory, each holding a unix epoch second.
	"""
	directory = Path(directory)
	start_sec, end_sec = timestamp_seconds(summarizer)
	start_path = directory / "start.ts"
	end_path = directory / "end.ts"
	start_path.write_text(str(start_sec))
	end_path.write_text(str(end_sec))
	return start_path, end_path
