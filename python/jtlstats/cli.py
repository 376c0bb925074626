#!/usr/bin/env python3
"""
jtl-stats: summary statistics from a JMeter JTL file.

Reads a JTL CSV file and prints a CSV summary: one aggregate row, then one row
per unique method+uripath, response code, response size and request body size.
Each row carries count, failures, and mean/median/stdev/min/max/p5/p95 for
time-to-first-byte and time-to-last-byte. The aggregate row also carries the
overall TPS rate and, with -m, statistics over the per-second TPS series.

Usage:
  jtl-stats results.jtl [-o summary.csv] [-t ts_dir] [-m] [--xlsx out.xlsx] [--plot-dir plots]
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from jtlstats.errors import JtlStatsError
from jtlstats.excel import write_workbook
from jtlstats.grouping import GROUPING_DIMENSIONS, Dimension
from jtlstats.ingest import load_jtl
from jtlstats.logconfig import setup_logging
from jtlstats.plots import write_plots
from jtlstats.records import RejectedRow
from jtlstats.report import summary_csv_text, write_summary, write_timestamp_files
from jtlstats.summarizer import Summarizer

logger = logging.getLogger(__name__)


@dataclass
class Args:
	jtl: str
	out: Optional[str]
	timestamp_dir: Optional[str]
	moving_rate: bool
	xlsx: Optional[str]
	plot_dir: Optional[str]
	verbose: bool


def parse_args(argv=None) -> Args:
	p = argparse.ArgumentParser(description="Summary statistics from a JMeter JTL file")
	p.add_argument("jtl", help="Path to the JTL CSV file")
	p.add_argument("-o", "--output", help="Write the CSV summary here instead of stdout")
	p.add_argument("-t", "--timestamp-dir", help="Directory in which to write start.ts and end.ts")
	p.add_argument("-m", "--moving-rate", action="store_true", help="Include moving TPS statistics")
	p.add_argument("--xlsx", help="Also write the summary as an Excel workbook")
	p.add_argument("--plot-dir", help="Also write PNG plots into this directory")
	p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
	a = p.parse_args(argv)

	return Args(
		jtl=a.jtl,
		out=a.output,
		timestamp_dir=a.timestamp_dir,
		moving_rate=a.moving_rate,
		xlsx=a.xlsx,
		plot_dir=a.plot_dir,
		verbose=a.verbose,
	)


def requested_dimensions(moving_rate: bool) -> List[Dimension]:
	dims = list(GROUPING_DIMENSIONS)
	if moving_rate:
		dims.append(Dimension.MOVING_RATE)
	return dims


def log_rejected_rows(rejected: List[RejectedRow]) -> None:
	for r in rejected:
		logger.warning("ignoring CSV source file line (%d): %s", r.line_number, r.reason)


def run(args: Args) -> None:
	ingested = load_jtl(Path(args.jtl))
	log_rejected_rows(ingested.rejected)

	summarizer = Summarizer(ingested.records, ingested.rejected)
	summarizer.precompute(requested_dimensions(args.moving_rate))

	if args.timestamp_dir:
		write_timestamp_files(Path(args.timestamp_dir), summarizer)

	text = summary_csv_text(summarizer, include_moving_rate=args.moving_rate)
	if args.out:
		write_summary(Path(args.out), text)
	else:
		sys.stdout.write(text)

	if args.xlsx:
		path = write_workbook(Path(args.xlsx), summarizer, include_moving_rate=args.moving_rate)
		logger.info("Excel file written to %s", path)

	if args.plot_dir:
		paths = write_plots(Path(args.plot_dir), summarizer)
		logger.info("Wrote %d plots to %s", len(paths), args.plot_dir)


def main(argv=None) -> int:
	args = parse_args(argv)
	setup_logging(logging.DEBUG if args.verbose else logging.INFO)

	try:
		run(args)
	except (JtlStatsError, OSError) as e:
		print(str(e), file=sys.stderr)
		return 1
	return 0


if __name__ == "__main__":
	raise SystemExit(main())
