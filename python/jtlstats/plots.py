from __future__ import annotations

import math
from pathlib import Path
from typing import List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from jtlstats.grouping import Dimension
from jtlstats.rate import bucket_series
from jtlstats.summarizer import Summarizer


def plot_throughput(summarizer: Summarizer, outdir: Path) -> Path:
	"""
	Records started per second across the whole run, quiet seconds included.
	"""
	series = bucket_series(summarizer.records)
	start_sec = series[0][0]
	x = [sec - start_sec for sec, _ in series]
	y = [c for _, c in series]

	plt.figure()
	plt.plot(x, y, marker=".", linewidth=1.0, label="requests/s")

	rate = summarizer.aggregate_summary().overall_rate
	if rate is not None:
		plt.axhline(rate, linestyle="--", linewidth=1.0, label=f"overall {rate:.2f}/s")

	plt.xlabel(f"seconds since {start_sec}")
	plt.ylabel("requests started")
	plt.title("Throughput per second")
	plt.legend()
	plt.grid(True, linestyle="--", linewidth=0.5)

	out = outdir / "throughput_per_second.png"
	plt.tight_layout()
	plt.savefig(out, dpi=160)
	plt.close()
	return out


def plot_ttlb_by_label(summarizer: Summarizer, outdir: Path) -> Path:
	"""
	Median TTLB per label, with the 5th..95th percentile range as error bars.
	"""
	rows = [s for s in summarizer.summaries_for(Dimension.LABEL) if not math.isnan(s.ttlb.median)]
	labels = [s.key_as_string() for s in rows]
	medians = [s.ttlb.median for s in rows]
	lower = [s.ttlb.median - s.ttlb.p5 for s in rows]
	upper = [s.ttlb.p95 - s.ttlb.median for s in rows]

	plt.figure(figsize=(max(6.4, 0.6 * len(labels)), 4.8))
	positions = list(range(len(labels)))
	plt.bar(positions, medians)
	plt.errorbar(positions, medians, yerr=[lower, upper], fmt="none", ecolor="black", capsize=3)
	plt.xticks(positions, labels, rotation=45, ha="right")
	plt.ylabel("TTLB (ms)")
	plt.title("TTLB median by label (p5..p95)")
	plt.grid(True, axis="y", linestyle="--", linewidth=0.5)

	out = outdir / "ttlb_by_label.png"
	plt.tight_layout()
	plt.savefig(out, dpi=160)
	plt.close()
	return out


def write_plots(outdir: Path, summarizer: Summarizer) -> List[Path]:
	outdir = Path(outdir)
	outdir.mkdir(parents=True, exist_ok=True)

	written = [plot_throughput(summarizer, outdir)]
	if Dimension.LABEL in summarizer.computed_dimensions():
		written.append(plot_ttlb_by_label(summarizer, outdir))
	return written
