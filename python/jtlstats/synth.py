#!/usr/bin/env python3
"""
synth.py

Generates synthetic JMeter JTL CSV files for trying out jtl-stats.

Rows use the default JMeter CSV header. Request start times advance by a random
gap so the run covers roughly --duration seconds; a fraction of requests
(--error-rate) fail with either a 5xx code or a connection error message.

Example:
  jtl-synth --out results/sample.jtl --requests 5000 --duration 120 --seed 7
"""

from __future__ import annotations

import argparse
import csv
import random
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Tuple

JTL_HEADER = [
	"timeStamp",
	"elapsed",
	"label",
	"responseCode",
	"responseMessage",
	"threadName",
	"dataType",
	"success",
	"failureMessage",
	"bytes",
	"sentBytes",
	"grpThreads",
	"allThreads",
	"URL",
	"Latency",
	"IdleTime",
	"Connect",
]

# (label, request body size, typical response size, typical ttlb ms)
DEFAULT_ROUTES: List[Tuple[str, int, int, float]] = [
	("GET /", 0, 4096, 12.0),
	("GET /api/items", 0, 16384, 35.0),
	("POST /api/items", 512, 128, 48.0),
	("GET /static/app.js", 0, 65536, 20.0),
]

CONNECT_ERROR = "Non HTTP response code: java.net.ConnectException"

BASE_TIMESTAMP_MS = 1_665_666_163_199


@dataclass(frozen=True)
class SynthSpec:
	requests: int
	duration_s: float
	error_rate: float
	seed: int
	threads: int = 8


def generate_rows(spec: SynthSpec) -> Iterator[List[str]]:
	"""Yield JTL data rows (no header), deterministic for a given spec."""
	rng = random.Random(spec.seed)
	mean_gap_ms = (spec.duration_s * 1000.0) / max(1, spec.requests)
	ts = BASE_TIMESTAMP_MS

	for i in range(spec.requests):
		label, req_bytes, resp_bytes, ttlb_typ = DEFAULT_ROUTES[rng.randrange(len(DEFAULT_ROUTES))]
		thread = f"Thread Group 1-{i % spec.threads + 1}"
		url = "http://localhost:8080" + label.split(" ", 1)[1]

		if rng.random() < spec.error_rate:
			if rng.random() < 0.5:
				elapsed = int(rng.uniform(1000, 3000))
				row = [ts, elapsed, label, CONNECT_ERROR, "java.net.ConnectException: Connection refused",
					thread, "text", "false", "", 0, 0, spec.threads, spec.threads, url, 0, 0, elapsed]
			else:
				elapsed = max(1, int(rng.gauss(ttlb_typ * 2, ttlb_typ / 2)))
				latency = max(1, int(elapsed * 0.8))
				row = [ts, elapsed, label, "503", "Service Unavailable", thread, "text", "false", "",
					256, req_bytes + 180, spec.threads, spec.threads, url, latency, 0, 1]
		else:
			elapsed = max(1, int(rng.lognormvariate(0, 0.35) * ttlb_typ))
			latency = max(1, int(elapsed * rng.uniform(0.5, 0.95)))
			code = "201" if label.startswith("POST") else "200"
			row = [ts, elapsed, label, code, "OK", thread, "text", "true", "",
				resp_bytes, req_bytes + 180, spec.threads, spec.threads, url, latency, 0, 1]

		yield [str(v) for v in row]
		ts += int(rng.expovariate(1.0 / mean_gap_ms)) if mean_gap_ms > 0 else 0


def write_jtl(path: Path, spec: SynthSpec) -> int:
	path = Path(path)
	path.parent.mkdir(parents=True, exist_ok=True)
	n = 0
	with path.open("w", newline="") as f:
		w = csv.writer(f, lineterminator="\n")
		w.writerow(JTL_HEADER)
		for row in generate_rows(spec):
			w.writerow(row)
			n += 1
	return n


def main(argv=None) -> int:
	parser = argparse.ArgumentParser(description="Generate a synthetic JMeter JTL CSV file.")
	parser.add_argument("--out", default="results/sample.jtl", help="Output .jtl path")
	parser.add_argument("--requests", type=int, default=1000, help="Number of samples")
	parser.add_argument("--duration", type=float, default=60.0, help="Approximate run length in seconds")
	parser.add_argument("--error-rate", type=float, default=0.02, help="Fraction of failed samples")
	parser.add_argument("--seed", type=int, default=1, help="Random seed")
	parser.add_argument("--force", action="store_true", help="Overwrite an existing file")
	args = parser.parse_args(argv)

	if args.requests < 0 or args.duration < 0 or not 0.0 <= args.error_rate <= 1.0:
		print("requests and duration must be >= 0, error-rate in [0, 1]", file=sys.stderr)
		return 2

	out = Path(args.out)
	if out.exists() and not args.force:
		print(f"Skip existing (use --force to overwrite): {out.as_posix()}")
		return 0

	spec = SynthSpec(args.requests, args.duration, args.error_rate, args.seed)
	n = write_jtl(out, spec)
	print(f"Wrote {n} samples to {out.as_posix()}")
	return 0


if __name__ == "__main__":
	raise SystemExit(main())
