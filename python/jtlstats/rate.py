"""
Throughput derived from record timestamps.

The per-second series covers every whole second between the first and the
last record, so a quiet second contributes a zero sample.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from jtlstats.errors import DegenerateSpanError, NoRecordsError
from jtlstats.records import Record
from jtlstats.stats import StatBlock, compute_stats

BUCKET_MS = 1000


def time_span(records: Sequence[Record]) -> Tuple[int, int]:
	"""(min timestamp, max timestamp) in ms."""
	if not records:
		raise NoRecordsError("no records to derive a time span from")
	stamps = [r.timestamp_ms for r in records]
	return min(stamps), max(stamps)


def overall_rate(records: Sequence[Record]) -> float:
	first_ms, last_ms = time_span(records)
	if first_ms == last_ms:
		raise DegenerateSpanError(
			f"all {len(records)} records share timestamp {first_ms}; overall rate is undefined"
		)
	return len(records) / ((last_ms - first_ms) / 1000.0)


def bucket_series(records: Sequence[Record]) -> List[Tuple[int, int]]:
	"""
	(second, count) for every second from floor(first/1000) to floor(last/1000)
	inclusive.
	"""
	first_ms, last_ms = time_span(records)
	start_sec = first_ms // BUCKET_MS
	end_sec = last_ms // BUCKET_MS

	counts = [0] * (end_sec - start_sec + 1)
	for r in records:
		counts[r.timestamp_ms // BUCKET_MS - start_sec] += 1

	return [(start_sec + i, c) for i, c in enumerate(counts)]


def per_second_counts(records: Sequence[Record]) -> List[int]:
	return [c for _, c in bucket_series(records)]


def moving_rate_stats(records: Sequence[Record]) -> StatBlock:
	return compute_stats(per_second_counts(records))
