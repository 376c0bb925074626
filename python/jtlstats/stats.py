"""
Descriptive statistics over a multiset of samples.

Percentiles (including the median) use linear interpolation between the two
order statistics that bracket the fractional rank p/100 * (N - 1), the same
convention as numpy's default and R's type 7.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from statistics import mean, pstdev
from typing import Iterable, List, Optional

PERCENTILES = (5, 95)

NAN = float("nan")


@dataclass(frozen=True)
class StatBlock:
	count: int
	mean: float
	median: float
	stdev: float
	minimum: float
	maximum: float
	p5: float
	p95: float

	@property
	def empty(self) -> bool:
		return self.count == 0

	def as_list(self) -> List[float]:
		"""Values in report column order: mean, median, stdev, min, max, p5, p95."""
		return [self.mean, self.median, self.stdev, self.minimum, self.maximum, self.p5, self.p95]


EMPTY_BLOCK = StatBlock(0, NAN, NAN, NAN, NAN, NAN, NAN, NAN)


def percentile(sorted_vals: List[float], p: float) -> float:
	"""
	Percentile with linear interpolation.
	p in [0, 100]; sorted_vals must be ascending.
	"""
	if not sorted_vals:
		return NAN
	if len(sorted_vals) == 1:
		return sorted_vals[0]

	k = (len(sorted_vals) - 1) * (p / 100.0)
	f = math.floor(k)
	c = math.ceil(k)

	if f == c:
		return sorted_vals[int(k)]
	lo = sorted_vals[f]
	hi = sorted_vals[c]
	return min(hi, lo + (hi - lo) * (k - f))


def compute_stats(samples: Iterable[Optional[float]]) -> StatBlock:
	"""
	Summarize samples. None entries are skipped (unknown measurements); an
	empty multiset yields EMPTY_BLOCK, whose fields are all NaN.
	"""
	vals = sorted(float(v) for v in samples if v is not None)
	if not vals:
		return EMPTY_BLOCK

	lo_pct, hi_pct = PERCENTILES
	return StatBlock(
		count=len(vals),
		mean=float(mean(vals)),
		median=percentile(vals, 50),
		stdev=float(pstdev(vals)),
		minimum=vals[0],
		maximum=vals[-1],
		p5=percentile(vals, lo_pct),
		p95=percentile(vals, hi_pct),
	)
