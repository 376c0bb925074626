"""
Tests for the descriptive statistics engine
"""

import math
import random

import pytest

from jtlstats.stats import EMPTY_BLOCK, compute_stats, percentile


@pytest.mark.unit
class TestComputeStats:
	def test_one_to_five(self):
		s = compute_stats([1, 2, 3, 4, 5])

		assert s.count == 5
		assert s.mean == 3
		assert s.median == 3
		assert s.minimum == 1
		assert s.maximum == 5
		assert s.stdev == pytest.approx(math.sqrt(2))
		assert s.p5 == pytest.approx(1.2)
		assert s.p95 == pytest.approx(4.8)

	def test_population_not_sample_stdev(self):
		s = compute_stats([2, 4, 4, 4, 5, 5, 7, 9])
		assert s.stdev == pytest.approx(2.0)

	@pytest.mark.parametrize("value,n", [(7.0, 1), (0.1, 3), (42.5, 10), (0.0, 4)])
	def test_repeated_value(self, value, n):
		s = compute_stats([value] * n)

		assert s.mean == value
		assert s.median == value
		assert s.minimum == value
		assert s.maximum == value
		assert s.p5 == value
		assert s.p95 == value
		assert s.stdev == 0

	def test_empty_is_all_nan(self):
		s = compute_stats([])

		assert s is EMPTY_BLOCK
		assert s.empty
		assert all(math.isnan(v) for v in s.as_list())

	def test_none_samples_are_skipped(self):
		s = compute_stats([None, 10, None, 30])

		assert s.count == 2
		assert s.mean == 20
		assert s.minimum == 10

	def test_only_none_is_empty(self):
		assert compute_stats([None, None]).empty

	def test_even_count_median_interpolates(self):
		assert compute_stats([4, 1, 3, 2]).median == 2.5

	def test_order_of_input_does_not_matter(self):
		vals = [5.5, 1.25, 9.0, 3.0, 3.0, 7.75]
		shuffled = list(reversed(vals))
		assert compute_stats(vals) == compute_stats(shuffled)

	@pytest.mark.parametrize("seed", range(5))
	def test_ordering_invariant(self, seed):
		rng = random.Random(seed)
		vals = [rng.uniform(0, 1000) for _ in range(rng.randint(1, 200))]
		s = compute_stats(vals)

		assert s.minimum <= s.p5 <= s.median <= s.p95 <= s.maximum
		assert s.stdev >= 0


@pytest.mark.unit
class TestPercentile:
	def test_linear_interpolation_between_order_statistics(self):
		# rank = 0.95 * 9 = 8.55 -> 9 + 0.55 * (10 - 9)
		vals = [float(v) for v in range(1, 11)]
		assert percentile(vals, 95) == pytest.approx(9.55)
		assert percentile(vals, 5) == pytest.approx(1.45)

	def test_integral_rank_picks_order_statistic(self):
		assert percentile([10.0, 20.0, 30.0], 50) == 20.0

	def test_bounds(self):
		vals = [3.0, 8.0, 13.0]
		assert percentile(vals, 0) == 3.0
		assert percentile(vals, 100) == 13.0

	def test_empty(self):
		assert math.isnan(percentile([], 50))
