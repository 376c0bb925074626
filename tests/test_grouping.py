"""
Tests for grouping records by dimension
"""

import pytest

from jtlstats.grouping import GROUPING_DIMENSIONS, Dimension, aggregate_group, group_by


@pytest.mark.unit
class TestGroupBy:
	def test_first_occurrence_order(self, mixed_records):
		groups = group_by(mixed_records, Dimension.LABEL)
		assert [g.key for g in groups] == ["GET /a", "POST /b", "GET /c"]

	def test_members_keep_input_order(self, mixed_records):
		groups = group_by(mixed_records, Dimension.LABEL)
		get_a = groups[0]
		assert [r.timestamp_ms for r in get_a.records] == [10_000, 10_900, 13_000]

	@pytest.mark.parametrize("dimension", GROUPING_DIMENSIONS)
	def test_partition_without_loss(self, mixed_records, dimension):
		groups = group_by(mixed_records, dimension)

		assert sum(len(g.records) for g in groups) == len(mixed_records)
		assert len({g.key for g in groups}) == len(groups)
		for g in groups:
			assert g.dimension is dimension

	def test_size_keys_are_integers(self, mixed_records):
		keys = [g.key for g in group_by(mixed_records, Dimension.RESPONSE_SIZE)]
		assert keys == [100, 20, 0]

	def test_outcome_groups(self, mixed_records):
		groups = group_by(mixed_records, Dimension.OUTCOME)
		assert [(g.key, len(g.records)) for g in groups] == [("200", 2), ("201", 2), ("503", 2)]

	def test_meta_dimension_is_rejected(self, mixed_records):
		with pytest.raises(ValueError):
			group_by(mixed_records, Dimension.MOVING_RATE)

	def test_empty_input(self):
		assert group_by([], Dimension.LABEL) == []


@pytest.mark.unit
def test_aggregate_group(mixed_records):
	g = aggregate_group(mixed_records)

	assert g.is_aggregate
	assert g.key is None
	assert list(g.records) == mixed_records
