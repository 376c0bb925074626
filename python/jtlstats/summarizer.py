"""
Summarizer: computes the aggregate summary and per-dimension summaries once,
then serves them from its own memo table.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from jtlstats.errors import DegenerateSpanError, NoRecordsError, SummaryNotComputedError
from jtlstats.grouping import Dimension, Group, aggregate_group, group_by
from jtlstats.rate import moving_rate_stats, overall_rate, time_span
from jtlstats.records import RejectedRow, Record
from jtlstats.stats import StatBlock, compute_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SummaryRow:
	dimension: Optional[Dimension]
	key: Optional[Hashable]
	total_count: int
	failed_count: int
	ttfb: StatBlock
	ttlb: StatBlock
	first_timestamp_ms: int
	last_timestamp_ms: int
	overall_rate: Optional[float] = None
	moving_rate: Optional[StatBlock] = None

	@property
	def is_aggregate(self) -> bool:
		return self.key is None

	def key_as_string(self) -> str:
		return "" if self.key is None else str(self.key)


def summarize_group(group: Group) -> SummaryRow:
	records = group.records
	first_ms, last_ms = time_span(records)
	return SummaryRow(
		dimension=group.dimension,
		key=group.key,
		total_count=len(records),
		failed_count=sum(1 for r in records if not r.succeeded),
		ttfb=compute_stats(r.ttfb_ms for r in records),
		ttlb=compute_stats(r.ttlb_ms for r in records),
		first_timestamp_ms=first_ms,
		last_timestamp_ms=last_ms,
	)


class Summarizer:
	def __init__(self, records: Sequence[Record], rejected: Sequence[RejectedRow] = ()):
		self._records = tuple(records)
		self._rejected = tuple(rejected)
		self._aggregate: Optional[SummaryRow] = None
		self._memo: Dict[Dimension, Tuple[SummaryRow, ...]] = {}
		self._moving_rate_requested = False

	@property
	def records(self) -> Tuple[Record, ...]:
		return self._records

	def precompute(self, dimensions: Iterable[Dimension] = ()) -> None:
		"""
		Compute the aggregate summary plus the summaries for each requested
		dimension. Dimensions already computed are left untouched.
		"""
		dims = list(dimensions)
		for d in dims:
			if not isinstance(d, Dimension):
				raise ValueError(f"unknown dimension: {d!r}")

		if not self._records:
			raise NoRecordsError("no valid records to summarize")

		if self._aggregate is None:
			self._aggregate = self._compute_aggregate()

		for d in dims:
			if d.is_meta:
				self._moving_rate_requested = True
				continue
			if d in self._memo:
				continue
			groups = group_by(self._records, d)
			logger.debug("summarizing %d groups for %s", len(groups), d.value)
			self._memo[d] = tuple(summarize_group(g) for g in groups)

	def _compute_aggregate(self) -> SummaryRow:
		row = summarize_group(aggregate_group(self._records))
		try:
			rate: Optional[float] = overall_rate(self._records)
		except DegenerateSpanError as e:
			logger.warning("%s", e)
			rate = None
		# The aggregate row is built exactly once
		return dataclasses.replace(row, overall_rate=rate, moving_rate=moving_rate_stats(self._records))

	def computed_dimensions(self) -> List[Dimension]:
		dims = list(self._memo)
		if self._moving_rate_requested:
			dims.append(Dimension.MOVING_RATE)
		return dims

	def aggregate_summary(self) -> SummaryRow:
		if self._aggregate is None:
			raise SummaryNotComputedError("aggregate summary requested before precompute()")
		return self._aggregate

	def summaries_for(self, dimension: Dimension) -> Tuple[SummaryRow, ...]:
		if dimension.is_meta:
			raise ValueError(f"{dimension.value} has no per-key summaries; use moving_rate_summary()")
		try:
			return self._memo[dimension]
		except KeyError:
			raise SummaryNotComputedError(f"summaries for {dimension.value} were not precomputed") from None

	def moving_rate_summary(self) -> StatBlock:
		if not self._moving_rate_requested:
			raise SummaryNotComputedError("moving rate summary was not precomputed")
		return self.aggregate_summary().moving_rate

	def overall_rate(self) -> float:
		"""Overall records per second; raises DegenerateSpanError when undefined."""
		agg = self.aggregate_summary()
		if agg.overall_rate is None:
			raise DegenerateSpanError(
				f"first and last timestamps are both {agg.first_timestamp_ms}; overall rate is undefined"
			)
		return agg.overall_rate

	def rejected_rows(self) -> Tuple[RejectedRow, ...]:
		return self._rejected

	def first_timestamp_ms(self) -> int:
		return self.aggregate_summary().first_timestamp_ms

	def last_timestamp_ms(self) -> int:
		return self.aggregate_summary().last_timestamp_ms
