from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple

from jtlstats.records import Record


class Dimension(Enum):
	"""
	Grouping axes. The value is the category name printed in reports.
	MOVING_RATE is a meta-dimension: it adds per-second throughput statistics
	to the aggregate summary and has no groups of its own.
	"""
	LABEL = "method+uripath"
	OUTCOME = "responseCode"
	RESPONSE_SIZE = "responseSizeInBytes"
	REQUEST_SIZE = "requestBodyInBytes"
	MOVING_RATE = "movingTPS"

	@property
	def is_meta(self) -> bool:
		return self is Dimension.MOVING_RATE


# Report order
GROUPING_DIMENSIONS = (
	Dimension.LABEL,
	Dimension.OUTCOME,
	Dimension.RESPONSE_SIZE,
	Dimension.REQUEST_SIZE,
)

KEY_FUNCTIONS: Dict[Dimension, Callable[[Record], Hashable]] = {
	Dimension.LABEL: lambda r: r.label,
	Dimension.OUTCOME: lambda r: r.outcome,
	Dimension.RESPONSE_SIZE: lambda r: r.response_bytes,
	Dimension.REQUEST_SIZE: lambda r: r.request_bytes,
}


@dataclass(frozen=True)
class Group:
	dimension: Optional[Dimension]
	key: Optional[Hashable]
	records: Tuple[Record, ...]

	@property
	def is_aggregate(self) -> bool:
		return self.key is None


def aggregate_group(records: Sequence[Record]) -> Group:
	return Group(dimension=None, key=None, records=tuple(records))


def group_by(records: Sequence[Record], dimension: Dimension) -> List[Group]:
	"""
	Partition records by the dimension's key in a single pass.

	Groups come out in order of first occurrence of their key, and each group
	keeps the input order of its members.
	"""
	if dimension not in KEY_FUNCTIONS:
		raise ValueError(f"{dimension} is not a grouping dimension")

	key_fn = KEY_FUNCTIONS[dimension]
	members: Dict[Hashable, List[Record]] = {}
	for r in records:
		members.setdefault(key_fn(r), []).append(r)

	return [Group(dimension, key, tuple(rs)) for key, rs in members.items()]
