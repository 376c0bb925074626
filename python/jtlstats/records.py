from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Record:
	"""
	One request/response observation from a JTL log.

	timestamp_ms is the request start time (unix epoch milliseconds) and is the
	only field used for ordering and time bucketing. ttfb_ms is None when the
	log does not know the time to first byte.
	"""
	timestamp_ms: int
	ttfb_ms: Optional[float]
	ttlb_ms: float
	label: str
	outcome: str
	request_bytes: int
	response_bytes: int
	succeeded: bool


@dataclass(frozen=True)
class RejectedRow:
	line_number: int
	reason: str
