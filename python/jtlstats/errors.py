from __future__ import annotations


class JtlStatsError(Exception):
	"""Base class for every error raised by jtlstats."""


class RowParseError(JtlStatsError):
	"""A single data row could not be turned into a Record."""


class JtlFormatError(JtlStatsError):
	"""The source as a whole is unusable (no header, missing required column)."""


class NoRecordsError(JtlStatsError):
	"""There are no valid records to summarize."""


class DegenerateSpanError(JtlStatsError):
	"""
	The records cover fewer than two distinct timestamps, so a rate over the
	observed span would divide by zero.
	"""


class SummaryNotComputedError(JtlStatsError, LookupError):
	"""An accessor was called for a dimension that precompute() never handled."""
