"""Descriptive-statistics summaries of JMeter JTL load-test logs."""

from jtlstats.errors import (
	DegenerateSpanError,
	JtlFormatError,
	JtlStatsError,
	NoRecordsError,
	SummaryNotComputedError,
)
from jtlstats.grouping import Dimension
from jtlstats.ingest import IngestResult, ingest_rows, ingest_table, load_jtl
from jtlstats.records import RejectedRow, Record
from jtlstats.stats import StatBlock, compute_stats
from jtlstats.summarizer import Summarizer, SummaryRow

__version__ = "0.1.0"
