"""
Turn JMeter JTL CSV rows into Records.

Every data row is parsed on its own. A row that cannot be parsed becomes a
RejectedRow carrying the 1-based line number of the row in the source file
(the header is line 1) and never affects the other rows.
"""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from jtlstats.errors import JtlFormatError, RowParseError
from jtlstats.records import RejectedRow, Record

logger = logging.getLogger(__name__)

COL_TIMESTAMP = "timeStamp"
COL_ELAPSED = "elapsed"
COL_LABEL = "label"
COL_RESPONSE_CODE = "responseCode"
COL_RESPONSE_MESSAGE = "responseMessage"
COL_SUCCESS = "success"
COL_FAILURE_MESSAGE = "failureMessage"
COL_BYTES = "bytes"
COL_SENT_BYTES = "sentBytes"
COL_LATENCY = "Latency"

REQUIRED_COLUMNS = (
	COL_TIMESTAMP,
	COL_ELAPSED,
	COL_LABEL,
	COL_RESPONSE_CODE,
	COL_SUCCESS,
	COL_BYTES,
)

OPTIONAL_COLUMNS = (
	COL_LATENCY,
	COL_SENT_BYTES,
	COL_RESPONSE_MESSAGE,
	COL_FAILURE_MESSAGE,
)

FIRST_DATA_LINE = 2

# ASCII digits only, no sign prefix "+", separators or exponents
INT_RE = re.compile(r"-?[0-9]+")
DECIMAL_RE = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")


@dataclass(frozen=True)
class ColumnLayout:
	width: int
	index: Dict[str, int]

	@classmethod
	def from_header(cls, header: Sequence[str]) -> "ColumnLayout":
		names = [h.strip() for h in header]
		if not names or names == [""]:
			raise JtlFormatError("JTL source has no header row")

		missing = [c for c in REQUIRED_COLUMNS if c not in names]
		if missing:
			raise JtlFormatError(f"JTL header is missing required columns: {', '.join(missing)}")

		index = {}
		for name in REQUIRED_COLUMNS + OPTIONAL_COLUMNS:
			if name in names:
				index[name] = names.index(name)
		return cls(width=len(names), index=index)

	def has(self, name: str) -> bool:
		return name in self.index


@dataclass
class IngestResult:
	records: List[Record] = field(default_factory=list)
	rejected: List[RejectedRow] = field(default_factory=list)


def _cell(layout: ColumnLayout, row: Sequence[str], name: str) -> str:
	return row[layout.index[name]].strip()


def _parse_int(text: str, name: str) -> int:
	if not INT_RE.fullmatch(text):
		raise RowParseError(f"non-numeric value ({text!r}) in column {name}")
	value = int(text)
	if value < 0:
		raise RowParseError(f"negative value ({value}) in column {name}")
	return value


def _parse_float(text: str, name: str) -> float:
	if not DECIMAL_RE.fullmatch(text):
		raise RowParseError(f"non-numeric value ({text!r}) in column {name}")
	value = float(text)
	if value < 0:
		raise RowParseError(f"negative value ({value}) in column {name}")
	return value


def _parse_success(text: str) -> bool:
	flag = text.lower()
	if flag == "true":
		return True
	if flag == "false":
		return False
	raise RowParseError(f"success flag must be 'true' or 'false', got ({text!r})")


def _outcome(layout: ColumnLayout, row: Sequence[str]) -> str:
	code = _cell(layout, row, COL_RESPONSE_CODE)
	if code:
		return code
	for name in (COL_FAILURE_MESSAGE, COL_RESPONSE_MESSAGE):
		if layout.has(name):
			msg = _cell(layout, row, name)
			if msg:
				return msg
	return ""


def parse_row(layout: ColumnLayout, row: Sequence[str]) -> Record:
	"""Parse one data row; raises RowParseError when the row is unusable."""
	if len(row) != layout.width:
		raise RowParseError(f"expected ({layout.width}) columns, got ({len(row)})")

	timestamp_ms = _parse_int(_cell(layout, row, COL_TIMESTAMP), COL_TIMESTAMP)
	ttlb_ms = _parse_float(_cell(layout, row, COL_ELAPSED), COL_ELAPSED)
	succeeded = _parse_success(_cell(layout, row, COL_SUCCESS))
	response_bytes = _parse_int(_cell(layout, row, COL_BYTES), COL_BYTES)

	request_bytes = 0
	if layout.has(COL_SENT_BYTES):
		request_bytes = _parse_int(_cell(layout, row, COL_SENT_BYTES), COL_SENT_BYTES)

	ttfb_ms: Optional[float] = None
	if layout.has(COL_LATENCY):
		latency = _cell(layout, row, COL_LATENCY)
		if latency:
			ttfb_ms = _parse_float(latency, COL_LATENCY)
			# JMeter reports Latency=0 for samples that never saw a first byte
			if ttfb_ms == 0 and not succeeded and ttlb_ms > 0:
				ttfb_ms = None

	return Record(
		timestamp_ms=timestamp_ms,
		ttfb_ms=ttfb_ms,
		ttlb_ms=ttlb_ms,
		label=_cell(layout, row, COL_LABEL),
		outcome=_outcome(layout, row),
		request_bytes=request_bytes,
		response_bytes=response_bytes,
		succeeded=succeeded,
	)


@dataclass(frozen=True)
class SourceRow:
	"""
	One CSV record and the file line it starts on. error is set instead of
	fields when the csv module could not split the record.
	"""
	line_number: int
	fields: Sequence[str] = ()
	error: Optional[str] = None


def ingest_source_rows(layout: ColumnLayout, rows: Iterable[SourceRow]) -> IngestResult:
	"""
	Parse data rows (header excluded) in file order. Blank lines are skipped.
	"""
	result = IngestResult()
	for row in rows:
		if row.error is not None:
			result.rejected.append(RejectedRow(row.line_number, row.error))
			continue
		if not row.fields:
			continue
		try:
			result.records.append(parse_row(layout, row.fields))
		except RowParseError as e:
			result.rejected.append(RejectedRow(row.line_number, str(e)))

	logger.debug("ingested %d records, rejected %d rows", len(result.records), len(result.rejected))
	return result


def ingest_rows(layout: ColumnLayout, rows: Iterable[Sequence[str]]) -> IngestResult:
	"""Parse data rows where each row occupies exactly one line after the header."""
	return ingest_source_rows(
		layout,
		(SourceRow(FIRST_DATA_LINE + offset, row) for offset, row in enumerate(rows)),
	)


def ingest_table(rows: Iterable[Sequence[str]]) -> IngestResult:
	"""Parse a whole table whose first row is the header."""
	it = iter(rows)
	header = next(it, None)
	if header is None:
		raise JtlFormatError("JTL source is empty")
	return ingest_rows(ColumnLayout.from_header(header), it)


def read_source_rows(f) -> Iterator[SourceRow]:
	"""
	Split a text stream into CSV records numbered by the line each starts on,
	so quoted fields spanning several lines do not shift later numbers.
	"""
	reader = csv.reader(f)
	while True:
		start = reader.line_num + 1
		try:
			fields = next(reader)
		except StopIteration:
			return
		except csv.Error as e:
			yield SourceRow(start, error=f"malformed CSV record: {e}")
			continue
		yield SourceRow(start, fields)


def load_jtl(path: Path) -> IngestResult:
	"""
	Read a JTL file. Undecodable bytes become U+FFFD rather than failing the
	whole file.
	"""
	with Path(path).open(newline="", encoding="utf-8", errors="replace") as f:
		rows = read_source_rows(f)
		header = next(rows, None)
		if header is None:
			raise JtlFormatError("JTL source is empty")
		if header.error is not None:
			raise JtlFormatError(f"JTL header cannot be read: {header.error}")
		return ingest_source_rows(ColumnLayout.from_header(header.fields), rows)
