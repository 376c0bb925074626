"""
Shared fixtures for jtlstats tests
"""

import logging

import pytest

from jtlstats.ingest import ColumnLayout, ingest_rows
from jtlstats.records import Record
from jtlstats.synth import JTL_HEADER


def jtl_row(ts, elapsed=10, label="GET /a", code="200", success="true",
			bytes_=100, sent=0, latency=5, failure_message=""):
	"""Build one JTL data row in default JMeter column order."""
	values = {
		"timeStamp": ts,
		"elapsed": elapsed,
		"label": label,
		"responseCode": code,
		"responseMessage": "OK",
		"threadName": "Thread Group 1-1",
		"dataType": "text",
		"success": success,
		"failureMessage": failure_message,
		"bytes": bytes_,
		"sentBytes": sent,
		"grpThreads": 1,
		"allThreads": 1,
		"URL": "http://localhost/a",
		"Latency": latency,
		"IdleTime": 0,
		"Connect": 1,
	}
	return [str(values[c]) for c in JTL_HEADER]


def record(ts, ttlb=10.0, ttfb=5.0, label="GET /a", outcome="200",
		   req=0, resp=100, ok=True):
	return Record(
		timestamp_ms=ts,
		ttfb_ms=ttfb,
		ttlb_ms=ttlb,
		label=label,
		outcome=outcome,
		request_bytes=req,
		response_bytes=resp,
		succeeded=ok,
	)


@pytest.fixture(autouse=True)
def reset_jtlstats_logger():
	"""Drop handlers the CLI installs so they never outlive a captured stream"""
	yield
	logger = logging.getLogger("jtlstats")
	for handler in list(logger.handlers):
		logger.removeHandler(handler)
	logger.setLevel(logging.NOTSET)


@pytest.fixture
def header():
	return list(JTL_HEADER)


@pytest.fixture
def layout(header):
	return ColumnLayout.from_header(header)


@pytest.fixture
def mixed_records():
	"""Records spanning three labels, two outcomes and a quiet second"""
	return [
		record(10_000, ttlb=10, label="GET /a", outcome="200", resp=100),
		record(10_200, ttlb=30, label="POST /b", outcome="201", req=64, resp=20),
		record(10_900, ttlb=20, label="GET /a", outcome="200", resp=100),
		record(12_100, ttlb=50, label="GET /c", outcome="503", resp=0, ok=False, ttfb=None),
		record(12_500, ttlb=40, label="POST /b", outcome="201", req=64, resp=20),
		record(13_000, ttlb=15, label="GET /a", outcome="503", resp=0, ok=False),
	]


@pytest.fixture
def scenario_rows():
	"""Three samples at 1000, 1500 and 2600 ms, all GET /a and successful"""
	return [
		jtl_row(1000, elapsed=10),
		jtl_row(1500, elapsed=20),
		jtl_row(2600, elapsed=30),
	]


@pytest.fixture
def ingested_scenario(layout, scenario_rows):
	return ingest_rows(layout, scenario_rows)
