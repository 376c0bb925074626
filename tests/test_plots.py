"""
Tests for PNG plot output
"""

import pytest

from jtlstats.grouping import Dimension
from jtlstats.plots import write_plots
from jtlstats.summarizer import Summarizer


@pytest.mark.integration
class TestPlots:
	def test_writes_both_plots(self, tmp_path, mixed_records):
		s = Summarizer(mixed_records)
		s.precompute([Dimension.LABEL])

		paths = write_plots(tmp_path / "plots", s)

		assert [p.name for p in paths] == ["throughput_per_second.png", "ttlb_by_label.png"]
		for p in paths:
			assert p.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

	def test_label_plot_needs_label_dimension(self, tmp_path, mixed_records):
		s = Summarizer(mixed_records)
		s.precompute([])

		paths = write_plots(tmp_path, s)

		assert [p.name for p in paths] == ["throughput_per_second.png"]
