"""
Tests for Output Generation
"""

import json
import pytest

from networkcrm.pipeline.analyze import analyze_network
from networkcrm.pipeline.outputs import OutputGenerator, generate_outputs


@pytest.fixture
def sample_report(sample_snapshot, fixed_clock):
    """A report over the sample contacts."""
    return analyze_network(sample_snapshot, clock=fixed_clock)


class TestOutputGenerator:
    """Tests for OutputGenerator."""

    def test_generates_all_formats(self, sample_report, tmp_path):
        """Test writing JSON, Markdown and CSV."""
        files = generate_outputs(sample_report, output_dir=tmp_path, timestamp_filenames=False)

        assert set(files) == {"json", "markdown", "csv"}
        assert files["json"] == tmp_path / "networking_report.json"
        assert files["markdown"] == tmp_path / "networking_report.md"
        assert files["csv"] == tmp_path / "follow_ups_by_week.csv"

    def test_json_round_trips_report(self, sample_report, tmp_path):
        """Test that the JSON file holds the report data."""
        files = generate_outputs(
            sample_report, output_dir=tmp_path, formats=["json"], timestamp_filenames=False
        )

        data = json.loads(files["json"].read_text())
        assert data == sample_report.to_dict()

    def test_csv_has_one_row_per_week(self, sample_report, tmp_path):
        """Test the weekly trend CSV."""
        files = generate_outputs(
            sample_report, output_dir=tmp_path, formats=["csv"], timestamp_filenames=False
        )

        lines = files["csv"].read_text().splitlines()
        assert lines[0] == "week,week_start,follow_ups"
        assert len(lines) == 9
        assert lines[1] == '"Apr 20",2024-04-20,0'

    def test_markdown_sections(self, sample_report, tmp_path):
        """Test the Markdown report content."""
        generator = OutputGenerator(output_dir=tmp_path, formats=["markdown"], timestamp_filenames=False)
        content = generator.generate_report(sample_report)["markdown"].read_text()

        assert content.startswith("# Networking Report")
        assert f"## Score: {sample_report.score.total}/100 ({sample_report.grade})" in content
        assert "| TechCorp | 2 |" in content
        assert "| Dormant | 1 |" in content
        for insight in sample_report.insights:
            assert f"- {insight}" in content

    def test_timestamped_filenames(self, sample_report, tmp_path):
        """Test that timestamps are added by default."""
        files = generate_outputs(sample_report, output_dir=tmp_path, formats=["json"])
        assert files["json"].name.startswith("networking_report_")
        assert files["json"].exists()

    def test_creates_output_directory(self, sample_report, tmp_path):
        """Test that a missing output directory is created."""
        target = tmp_path / "nested" / "reports"
        generate_outputs(sample_report, output_dir=target, formats=["csv"])
        assert target.is_dir()
