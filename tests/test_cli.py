"""
Tests for the Command-Line Interface
"""

import pytest
from click.testing import CliRunner

from networkcrm import __version__
from networkcrm.main import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestReportCommand:
    """Tests for the report command."""

    def test_report_without_files(self, runner, contacts_csv):
        """Test printing a report for a CSV export."""
        result = runner.invoke(
            cli, ["report", "-i", str(contacts_csv), "--now", "2024-06-15", "--no-files"]
        )

        assert result.exit_code == 0, result.output
        assert "Loaded 3 contacts" in result.output
        assert "/100" in result.output
        assert "Relationship Health" in result.output

    def test_report_writes_files(self, runner, contacts_csv, tmp_path):
        """Test that report files land in the output directory."""
        out = tmp_path / "reports"
        result = runner.invoke(
            cli,
            [
                "report", "-i", str(contacts_csv), "--now", "2024-06-15",
                "-o", str(out), "-f", "json", "--sequential",
            ],
        )

        assert result.exit_code == 0, result.output
        assert len(list(out.glob("networking_report*.json"))) == 1
        assert not list(out.glob("*.md"))

    def test_unsupported_file_exits(self, runner, tmp_path):
        """Test that a load failure exits with status 1."""
        path = tmp_path / "contacts.xml"
        path.write_text("<contacts/>")

        result = runner.invoke(cli, ["report", "-i", str(path), "--no-files"])
        assert result.exit_code == 1


class TestFollowUpsCommand:
    """Tests for the follow-ups command."""

    def test_lists_upcoming(self, runner, contacts_csv):
        """Test the overdue and upcoming listing."""
        result = runner.invoke(cli, ["follow-ups", "-i", str(contacts_csv), "--now", "2024-06-15"])

        assert result.exit_code == 0, result.output
        assert "No overdue follow-ups." in result.output
        assert "Upcoming in the next 7 days (1)" in result.output
        assert "Jane Smith" in result.output

    def test_custom_horizon(self, runner, contacts_csv):
        """Test a horizon too short to reach any follow-up."""
        result = runner.invoke(
            cli, ["follow-ups", "-i", str(contacts_csv), "--now", "2024-06-15", "--days", "2"]
        )

        assert result.exit_code == 0, result.output
        assert "Nothing scheduled in the next 2 days." in result.output


def test_version(runner):
    """Test the version command."""
    result = runner.invoke(cli, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output
