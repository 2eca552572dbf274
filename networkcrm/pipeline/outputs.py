"""
Output Generation

Writes JSON, Markdown and CSV reports for a finished networking analysis.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from networkcrm.models.entities import RelationshipStrength
from networkcrm.models.followup import WeeklyBucket
from networkcrm.pipeline.analyze import NetworkingReport

logger = logging.getLogger(__name__)


class OutputGenerator:
    """Generates report files from a NetworkingReport."""

    def __init__(
        self,
        output_dir: str | Path = "./outputs",
        formats: Optional[list[str]] = None,
        timestamp_filenames: bool = True,
    ):
        """Initialize output generator.

        Args:
            output_dir: Directory for output files
            formats: List of formats to generate (json, markdown, csv)
            timestamp_filenames: Whether to include timestamp in filenames
        """
        self.output_dir = Path(output_dir)
        self.formats = formats or ["json", "markdown", "csv"]
        self.timestamp_filenames = timestamp_filenames

        self.output_dir.mkdir(parents=True, exist_ok=True)

    def _get_filename(self, base_name: str, extension: str) -> Path:
        """Generate output filename."""
        if self.timestamp_filenames:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"{base_name}_{timestamp}.{extension}"
        else:
            filename = f"{base_name}.{extension}"
        return self.output_dir / filename

    def _weekly_to_csv(self, buckets: tuple[WeeklyBucket, ...]) -> str:
        """Convert the weekly follow-up trend to CSV format."""
        lines = ["week,week_start,follow_ups"]
        for bucket in buckets:
            lines.append(
                f'"{bucket.label}",'
                f"{bucket.week_start.date().isoformat()},"
                f"{bucket.count}"
            )
        return "\n".join(lines)

    def _generate_report_md(self, report: NetworkingReport) -> str:
        """Generate networking report markdown."""
        stats = report.stats
        health = report.health
        follow_up = report.follow_up
        score = report.score

        lines = [
            "# Networking Report\n",
            f"*Generated: {report.generated_at.strftime('%Y-%m-%d %H:%M')}*\n",
            f"## Score: {score.total}/100 ({report.grade})\n",
            "| Component | Points |",
            "|-----------|--------|",
            f"| Contact quantity | {score.quantity} |",
            f"| Weekly activity | {score.activity} |",
            f"| Relationship health | {score.health} |",
            f"| Follow-up completion | {score.follow_up} |",
        ]

        if report.insights:
            lines.append("\n## Insights\n")
            for insight in report.insights:
                lines.append(f"- {insight}")

        lines.extend([
            "\n## Network Growth\n",
            f"- **Total contacts**: {stats.total_contacts}",
            f"- **Added this week**: {stats.added_this_week}",
            f"- **Added this month**: {stats.added_this_month}",
            f"- **Average per week (last 3 months)**: {stats.average_contacts_per_week:.1f}",
            f"- **With email**: {stats.contacts_with_email}",
            f"- **With phone**: {stats.contacts_with_phone}",
            f"- **With both**: {stats.contacts_with_both}",
        ])

        if stats.top_companies:
            lines.extend([
                "\n### Top Companies\n",
                "| Company | Contacts |",
                "|---------|----------|",
            ])
            for entry in stats.top_companies:
                lines.append(f"| {entry.company} | {entry.count} |")

        lines.extend([
            "\n## Relationship Health\n",
            "| Strength | Contacts |",
            "|----------|----------|",
        ])
        for strength in RelationshipStrength:
            lines.append(f"| {strength.label} | {health.count_for(strength)} |")
        lines.append(
            f"\n*Average days since last contact: "
            f"{health.average_days_since_last_contact:.1f}*"
        )

        lines.extend([
            "\n## Follow-Ups\n",
            f"- **Reminders set**: {follow_up.total_reminders_set}",
            f"- **Overdue**: {follow_up.overdue}",
            f"- **Upcoming (7 days)**: {follow_up.upcoming}",
            f"- **Completed**: {follow_up.completed}",
            f"- **Completion rate**: {follow_up.completion_rate:.0%}",
            f"- **Average days from adding to follow-up**: {follow_up.average_follow_up_time:.1f}",
            "\n### Follow-Ups by Week\n",
            "| Week of | Follow-ups |",
            "|---------|------------|",
        ])
        for bucket in follow_up.follow_ups_by_week:
            bar = "█" * bucket.count
            lines.append(f"| {bucket.label} | {bucket.count} {bar} |")

        return "\n".join(lines)

    def generate_report(self, report: NetworkingReport) -> dict[str, Path]:
        """Generate networking report files.

        Returns:
            Dictionary of format -> filepath
        """
        generated = {}

        if "json" in self.formats:
            filepath = self._get_filename("networking_report", "json")
            filepath.write_text(json.dumps(report.to_dict(), indent=2))
            generated["json"] = filepath

        if "markdown" in self.formats:
            filepath = self._get_filename("networking_report", "md")
            filepath.write_text(self._generate_report_md(report))
            generated["markdown"] = filepath

        if "csv" in self.formats:
            filepath = self._get_filename("follow_ups_by_week", "csv")
            filepath.write_text(self._weekly_to_csv(report.follow_up.follow_ups_by_week))
            generated["csv"] = filepath

        logger.info(f"Generated networking reports: {list(generated.keys())}")
        return generated


def generate_outputs(
    report: NetworkingReport,
    output_dir: str | Path = "./outputs",
    formats: Optional[list[str]] = None,
    timestamp_filenames: bool = True,
) -> dict[str, Path]:
    """Convenience function to write all report files.

    Args:
        report: Finished networking report
        output_dir: Output directory
        formats: Formats to generate
        timestamp_filenames: Whether to include timestamp in filenames

    Returns:
        Dictionary of format -> filepath
    """
    generator = OutputGenerator(
        output_dir=output_dir,
        formats=formats or ["json", "markdown", "csv"],
        timestamp_filenames=timestamp_filenames,
    )
    return generator.generate_report(report)
