"""
Networking Statistics

Count-based growth, completeness and company statistics for a contact book.
"""

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from networkcrm.models.entities import Contact
from networkcrm.utils.clock import TimeWindow
from networkcrm.utils.config import StatsConfig

logger = logging.getLogger(__name__)


class CompanyCount(BaseModel):
    """Number of contacts working at one company."""
    model_config = ConfigDict(frozen=True)

    company: str
    count: int


class NetworkingStats(BaseModel):
    """Growth and completeness statistics for the whole contact book."""
    model_config = ConfigDict(frozen=True)

    total_contacts: int = 0
    added_this_week: int = 0
    added_this_month: int = 0
    average_contacts_per_week: float = 0.0
    contacts_with_email: int = 0
    contacts_with_phone: int = 0
    contacts_with_both: int = 0
    top_companies: tuple[CompanyCount, ...] = ()

    @property
    def incomplete_contacts(self) -> int:
        """Contacts lacking an email address, a phone number, or both."""
        return self.total_contacts - self.contacts_with_both


class StatsAggregator:
    """Computes NetworkingStats from a sequence of contacts."""

    def __init__(
        self,
        top_companies: int = 5,
        average_window_months: int = 3,
        average_window_weeks: float = 12.0,
    ):
        """Initialize aggregator.

        Args:
            top_companies: Maximum number of companies to report
            average_window_months: Calendar months counted for the weekly average
            average_window_weeks: Fixed divisor for the weekly average
                (not derived from the actual elapsed weeks)
        """
        self.top_companies = top_companies
        self.average_window_months = average_window_months
        self.average_window_weeks = average_window_weeks

    def _rank_companies(self, contacts: Sequence[Contact]) -> tuple[CompanyCount, ...]:
        # dict keeps first-seen order and sorted() is stable, so ties
        # stay in input order
        companies: dict[str, int] = {}
        for contact in contacts:
            if contact.company:
                companies[contact.company] = companies.get(contact.company, 0) + 1

        ranked = sorted(companies.items(), key=lambda x: x[1], reverse=True)
        return tuple(
            CompanyCount(company=company, count=count)
            for company, count in ranked[:self.top_companies]
        )

    def compute(self, contacts: Sequence[Contact], now: datetime) -> NetworkingStats:
        """Compute statistics relative to ``now``."""
        window = TimeWindow(now)
        week_start = window.days_ago(7)
        month_start = window.months_ago(1)
        average_start = window.months_ago(self.average_window_months)

        added_this_week = sum(1 for c in contacts if c.date_added >= week_start)
        added_this_month = sum(1 for c in contacts if c.date_added >= month_start)
        added_in_window = sum(1 for c in contacts if c.date_added >= average_start)

        stats = NetworkingStats(
            total_contacts=len(contacts),
            added_this_week=added_this_week,
            added_this_month=added_this_month,
            average_contacts_per_week=added_in_window / self.average_window_weeks,
            contacts_with_email=sum(1 for c in contacts if c.has_email),
            contacts_with_phone=sum(1 for c in contacts if c.has_phone),
            contacts_with_both=sum(1 for c in contacts if c.has_email and c.has_phone),
            top_companies=self._rank_companies(contacts),
        )

        logger.debug(
            f"Stats: {stats.total_contacts} contacts, "
            f"{stats.added_this_week} added this week"
        )
        return stats


def compute_stats(
    contacts: Sequence[Contact],
    now: datetime,
    config: Optional[StatsConfig] = None,
) -> NetworkingStats:
    """Convenience function to compute networking statistics.

    Args:
        contacts: Contacts to analyze
        now: Reference instant
        config: Stats configuration (defaults if omitted)

    Returns:
        NetworkingStats snapshot
    """
    config = config or StatsConfig()
    aggregator = StatsAggregator(
        top_companies=config.top_companies,
        average_window_months=config.average_window_months,
        average_window_weeks=config.average_window_weeks,
    )
    return aggregator.compute(contacts, now)
