"""
Follow-Up Metrics

Reminder counts, timing averages and a weekly trend of scheduled follow-ups.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict

from networkcrm.models.entities import Contact
from networkcrm.utils.clock import TimeWindow, normalize_instant, whole_days
from networkcrm.utils.config import FollowUpConfig

logger = logging.getLogger(__name__)

WEEK = timedelta(days=7)


class WeeklyBucket(BaseModel):
    """Follow-ups scheduled within one week-long window."""
    model_config = ConfigDict(frozen=True)

    label: str
    week_start: datetime
    count: int = 0


class FollowUpMetrics(BaseModel):
    """Reminder statistics for the whole contact book."""
    model_config = ConfigDict(frozen=True)

    total_reminders_set: int = 0
    overdue: int = 0
    upcoming: int = 0
    completed: int = 0
    average_follow_up_time: float = 0.0
    completion_rate: float = 0.0
    follow_ups_by_week: tuple[WeeklyBucket, ...] = ()


def _week_label(week_start: datetime) -> str:
    """Short label such as "Jan 5"."""
    return f"{week_start:%b} {week_start.day}"


class FollowUpAggregator:
    """Computes FollowUpMetrics from a sequence of contacts.

    A follow-up counts as completed when a real interaction was recorded
    after the reminder time. There is no explicit "reminder fulfilled" flag,
    so this is an approximation: any later interaction counts, whether or
    not it answered that reminder.
    """

    def __init__(self, upcoming_days: int = 7, trend_weeks: int = 8):
        """Initialize aggregator.

        Args:
            upcoming_days: Horizon for "upcoming" follow-ups
            trend_weeks: Number of weekly trend buckets ending at now
        """
        self.upcoming = timedelta(days=upcoming_days)
        self.trend_weeks = trend_weeks

    @staticmethod
    def is_completed(contact: Contact) -> bool:
        if contact.next_follow_up is None or contact.last_contact is None:
            return False
        return contact.last_contact > contact.next_follow_up

    def weekly_trend(
        self,
        contacts: Sequence[Contact],
        now: datetime,
    ) -> tuple[WeeklyBucket, ...]:
        """Count follow-ups per week over the ``trend_weeks`` weeks before now.

        Always returns ``trend_weeks`` buckets, oldest first. Follow-ups
        outside the whole span are not counted anywhere.
        """
        window = TimeWindow(now)
        scheduled = [c.next_follow_up for c in contacts if c.next_follow_up is not None]

        buckets = []
        for offset in range(self.trend_weeks, 0, -1):
            week_start = window.weeks_ago(offset)
            week_end = week_start + WEEK
            count = sum(1 for at in scheduled if week_start <= at < week_end)
            buckets.append(
                WeeklyBucket(label=_week_label(week_start), week_start=week_start, count=count)
            )
        return tuple(buckets)

    def compute(self, contacts: Sequence[Contact], now: datetime) -> FollowUpMetrics:
        """Compute follow-up metrics relative to ``now``."""
        now = normalize_instant(now)
        horizon = now + self.upcoming

        total = 0
        overdue = 0
        upcoming = 0
        completed = 0
        lead_days: list[int] = []

        for contact in contacts:
            follow_up = contact.next_follow_up
            if follow_up is None:
                continue

            total += 1
            if follow_up < now:
                overdue += 1
            elif follow_up <= horizon:
                upcoming += 1

            lead_days.append(whole_days(follow_up - contact.date_added))

            if self.is_completed(contact):
                completed += 1

        average_lead = sum(lead_days) / len(lead_days) if lead_days else 0.0
        completion_rate = completed / total if total > 0 else 0.0

        logger.debug(
            f"Follow-ups: {total} set, {overdue} overdue, "
            f"{upcoming} upcoming, {completed} completed"
        )

        return FollowUpMetrics(
            total_reminders_set=total,
            overdue=overdue,
            upcoming=upcoming,
            completed=completed,
            average_follow_up_time=average_lead,
            completion_rate=completion_rate,
            follow_ups_by_week=self.weekly_trend(contacts, now),
        )


def compute_follow_up(
    contacts: Sequence[Contact],
    now: datetime,
    config: Optional[FollowUpConfig] = None,
) -> FollowUpMetrics:
    """Convenience function to compute follow-up metrics.

    Args:
        contacts: Contacts to analyze
        now: Reference instant
        config: Follow-up configuration (defaults if omitted)

    Returns:
        FollowUpMetrics snapshot
    """
    config = config or FollowUpConfig()
    aggregator = FollowUpAggregator(
        upcoming_days=config.upcoming_days,
        trend_weeks=config.trend_weeks,
    )
    return aggregator.compute(contacts, now)
