"""
Tests for Follow-Up Metrics
"""

import pytest
from datetime import datetime, timedelta

from networkcrm.models.followup import FollowUpAggregator, compute_follow_up
from networkcrm.utils.config import FollowUpConfig


class TestComputeFollowUp:
    """Tests for compute_follow_up."""

    def test_empty_input(self, now):
        """Test that no contacts yields zeros and eight empty weeks."""
        metrics = compute_follow_up([], now)

        assert metrics.total_reminders_set == 0
        assert metrics.overdue == 0
        assert metrics.upcoming == 0
        assert metrics.completed == 0
        assert metrics.average_follow_up_time == 0.0
        assert metrics.completion_rate == 0.0
        assert len(metrics.follow_ups_by_week) == 8
        assert all(b.count == 0 for b in metrics.follow_ups_by_week)

    def test_sample_counts(self, sample_contacts, now):
        """Test counts on the sample book."""
        metrics = compute_follow_up(sample_contacts, now)

        assert metrics.total_reminders_set == 3
        assert metrics.overdue == 2
        assert metrics.upcoming == 1
        # Carol was contacted after her follow-up date; Bob was not
        assert metrics.completed == 1
        assert metrics.completion_rate == pytest.approx(1 / 3)

    def test_overdue_and_upcoming_boundaries(self, make_contact, now):
        """Test that now counts as upcoming and the horizon is inclusive."""
        contacts = [
            make_contact(follow_up_days_ago=0.0001),  # just passed
            make_contact(follow_up_days_ago=0),       # exactly now
            make_contact(follow_up_days_ago=-7),      # exactly at horizon
            make_contact(follow_up_days_ago=-7.001),  # beyond horizon
        ]
        metrics = compute_follow_up(contacts, now)

        assert metrics.total_reminders_set == 4
        assert metrics.overdue == 1
        assert metrics.upcoming == 2

    def test_completed_requires_later_contact(self, make_contact, now):
        """Test the completed heuristic: a contact after the reminder time."""
        contacts = [
            make_contact(follow_up_days_ago=10, last_contact_days_ago=5),   # completed
            make_contact(follow_up_days_ago=10, last_contact_days_ago=10),  # same instant
            make_contact(follow_up_days_ago=10, last_contact_days_ago=15),  # before
            make_contact(follow_up_days_ago=10),                            # never contacted
            make_contact(last_contact_days_ago=1),                          # no reminder
        ]
        metrics = compute_follow_up(contacts, now)

        assert metrics.completed == 1
        assert metrics.total_reminders_set == 4
        assert metrics.completion_rate == pytest.approx(0.25)

    def test_average_follow_up_time(self, make_contact, now):
        """Test days from adding a contact to its follow-up date."""
        contacts = [
            make_contact(added_days_ago=10, follow_up_days_ago=0),   # 10 days
            make_contact(added_days_ago=30, follow_up_days_ago=-5),  # 35 days
            make_contact(added_days_ago=30),                         # no reminder
        ]
        metrics = compute_follow_up(contacts, now)
        assert metrics.average_follow_up_time == pytest.approx(22.5)

    def test_follow_up_before_added(self, make_contact, now):
        """Test that a negative lead time is averaged as-is."""
        metrics = compute_follow_up([make_contact(added_days_ago=1, follow_up_days_ago=3)], now)
        assert metrics.average_follow_up_time == -2.0

    def test_partial_day_lead_truncates_toward_zero(self, make_contact, now):
        """Test that a follow-up half a day before adding counts as zero days."""
        metrics = compute_follow_up([make_contact(added_days_ago=1, follow_up_days_ago=1.5)], now)
        assert metrics.average_follow_up_time == 0.0

    def test_completion_rate_zero_without_reminders(self, make_contact, now):
        """Test the division guard."""
        metrics = compute_follow_up([make_contact(last_contact_days_ago=1)], now)
        assert metrics.completion_rate == 0.0


class TestWeeklyTrend:
    """Tests for the follow-ups-by-week series."""

    def test_bucket_starts_and_labels(self, now):
        """Test eight contiguous weeks ending at now, oldest first."""
        buckets = compute_follow_up([], now).follow_ups_by_week

        assert buckets[0].week_start == now - timedelta(weeks=8)
        assert buckets[-1].week_start == now - timedelta(weeks=1)
        for earlier, later in zip(buckets, buckets[1:]):
            assert later.week_start - earlier.week_start == timedelta(days=7)

        assert [b.label for b in buckets] == [
            "Apr 20", "Apr 27", "May 4", "May 11",
            "May 18", "May 25", "Jun 1", "Jun 8",
        ]

    def test_counts_fall_in_half_open_windows(self, make_contact, now):
        """Test bucket assignment including window edges."""
        contacts = [
            make_contact(follow_up_days_ago=56),        # start of oldest week
            make_contact(follow_up_days_ago=49),        # start of second week
            make_contact(follow_up_days_ago=49.0001),   # end of oldest week
            make_contact(follow_up_days_ago=3),         # last week
            make_contact(follow_up_days_ago=0.0001),    # last week, just before now
        ]
        buckets = compute_follow_up(contacts, now).follow_ups_by_week

        assert [b.count for b in buckets] == [2, 1, 0, 0, 0, 0, 0, 2]

    def test_outside_span_excluded(self, make_contact, now):
        """Test that follow-ups outside the eight weeks are not counted."""
        contacts = [
            make_contact(follow_up_days_ago=56.001),  # before the span
            make_contact(follow_up_days_ago=0),       # now, after the span
            make_contact(follow_up_days_ago=-3),      # future
            make_contact(follow_up_days_ago=20),      # inside
        ]
        metrics = compute_follow_up(contacts, now)

        assert len(metrics.follow_ups_by_week) == 8
        assert sum(b.count for b in metrics.follow_ups_by_week) == 1
        assert metrics.total_reminders_set == 4

    def test_length_fixed_for_large_input(self, make_contact, now):
        """Test that bucket counts sum to the contacts inside the span."""
        contacts = [make_contact(follow_up_days_ago=d) for d in range(-10, 80)]
        buckets = compute_follow_up(contacts, now).follow_ups_by_week

        inside = sum(1 for d in range(-10, 80) if 0 < d <= 56)
        assert len(buckets) == 8
        assert sum(b.count for b in buckets) == inside

    def test_configured_weeks(self, now):
        """Test a shorter trend window from configuration."""
        metrics = compute_follow_up([], now, FollowUpConfig(trend_weeks=4))
        assert len(metrics.follow_ups_by_week) == 4

    def test_label_has_no_zero_padding(self):
        """Test short labels such as "Jan 5"."""
        aggregator = FollowUpAggregator(trend_weeks=1)
        buckets = aggregator.weekly_trend([], datetime(2024, 1, 12, 9, 0))
        assert buckets[0].label == "Jan 5"
