"""
Networking Score and Insights

Combines stats, health and follow-up metrics into a 0-100 score, a letter
grade and a short list of suggestions.
"""

import logging
import math
from typing import Optional

from pydantic import BaseModel, ConfigDict

from networkcrm.models.followup import FollowUpMetrics
from networkcrm.models.health import RelationshipHealthData
from networkcrm.models.stats import NetworkingStats
from networkcrm.utils.config import InsightsConfig, ScoringConfig

logger = logging.getLogger(__name__)


class ScoreBreakdown(BaseModel):
    """Networking score and the four sub-scores it is built from."""
    model_config = ConfigDict(frozen=True)

    quantity: int = 0
    activity: int = 0
    health: int = 0
    follow_up: int = 0
    total: int = 0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class NetworkingScorer:
    """Scores a contact book and suggests next steps.

    Score = quantity + activity + health + follow_up, each capped at
    ``sub_score_max``, total capped at 100:
        quantity  = contacts * max // contact_target
        activity  = added_this_week * max // weekly_target
        health    = round((strong + moderate) / contacts * max)
        follow_up = round(completion_rate * max), full credit at
                    full_credit_completion_rate
    """

    GRADE_THRESHOLDS = [
        (90, "A+"),
        (80, "A"),
        (70, "B+"),
        (60, "B"),
        (50, "C+"),
        (40, "C"),
        (30, "D+"),
        (20, "D"),
    ]

    def __init__(
        self,
        sub_score_max: int = 25,
        contact_target: int = 50,
        weekly_target: int = 3,
        full_credit_completion_rate: float = 0.8,
        praise_weekly_additions: int = 5,
        dormant_warning_ratio: float = 0.3,
    ):
        """Initialize scorer.

        Args:
            sub_score_max: Cap for each of the four sub-scores
            contact_target: Contact count that earns the full quantity score
            weekly_target: Weekly additions that earn the full activity score
            full_credit_completion_rate: Completion rate that earns the full follow-up score
            praise_weekly_additions: Weekly additions that trigger praise
            dormant_warning_ratio: Dormant share above which a warning is given
        """
        self.sub_score_max = sub_score_max
        self.contact_target = contact_target
        self.weekly_target = weekly_target
        self.full_credit_completion_rate = full_credit_completion_rate
        self.praise_weekly_additions = praise_weekly_additions
        self.dormant_warning_ratio = dormant_warning_ratio

    def score(
        self,
        stats: NetworkingStats,
        health: RelationshipHealthData,
        follow_up: FollowUpMetrics,
    ) -> ScoreBreakdown:
        """Compute the score breakdown."""
        cap = self.sub_score_max

        quantity = min(stats.total_contacts * cap // self.contact_target, cap)
        activity = min(stats.added_this_week * cap // self.weekly_target, cap)

        health_score = 0
        if stats.total_contacts > 0:
            healthy_ratio = health.healthy / stats.total_contacts
            health_score = min(_round_half_up(healthy_ratio * cap), cap)

        if follow_up.completion_rate >= self.full_credit_completion_rate:
            follow_up_score = cap
        else:
            follow_up_score = min(_round_half_up(follow_up.completion_rate * cap), cap)

        total = min(quantity + activity + health_score + follow_up_score, 100)

        return ScoreBreakdown(
            quantity=quantity,
            activity=activity,
            health=health_score,
            follow_up=follow_up_score,
            total=total,
        )

    def grade(self, score: int) -> str:
        """Map a score to a letter grade."""
        for threshold, letter in self.GRADE_THRESHOLDS:
            if score >= threshold:
                return letter
        return "F"

    def insights(
        self,
        stats: NetworkingStats,
        health: RelationshipHealthData,
        follow_up: FollowUpMetrics,
    ) -> list[str]:
        """Evaluate insight rules in priority order.

        Returns every triggered insight; callers decide how many to show.
        """
        insights = []

        if stats.added_this_week == 0:
            insights.append(
                "You haven't added any contacts this week. Try to meet one new person!"
            )
        elif stats.added_this_week >= self.praise_weekly_additions:
            insights.append(
                f"Great networking week! You added {stats.added_this_week} contacts."
            )

        if stats.total_contacts > 0:
            dormant_ratio = health.dormant / stats.total_contacts
            if dormant_ratio > self.dormant_warning_ratio:
                insights.append(
                    f"{int(dormant_ratio * 100)}% of your relationships are dormant. "
                    "Consider reaching out!"
                )

        if follow_up.overdue > 0:
            insights.append(
                f"You have {follow_up.overdue} overdue follow-ups. Time to reconnect!"
            )

        if follow_up.upcoming > 0:
            insights.append(
                f"{follow_up.upcoming} follow-ups coming up this week. Stay on track!"
            )

        if stats.incomplete_contacts > stats.total_contacts / 2:
            insights.append(
                "Many contacts are missing email or phone. "
                "Complete profiles for better networking!"
            )

        return insights


def synthesize(
    stats: NetworkingStats,
    health: RelationshipHealthData,
    follow_up: FollowUpMetrics,
    scoring: Optional[ScoringConfig] = None,
    insights: Optional[InsightsConfig] = None,
) -> tuple[ScoreBreakdown, str, list[str]]:
    """Convenience function to score a contact book.

    Args:
        stats: Networking statistics
        health: Relationship health data
        follow_up: Follow-up metrics
        scoring: Scoring configuration (defaults if omitted)
        insights: Insight configuration (defaults if omitted)

    Returns:
        Tuple of (score breakdown, letter grade, insights truncated to max_insights)
    """
    scoring = scoring or ScoringConfig()
    insights = insights or InsightsConfig()

    scorer = NetworkingScorer(
        sub_score_max=scoring.sub_score_max,
        contact_target=scoring.contact_target,
        weekly_target=scoring.weekly_target,
        full_credit_completion_rate=scoring.full_credit_completion_rate,
        praise_weekly_additions=insights.praise_weekly_additions,
        dormant_warning_ratio=insights.dormant_warning_ratio,
    )

    breakdown = scorer.score(stats, health, follow_up)
    grade = scorer.grade(breakdown.total)
    messages = scorer.insights(stats, health, follow_up)[:insights.max_insights]

    logger.debug(f"Score {breakdown.total} ({grade}), {len(messages)} insights")

    return breakdown, grade, messages
