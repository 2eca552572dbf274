"""
Data Models and Analytical Components

Pydantic models for contacts and the aggregators that analyze them.
"""

from networkcrm.models.entities import (
    Contact,
    ContactSnapshot,
    DateAddedSignal,
    LastContactSignal,
    RecencySignal,
    RelationshipStrength,
)
from networkcrm.models.relationship import RelationshipClassifier
from networkcrm.models.stats import CompanyCount, NetworkingStats, StatsAggregator, compute_stats
from networkcrm.models.health import HealthAggregator, RelationshipHealthData, compute_health
from networkcrm.models.followup import (
    FollowUpAggregator,
    FollowUpMetrics,
    WeeklyBucket,
    compute_follow_up,
)
from networkcrm.models.scoring import NetworkingScorer, ScoreBreakdown, synthesize

__all__ = [
    "Contact",
    "ContactSnapshot",
    "DateAddedSignal",
    "LastContactSignal",
    "RecencySignal",
    "RelationshipStrength",
    "RelationshipClassifier",
    "CompanyCount",
    "NetworkingStats",
    "StatsAggregator",
    "compute_stats",
    "HealthAggregator",
    "RelationshipHealthData",
    "compute_health",
    "FollowUpAggregator",
    "FollowUpMetrics",
    "WeeklyBucket",
    "compute_follow_up",
    "NetworkingScorer",
    "ScoreBreakdown",
    "synthesize",
]
