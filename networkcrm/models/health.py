"""
Relationship Health

Strength distribution and mean recency across the contact book.
"""

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer

from networkcrm.models.entities import Contact, RelationshipStrength
from networkcrm.models.relationship import RelationshipClassifier
from networkcrm.utils.clock import TimeWindow
from networkcrm.utils.config import RelationshipConfig

logger = logging.getLogger(__name__)


class RelationshipHealthData(BaseModel):
    """Per-bucket counts and recency for the whole contact book."""
    model_config = ConfigDict(frozen=True)

    strong: int = 0
    moderate: int = 0
    weak: int = 0
    dormant: int = 0
    average_days_since_last_contact: float = Field(
        default=0.0,
        description="Mean over contacts with a recorded interaction only",
    )

    @property
    def healthy(self) -> int:
        """Strong plus moderate relationships."""
        return self.strong + self.moderate

    @property
    def distribution(self) -> Mapping[str, int]:
        """Read-only count per strength bucket; always holds all four buckets."""
        return MappingProxyType(
            {strength.value: self.count_for(strength) for strength in RelationshipStrength}
        )

    def count_for(self, strength: RelationshipStrength) -> int:
        return getattr(self, strength.value)

    @model_serializer(mode="wrap")
    def serialize_with_distribution(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        data["distribution"] = dict(self.distribution)
        return data


class HealthAggregator:
    """Applies the classifier to every contact and tallies the results."""

    def __init__(self, classifier: Optional[RelationshipClassifier] = None):
        self.classifier = classifier or RelationshipClassifier()

    def compute(self, contacts: Sequence[Contact], now: datetime) -> RelationshipHealthData:
        """Compute relationship health relative to ``now``."""
        window = TimeWindow(now)
        counts = {strength: 0 for strength in RelationshipStrength}
        total_days = 0
        with_last_contact = 0

        for contact in contacts:
            counts[self.classifier.classify(contact, window.now)] += 1

            if contact.last_contact is not None:
                total_days += window.elapsed_days(contact.last_contact)
                with_last_contact += 1

        average_days = 0.0
        if with_last_contact > 0:
            average_days = total_days / with_last_contact

        health = RelationshipHealthData(
            strong=counts[RelationshipStrength.STRONG],
            moderate=counts[RelationshipStrength.MODERATE],
            weak=counts[RelationshipStrength.WEAK],
            dormant=counts[RelationshipStrength.DORMANT],
            average_days_since_last_contact=average_days,
        )
        logger.debug(f"Health distribution: {dict(health.distribution)}")
        return health


def compute_health(
    contacts: Sequence[Contact],
    now: datetime,
    config: Optional[RelationshipConfig] = None,
) -> RelationshipHealthData:
    """Convenience function to compute relationship health.

    Args:
        contacts: Contacts to analyze
        now: Reference instant
        config: Classification thresholds (defaults if omitted)

    Returns:
        RelationshipHealthData snapshot
    """
    config = config or RelationshipConfig()
    classifier = RelationshipClassifier(
        strong_days=config.strong_days,
        moderate_days=config.moderate_days,
        dormant_days=config.dormant_days,
    )
    return HealthAggregator(classifier).compute(contacts, now)
