"""
Relationship Strength Classifier

Buckets a contact into Strong / Moderate / Weak / Dormant by elapsed time.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from networkcrm.models.entities import (
    Contact,
    DateAddedSignal,
    LastContactSignal,
    RelationshipStrength,
)
from networkcrm.utils.clock import normalize_instant


class RelationshipClassifier:
    """Classifies relationship strength from a contact's recency signal.

    With a recorded interaction:
        elapsed < strong_days    -> Strong
        elapsed < moderate_days  -> Moderate
        elapsed < dormant_days   -> Weak
        otherwise                -> Dormant

    Without one, only the creation date is known, so the contact is Weak
    unless it was added more than dormant_days ago.
    """

    def __init__(
        self,
        strong_days: int = 30,
        moderate_days: int = 90,
        dormant_days: int = 180,
    ):
        """Initialize classifier with thresholds.

        Args:
            strong_days: Upper bound (exclusive) for a Strong relationship
            moderate_days: Upper bound (exclusive) for a Moderate relationship
            dormant_days: Age at which a relationship becomes Dormant
        """
        if not strong_days <= moderate_days <= dormant_days:
            raise ValueError(
                "Thresholds must be ordered: "
                f"{strong_days} <= {moderate_days} <= {dormant_days}"
            )
        self.strong = timedelta(days=strong_days)
        self.moderate = timedelta(days=moderate_days)
        self.dormant = timedelta(days=dormant_days)

    def classify(self, contact: Contact, now: datetime) -> RelationshipStrength:
        """Classify one contact relative to ``now``."""
        now = normalize_instant(now)
        signal = contact.recency_signal

        if isinstance(signal, LastContactSignal):
            elapsed = now - signal.at
            if elapsed < self.strong:
                return RelationshipStrength.STRONG
            if elapsed < self.moderate:
                return RelationshipStrength.MODERATE
            if elapsed < self.dormant:
                return RelationshipStrength.WEAK
            return RelationshipStrength.DORMANT

        if isinstance(signal, DateAddedSignal) and signal.at < now - self.dormant:
            return RelationshipStrength.DORMANT
        return RelationshipStrength.WEAK

    def classify_all(
        self,
        contacts: Iterable[Contact],
        now: datetime,
    ) -> dict[str, RelationshipStrength]:
        """Classify every contact, keyed by contact ID in input order."""
        return {contact.id: self.classify(contact, now) for contact in contacts}
