"""
Core Data Models

Pydantic models for contacts, their recency signals and contact snapshots.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from networkcrm.utils.clock import normalize_instant


class RelationshipStrength(str, Enum):
    """Relationship health buckets, strongest first."""
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    DORMANT = "dormant"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def color(self) -> str:
        return _STRENGTH_COLORS[self]


_STRENGTH_COLORS = {
    RelationshipStrength.STRONG: "green",
    RelationshipStrength.MODERATE: "blue",
    RelationshipStrength.WEAK: "dark_orange",
    RelationshipStrength.DORMANT: "red",
}


class LastContactSignal(BaseModel):
    """Recency taken from the most recent real interaction."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["last_contact"] = "last_contact"
    at: datetime


class DateAddedSignal(BaseModel):
    """Recency fallback when no interaction was ever recorded."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["date_added"] = "date_added"
    at: datetime


RecencySignal = Annotated[
    Union[LastContactSignal, DateAddedSignal],
    Field(discriminator="kind"),
]


class Contact(BaseModel):
    """A person met while networking, as supplied by the contact store."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Identifier assigned by the contact store")
    first_name: str = ""
    last_name: str = ""
    company: Optional[str] = None
    job_title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    met_at: Optional[str] = None
    date_added: datetime = Field(description="When the contact record was created")
    last_contact: Optional[datetime] = Field(
        default=None,
        description="Most recent interaction",
    )
    next_follow_up: Optional[datetime] = Field(
        default=None,
        description="Scheduled reminder to reconnect",
    )

    @field_validator("date_added", "last_contact", "next_follow_up")
    @classmethod
    def _normalize_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return normalize_instant(value)

    @property
    def display_name(self) -> str:
        """Human-readable name for display."""
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.id

    @property
    def has_email(self) -> bool:
        return bool(self.email)

    @property
    def has_phone(self) -> bool:
        return bool(self.phone)

    @property
    def recency_signal(self) -> RecencySignal:
        """Best available evidence of when this relationship was last active."""
        if self.last_contact is not None:
            return LastContactSignal(at=self.last_contact)
        return DateAddedSignal(at=self.date_added)


class ContactSnapshot(BaseModel):
    """Immutable point-in-time copy of the contact book used for one analysis pass."""
    model_config = ConfigDict(frozen=True)

    contacts: tuple[Contact, ...] = ()
    source: Optional[str] = None

    @property
    def total_contacts(self) -> int:
        return len(self.contacts)

    def get_overdue_follow_ups(self, now: datetime) -> list[Contact]:
        """Contacts whose scheduled follow-up is already in the past, oldest first."""
        now = normalize_instant(now)
        overdue = [
            c for c in self.contacts
            if c.next_follow_up is not None and c.next_follow_up < now
        ]
        return sorted(overdue, key=lambda c: c.next_follow_up)

    def get_upcoming_follow_ups(self, now: datetime, days: int = 7) -> list[Contact]:
        """Contacts with a follow-up due within the next ``days`` days, soonest first."""
        now = normalize_instant(now)
        horizon = now + timedelta(days=days)
        upcoming = [
            c for c in self.contacts
            if c.next_follow_up is not None and now <= c.next_follow_up <= horizon
        ]
        return sorted(upcoming, key=lambda c: c.next_follow_up)
