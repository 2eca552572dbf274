"""
Pytest Configuration and Shared Fixtures
"""

import pytest
from datetime import datetime, timedelta
from pathlib import Path

from networkcrm.models.entities import Contact, ContactSnapshot
from networkcrm.utils.clock import FixedClock

NOW = datetime(2024, 6, 15, 12, 0)


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant shared by all analytics tests."""
    return NOW


@pytest.fixture
def fixed_clock(now) -> FixedClock:
    """Clock pinned to the reference instant."""
    return FixedClock(now)


@pytest.fixture
def make_contact(now):
    """Factory for contacts with dates given as days relative to now.

    Positive values are in the past, negative values in the future.
    """
    counter = {"n": 0}

    def _make(
        added_days_ago: float = 365,
        last_contact_days_ago: float | None = None,
        follow_up_days_ago: float | None = None,
        **fields,
    ) -> Contact:
        counter["n"] += 1
        fields.setdefault("id", f"contact_{counter['n']:03d}")
        fields.setdefault("first_name", "Test")
        fields.setdefault("last_name", f"Person{counter['n']}")

        last_contact = None
        if last_contact_days_ago is not None:
            last_contact = now - timedelta(days=last_contact_days_ago)

        next_follow_up = None
        if follow_up_days_ago is not None:
            next_follow_up = now - timedelta(days=follow_up_days_ago)

        return Contact(
            date_added=now - timedelta(days=added_days_ago),
            last_contact=last_contact,
            next_follow_up=next_follow_up,
            **fields,
        )

    return _make


@pytest.fixture
def sample_contacts(make_contact) -> list[Contact]:
    """A small, varied contact book."""
    return [
        make_contact(
            added_days_ago=2,
            last_contact_days_ago=1,
            follow_up_days_ago=-3,
            first_name="Alice",
            last_name="Johnson",
            company="TechCorp",
            email="alice@techcorp.com",
            phone="555-0100",
        ),
        make_contact(
            added_days_ago=20,
            last_contact_days_ago=45,
            follow_up_days_ago=10,
            first_name="Bob",
            last_name="Williams",
            company="StartupXYZ",
            email="bob@startupxyz.io",
        ),
        make_contact(
            added_days_ago=100,
            last_contact_days_ago=120,
            follow_up_days_ago=130,
            first_name="Carol",
            last_name="Davis",
            company="TechCorp",
            phone="555-0102",
        ),
        make_contact(
            added_days_ago=400,
            first_name="David",
            last_name="Brown",
            company="BigCo",
        ),
        make_contact(
            added_days_ago=50,
            first_name="Erin",
            last_name="Moore",
        ),
    ]


@pytest.fixture
def sample_snapshot(sample_contacts) -> ContactSnapshot:
    """Snapshot wrapping the sample contacts."""
    return ContactSnapshot(contacts=tuple(sample_contacts), source="test")


@pytest.fixture
def scenario_contacts(make_contact) -> list[Contact]:
    """Sixty contacts that score 92 (A+).

    - 4 added in the last week, the rest over a year ago
    - 40 contacted 5 days ago (Strong), 20 never contacted (Dormant)
    - 10 overdue follow-ups, 9 of them followed by a later contact
    """
    contacts = []
    for i in range(60):
        contacts.append(
            make_contact(
                added_days_ago=2 if i < 4 else 400,
                last_contact_days_ago=5 if i < 40 else None,
                follow_up_days_ago=10 if 31 <= i <= 40 else None,
            )
        )
    return contacts


@pytest.fixture
def contacts_csv(tmp_path) -> Path:
    """A CSV contact export with camelCase headers."""
    content = (
        "id,firstName,lastName,company,email,phone,dateAdded,lastContact,nextFollowUp\n"
        "c1,Jane,Smith,Acme Corp,jane@acme.com,555-0101,2024-06-10,2024-06-12,2024-06-20\n"
        "c2,John,Doe,,,,2024-01-05,,\n"
        "c3,No,Date,Acme Corp,,,,,\n"
        "c4,Sam,Lee,Globex,sam@globex.com,,2023-11-01 09:30:00,2024-02-01,not a date\n"
    )
    path = tmp_path / "contacts.csv"
    path.write_text(content)
    return path
