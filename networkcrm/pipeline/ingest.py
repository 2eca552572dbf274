"""
Contact Export Ingestion

Loads contact exports (CSV or JSON) into an immutable ContactSnapshot.
"""

import json
import logging
import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import pandas as pd
from pydantic import ValidationError

from networkcrm.models.entities import Contact, ContactSnapshot

logger = logging.getLogger(__name__)

# Accepted spellings per field, after header normalization
FIELD_ALIASES = {
    "id": ["id", "contact_id"],
    "first_name": ["first_name", "firstname"],
    "last_name": ["last_name", "lastname"],
    "company": ["company", "organization"],
    "job_title": ["job_title", "position", "title"],
    "email": ["email", "email_address"],
    "phone": ["phone", "phone_number"],
    "met_at": ["met_at"],
    "date_added": ["date_added", "created_at"],
    "last_contact": ["last_contact", "last_contacted"],
    "next_follow_up": ["next_follow_up", "next_followup"],
}

DATE_FIELDS = ("date_added", "last_contact", "next_follow_up")


def _normalize_column(name: str) -> str:
    """Normalize a header to snake_case: "dateAdded" and "Date Added" -> "date_added"."""
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", str(name).strip())
    return name.lower().replace(" ", "_").replace("-", "_")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, dict)):
        return False
    return bool(pd.isna(value))


def _parse_date(value: Any) -> Optional[datetime]:
    """Parse a date or timestamp value; returns None when absent or unparseable."""
    if _is_missing(value):
        return None
    if isinstance(value, datetime):
        return value

    text = str(value).strip()
    if not text:
        return None

    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        logger.warning(f"Could not parse date: {text}")
        return None
    return parsed.to_pydatetime()


def _clean_text(value: Any) -> Optional[str]:
    """Strip a text value; empty or missing values become None."""
    if _is_missing(value):
        return None
    text = str(value).strip()
    return text or None


def _lookup(row: Mapping[str, Any], field: str) -> Any:
    for alias in FIELD_ALIASES[field]:
        value = row.get(alias)
        if not _is_missing(value):
            return value
    return None


def _record_to_contact(row: Mapping[str, Any], index: int) -> Optional[Contact]:
    """Build a Contact from one normalized record, or None if it must be skipped."""
    date_added = _parse_date(_lookup(row, "date_added"))
    if date_added is None:
        logger.warning(f"Skipping contact row {index}: missing date_added")
        return None

    contact_id = _clean_text(_lookup(row, "id")) or f"contact_{index:04d}"

    try:
        return Contact(
            id=contact_id,
            first_name=_clean_text(_lookup(row, "first_name")) or "",
            last_name=_clean_text(_lookup(row, "last_name")) or "",
            company=_clean_text(_lookup(row, "company")),
            job_title=_clean_text(_lookup(row, "job_title")),
            email=_clean_text(_lookup(row, "email")),
            phone=_clean_text(_lookup(row, "phone")),
            met_at=_clean_text(_lookup(row, "met_at")),
            date_added=date_added,
            last_contact=_parse_date(_lookup(row, "last_contact")),
            next_follow_up=_parse_date(_lookup(row, "next_follow_up")),
        )
    except ValidationError as e:
        logger.warning(f"Skipping malformed contact row {index}: {e}")
        return None


def contacts_from_records(
    records: Iterable[Mapping[str, Any]],
    source: Optional[str] = None,
) -> ContactSnapshot:
    """Build a snapshot from raw records (e.g. a contacts API response).

    Keys may be snake_case or camelCase. Input order is preserved.
    """
    contacts = []
    for index, record in enumerate(records):
        row = {_normalize_column(k): v for k, v in record.items()}
        contact = _record_to_contact(row, index)
        if contact is not None:
            contacts.append(contact)

    return ContactSnapshot(contacts=tuple(contacts), source=source)


def _load_csv(filepath: Path) -> ContactSnapshot:
    df = pd.read_csv(filepath, dtype=str)
    df.columns = [_normalize_column(col) for col in df.columns]

    records = [row.to_dict() for _, row in df.iterrows()]
    return contacts_from_records(records, source=str(filepath))


def _load_json(filepath: Path) -> ContactSnapshot:
    with open(filepath) as f:
        data = json.load(f)

    # Accept both a bare list and the API envelope {"contacts": [...]}
    if isinstance(data, dict) and "contacts" in data:
        data = data["contacts"]
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of contacts in {filepath}")

    return contacts_from_records(data, source=str(filepath))


def load_contacts(path: str | Path) -> ContactSnapshot:
    """Load a contact export from disk.

    Args:
        path: CSV or JSON file

    Returns:
        ContactSnapshot preserving file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported or the JSON shape is wrong
    """
    filepath = Path(path)

    if not filepath.exists():
        raise FileNotFoundError(f"Contact file not found: {filepath}")

    suffix = filepath.suffix.lower()
    if suffix == ".csv":
        snapshot = _load_csv(filepath)
    elif suffix == ".json":
        snapshot = _load_json(filepath)
    else:
        raise ValueError(f"Unsupported contact file format: {suffix or filepath.name}")

    logger.info(f"Loaded {snapshot.total_contacts} contacts from {filepath.name}")
    return snapshot
