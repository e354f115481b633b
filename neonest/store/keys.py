"""Record store key layout."""

from neonest.core.constants import MILESTONE_RECORDS_KEY, RECORD_OWNER_KEY


def milestone_records_key(baby_id: str) -> str:
    """Key of the JSON list holding one baby's milestone records."""
    return f"{MILESTONE_RECORDS_KEY}:{baby_id}"


def record_owner_key(record_id: str) -> str:
    """Key mapping a record id to the baby that owns it."""
    return f"{RECORD_OWNER_KEY}:{record_id}"
