"""Shared enums for domain models and API."""

from enum import Enum


class Gender(str, Enum):
    """Baby gender as entered by the parent."""

    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"


class MilestoneCategory(str, Enum):
    """Developmental domain a milestone belongs to."""

    MOTOR = "motor"  # Motor Skills
    SOCIAL = "social"  # Social & Emotional
    COGNITIVE = "cognitive"  # Cognitive Development
    LANGUAGE = "language"  # Language & Communication


class ProgressStatus(str, Enum):
    """Per-milestone classification at a reference date."""

    ACHIEVED = "achieved"
    TOO_EARLY = "too_early"  # Below the earliest expected month
    WITHIN_WINDOW = "within_window"  # Watch: inside the expected window, not yet logged
    OVERDUE = "overdue"  # Past the latest expected month


class ProgressBucket(str, Enum):
    """Public grouping of progress statuses."""

    ACHIEVED = "achieved"
    PENDING = "pending"
    DELAYED = "delayed"
