"""Domain errors raised by the age calculator, services and record stores."""


class NeoNestError(Exception):
    """Base class for all domain errors."""


class InvalidDateError(NeoNestError, ValueError):
    """A date violates an ordering rule (future achievement, reference before birth)."""


class NotFoundError(NeoNestError, LookupError):
    """An unknown baby id or milestone record id."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id!r} not found")


class UnknownMilestoneError(NeoNestError, LookupError):
    """A milestone id absent from the catalog."""

    def __init__(self, milestone_id: str):
        self.milestone_id = milestone_id
        super().__init__(f"Unknown milestone {milestone_id!r}")


class StorageError(NeoNestError):
    """The record store is unavailable or rejected a read or write."""
