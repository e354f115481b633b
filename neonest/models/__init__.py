"""ORM models - import all so Base.metadata is complete for migrations."""

from neonest.models.record import StoredRecord

__all__ = ["StoredRecord"]
