"""Milestone logging and progress classification.

Classification uses the baby's corrected age in whole months at the
reference date:

    logged                               -> achieved (whatever the window)
    corrected < earliest                 -> too early     (pending)
    earliest <= corrected <= latest      -> within window (pending, watch flag)
    corrected > latest                   -> overdue       (delayed)

The four internal statuses collapse to three public buckets only when the
response is built.

Each baby's records are one JSON list under their own key, and a second key
per record maps the record id back to its baby. Logging upserts by
(baby_id, milestone_id) with a read-then-write on that baby's list. That step
is not atomic: callers must serialize concurrent writes for the same baby.
Writes for different babies never share a key.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import date, datetime, timezone

from neonest.core.enums import ProgressBucket, ProgressStatus
from neonest.core.exceptions import InvalidDateError, NotFoundError, UnknownMilestoneError
from neonest.core.milestone_data import CATEGORY_LABELS
from neonest.schemas.baby import BabyProfile
from neonest.schemas.milestone import (
    MilestoneDefinition,
    MilestoneExport,
    MilestoneProgress,
    MilestoneRecord,
    MilestoneRecordCreate,
    MilestoneRecordUpdate,
    MilestoneReport,
    ProgressEntry,
    ReportEntry,
)
from neonest.services.baby_profiles import BabyProfileService
from neonest.services.catalog import MilestoneCatalog
from neonest.services.corrected_age import as_calendar_date, corrected_age, describe_age, utc_today
from neonest.store.base import LocalRecordStore
from neonest.store.collection import JsonCollection
from neonest.store.keys import record_owner_key

logger = logging.getLogger(__name__)

STATUS_BUCKETS: dict[ProgressStatus, ProgressBucket] = {
    ProgressStatus.ACHIEVED: ProgressBucket.ACHIEVED,
    ProgressStatus.TOO_EARLY: ProgressBucket.PENDING,
    ProgressStatus.WITHIN_WINDOW: ProgressBucket.PENDING,
    ProgressStatus.OVERDUE: ProgressBucket.DELAYED,
}


def classify_milestone(
    definition: MilestoneDefinition,
    corrected_months: int,
    record: MilestoneRecord | None = None,
) -> ProgressStatus:
    """Status of one milestone at a corrected age. Delayed requires strictly exceeding latest."""
    if record is not None:
        return ProgressStatus.ACHIEVED
    window = definition.window
    if corrected_months < window.earliest_months:
        return ProgressStatus.TOO_EARLY
    if corrected_months <= window.latest_months:
        return ProgressStatus.WITHIN_WINDOW
    return ProgressStatus.OVERDUE


class MilestoneProgressEngine:
    def __init__(
        self,
        store: LocalRecordStore,
        catalog: MilestoneCatalog,
        today: Callable[[], date] = utc_today,
    ):
        self.store = store
        self.catalog = catalog
        self.profiles = BabyProfileService(store, today=today)
        self._today = today

    # ── Validation ───────────────────────────────────────────────────────

    def _check_not_future(self, achieved_date: date) -> None:
        today = self._today()
        if achieved_date > today:
            raise InvalidDateError(
                f"Achieved date {achieved_date.isoformat()} is after today ({today.isoformat()})"
            )

    @staticmethod
    def _check_not_before_birth(achieved_date: date, profile: BabyProfile) -> None:
        if achieved_date < profile.birth_date:
            raise InvalidDateError(
                f"Achieved date {achieved_date.isoformat()} is before birth date "
                f"{profile.birth_date.isoformat()}"
            )

    # ── Records ──────────────────────────────────────────────────────────

    async def log_milestone(self, data: MilestoneRecordCreate) -> MilestoneRecord:
        """
        Validate and upsert a milestone record. A second log for the same
        (baby_id, milestone_id) replaces the first and keeps its id.
        """
        # Checks that need no store access run first: a rejected log never writes
        self._check_not_future(data.achieved_date)
        if data.milestone_id not in self.catalog:
            raise UnknownMilestoneError(data.milestone_id)
        profile = await self.profiles.get_baby_profile(data.baby_id)
        self._check_not_before_birth(data.achieved_date, profile)

        collection = self.profiles.records_for(data.baby_id)
        records = await collection.load()
        now = datetime.now(timezone.utc)
        for i, existing in enumerate(records):
            if existing.milestone_id == data.milestone_id:
                record = existing.model_copy(update={**data.model_dump(), "updated_at": now})
                records[i] = record
                break
        else:
            record = MilestoneRecord(
                id=uuid.uuid4().hex,
                created_at=now,
                updated_at=now,
                **data.model_dump(),
            )
            records.append(record)
            await self.store.set(record_owner_key(record.id), data.baby_id)

        await collection.save(records)
        logger.info("Logged milestone %s for baby %s (record %s)", data.milestone_id, data.baby_id, record.id)
        return record

    async def list_milestone_records(self, baby_id: str) -> list[MilestoneRecord]:
        return await self.profiles.records_for(baby_id).load()

    async def _find_record(
        self, record_id: str
    ) -> tuple[JsonCollection[MilestoneRecord], list[MilestoneRecord], int]:
        """Owning collection, its records and the index of record_id in them."""
        baby_id = await self.store.get(record_owner_key(record_id))
        if baby_id is None:
            raise NotFoundError("Milestone record", record_id)
        collection = self.profiles.records_for(baby_id)
        records = await collection.load()
        for i, record in enumerate(records):
            if record.id == record_id:
                return collection, records, i
        raise NotFoundError("Milestone record", record_id)

    async def update_milestone(self, record_id: str, patch: MilestoneRecordUpdate) -> bool:
        """Partial update of achieved_date, notes and media. Sending notes=None clears them."""
        if patch.achieved_date is not None:
            self._check_not_future(patch.achieved_date)

        collection, records, i = await self._find_record(record_id)
        record = records[i]
        changes = patch.changes()
        if "achieved_date" in changes:
            profile = await self.profiles.get_baby_profile(record.baby_id)
            self._check_not_before_birth(changes["achieved_date"], profile)

        records[i] = record.model_copy(update={**changes, "updated_at": datetime.now(timezone.utc)})
        await collection.save(records)
        return True

    async def delete_milestone(self, record_id: str) -> bool:
        collection, records, i = await self._find_record(record_id)
        del records[i]
        await collection.save(records)
        await self.store.remove(record_owner_key(record_id))
        return True

    # ── Progress ─────────────────────────────────────────────────────────

    def _entry(
        self,
        definition: MilestoneDefinition,
        profile: BabyProfile,
        corrected_months: int,
        record: MilestoneRecord | None,
    ) -> ProgressEntry:
        status = classify_milestone(definition, corrected_months, record)
        entry = ProgressEntry(
            milestone_id=definition.id,
            title=definition.title,
            category=definition.category,
            window=definition.window,
            status=status,
            within_expected_window=status is ProgressStatus.WITHIN_WINDOW,
            corrected_age_months=corrected_months,
        )
        if record is not None:
            entry.record_id = record.id
            entry.achieved_date = record.achieved_date
            entry.notes = record.notes
            entry.media = list(record.media)
            # Profile dates may have been edited after logging
            if record.achieved_date >= profile.birth_date:
                entry.corrected_age_at_achievement = corrected_age(
                    profile.birth_date, profile.due_date, record.achieved_date
                )
        return entry

    def _evaluate(
        self, profile: BabyProfile, reference: date, records: list[MilestoneRecord]
    ) -> MilestoneProgress:
        age = corrected_age(profile.birth_date, profile.due_date, reference)
        logged = {r.milestone_id: r for r in records}

        progress = MilestoneProgress(baby_id=profile.id, reference_date=reference, corrected_age=age)
        buckets = {
            ProgressBucket.ACHIEVED: progress.achieved,
            ProgressBucket.PENDING: progress.pending,
            ProgressBucket.DELAYED: progress.delayed,
        }
        for definition in self.catalog:
            entry = self._entry(definition, profile, age.corrected_months, logged.get(definition.id))
            buckets[STATUS_BUCKETS[entry.status]].append(entry)
        return progress

    def _reference(self, reference_date: date | datetime | None) -> date:
        return as_calendar_date(reference_date) if reference_date is not None else self._today()

    async def _snapshot(
        self, baby_id: str, reference_date: date | datetime | None
    ) -> tuple[BabyProfile, list[MilestoneRecord], MilestoneProgress]:
        """Profile, records and progress from a single read of each key."""
        profile = await self.profiles.get_baby_profile(baby_id)
        records = await self.list_milestone_records(baby_id)
        return profile, records, self._evaluate(profile, self._reference(reference_date), records)

    async def get_milestone_progress(
        self, baby_id: str, reference_date: date | datetime | None = None
    ) -> MilestoneProgress:
        """Classify every catalog milestone for one baby at reference_date (default today)."""
        _, _, progress = await self._snapshot(baby_id, reference_date)
        return progress

    # ── Reports ──────────────────────────────────────────────────────────

    @staticmethod
    def _report_entry(entry: ProgressEntry) -> ReportEntry:
        at_achievement = entry.corrected_age_at_achievement
        return ReportEntry(
            milestone_id=entry.milestone_id,
            title=entry.title,
            category=entry.category,
            achieved_date=entry.achieved_date,
            corrected_age_months=entry.corrected_age_months,
            corrected_age_months_at_achievement=at_achievement.corrected_months if at_achievement else None,
            within_expected_window=entry.within_expected_window,
            notes=entry.notes,
        )

    def _report(self, profile: BabyProfile, progress: MilestoneProgress) -> MilestoneReport:
        return MilestoneReport(
            baby_id=profile.id,
            baby_name=profile.name,
            reference_date=progress.reference_date,
            corrected_age=progress.corrected_age,
            achieved_milestones=[self._report_entry(e) for e in progress.achieved],
            pending_milestones=[self._report_entry(e) for e in progress.pending],
            delayed_milestones=[self._report_entry(e) for e in progress.delayed],
            generated_at=datetime.now(timezone.utc),
        )

    async def generate_milestone_report(
        self, baby_id: str, reference_date: date | datetime | None = None
    ) -> MilestoneReport:
        """Snapshot of progress with catalog details flattened in. Read-only."""
        profile, _, progress = await self._snapshot(baby_id, reference_date)
        return self._report(profile, progress)

    @staticmethod
    def render_summary(report: MilestoneReport) -> str:
        """Plain-text summary for pediatric visits."""
        lines = [
            "Milestone Summary",
            f"Baby: {report.baby_name}",
            f"Generated: {report.generated_at.date().isoformat()}",
            f"Corrected age: {describe_age(report.corrected_age.corrected_days)}",
            "",
            f"Achieved Milestones ({len(report.achieved_milestones)}):",
        ]
        for entry in sorted(report.achieved_milestones, key=lambda e: e.achieved_date or date.min):
            achieved = entry.achieved_date.isoformat() if entry.achieved_date else "unknown date"
            lines.append(f"• {entry.title} ({entry.milestone_id}): {achieved}")
            if entry.notes:
                lines.append(f"  Notes: {entry.notes}")

        if report.delayed_milestones:
            lines += ["", f"Delayed Milestones ({len(report.delayed_milestones)}):"]
            for entry in report.delayed_milestones:
                lines.append(f"• {entry.title} ({CATEGORY_LABELS[entry.category.value]})")
        return "\n".join(lines) + "\n"

    async def generate_milestone_summary(
        self, baby_id: str, reference_date: date | datetime | None = None
    ) -> str:
        return self.render_summary(await self.generate_milestone_report(baby_id, reference_date))

    async def export_milestone_data(
        self, baby_id: str, reference_date: date | datetime | None = None
    ) -> MilestoneExport:
        """Summary, raw records and progress in one bundle for healthcare providers."""
        profile, records, progress = await self._snapshot(baby_id, reference_date)
        return MilestoneExport(
            summary=self.render_summary(self._report(profile, progress)),
            detailed_logs=records,
            progress=progress,
        )
