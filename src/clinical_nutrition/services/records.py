"""Services for saved planner and calculator records."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from clinical_nutrition.domain.records import PlannerSnapshot, SavedRecord, ToolType

_logger = logging.getLogger(__name__)


class RecordRepository(Protocol):
    """Persistence interface for saved tool records."""

    def create_record(
        self, user_id: UUID, tool_type: ToolType, name: str, data: dict[str, object]
    ) -> SavedRecord:
        """Create a record and return it."""

    def update_record(
        self, user_id: UUID, record_id: UUID, name: str, data: dict[str, object]
    ) -> SavedRecord | None:
        """Replace a record's name and data; None when the user has no such row."""

    def get_record(self, user_id: UUID, record_id: UUID) -> SavedRecord | None:
        """Return a user's record by id, if present."""

    def list_records(
        self, user_id: UUID, tool_type: ToolType | None
    ) -> list[SavedRecord]:
        """Return a user's records, newest first."""

    def delete_record(self, user_id: UUID, record_id: UUID) -> bool:
        """Delete a record; False when nothing matched."""


@dataclass
class PlannerRecordService:
    """Stores and replays tool state, validating meal planner snapshots."""

    repository: RecordRepository

    def save(
        self,
        user_id: UUID,
        tool_type: ToolType,
        name: str,
        data: dict[str, object],
        record_id: UUID | None = None,
    ) -> SavedRecord | None:
        """Insert a new record, or overwrite ``record_id`` (last write wins).

        Meal planner data is normalized through ``PlannerSnapshot``. Raises
        ``ValueError`` for malformed planner data or when an update would
        change the record's tool type.
        """
        if tool_type is ToolType.MEAL_PLANNER:
            data = PlannerSnapshot.from_data(data).to_data()
        if record_id is None:
            record = self.repository.create_record(user_id, tool_type, name, data)
            _logger.info("Saved record: id=%s tool=%s", record.id, tool_type)
            return record
        current = self.repository.get_record(user_id, record_id)
        if current is None:
            _logger.warning("Record not found for update: id=%s", record_id)
            return None
        if current.tool_type is not tool_type:
            raise ValueError(
                f"Record {record_id} belongs to {current.tool_type}, not {tool_type}"
            )
        record = self.repository.update_record(user_id, record_id, name, data)
        if record is None:
            _logger.warning("Record not found for update: id=%s", record_id)
            return None
        _logger.info("Updated record: id=%s tool=%s", record.id, tool_type)
        return record

    def load(self, user_id: UUID, record_id: UUID) -> SavedRecord | None:
        """Return a saved record."""
        return self.repository.get_record(user_id, record_id)

    def list_records(
        self, user_id: UUID, tool_type: ToolType | None = None
    ) -> list[SavedRecord]:
        """List a user's records, optionally for one tool."""
        return self.repository.list_records(user_id, tool_type)

    def delete(self, user_id: UUID, record_id: UUID) -> bool:
        """Delete a record."""
        deleted = self.repository.delete_record(user_id, record_id)
        if deleted:
            _logger.info("Deleted record: id=%s", record_id)
        return deleted

    def save_planner(
        self,
        user_id: UUID,
        name: str,
        snapshot: PlannerSnapshot,
        record_id: UUID | None = None,
    ) -> SavedRecord | None:
        """Persist meal planner state."""
        return self.save(
            user_id, ToolType.MEAL_PLANNER, name, snapshot.to_data(), record_id
        )

    def load_planner(self, user_id: UUID, record_id: UUID) -> PlannerSnapshot | None:
        """Replay meal planner state saved by ``save_planner``."""
        record = self.load(user_id, record_id)
        if record is None or record.tool_type is not ToolType.MEAL_PLANNER:
            return None
        return PlannerSnapshot.from_data(record.data)
