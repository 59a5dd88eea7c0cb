"""Supabase-backed repository for saved tool records."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from clinical_nutrition.domain.records import SavedRecord, ToolType
from clinical_nutrition.services.records import RecordRepository

_TABLE = "saved_meals"
_COLUMNS = "id, user_id, tool_type, name, data, created_at"


@dataclass
class SupabaseRecordRepository(RecordRepository):
    """Stores tool state in the ``saved_meals`` table."""

    client: Client

    def create_record(
        self, user_id: UUID, tool_type: ToolType, name: str, data: dict[str, object]
    ) -> SavedRecord:
        """Create a record row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "user_id": str(user_id),
                    "tool_type": tool_type.value,
                    "name": name,
                    "data": data,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create saved record")
        return _parse_record(response.data[0])

    def update_record(
        self, user_id: UUID, record_id: UUID, name: str, data: dict[str, object]
    ) -> SavedRecord | None:
        """Overwrite a record's name and data."""
        response = (
            self.client.table(_TABLE)
            .update({"name": name, "data": data})
            .eq("id", str(record_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_record(response.data[0])

    def get_record(self, user_id: UUID, record_id: UUID) -> SavedRecord | None:
        """Return a record by id, if the user owns it."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("id", str(record_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_record(response.data[0])

    def list_records(
        self, user_id: UUID, tool_type: ToolType | None
    ) -> list[SavedRecord]:
        """Return a user's records, newest first."""
        query = self.client.table(_TABLE).select(_COLUMNS).eq("user_id", str(user_id))
        if tool_type is not None:
            query = query.eq("tool_type", tool_type.value)
        response = query.order("created_at", desc=True).execute()
        return [_parse_record(row) for row in response.data or []]

    def delete_record(self, user_id: UUID, record_id: UUID) -> bool:
        """Delete a record owned by the user."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .eq("id", str(record_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_record(row: dict[str, object]) -> SavedRecord:
    """Parse a ``saved_meals`` row into a domain model."""
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None
    )
    data = row.get("data")
    return SavedRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        tool_type=ToolType(str(row["tool_type"])),
        name=str(row.get("name") or ""),
        data=data if isinstance(data, dict) else {},
        created_at=created_at,
    )
