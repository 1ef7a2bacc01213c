"""
Local Row - Snapshot of one row of the local note store.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .enums import NoteType


class LocalColumns:
    """Column names of the local store rows."""

    ID = "id"
    TYPE = "type"
    PARENT_ID = "parent_id"
    SNIPPET = "snippet"
    LOCAL_MODIFIED = "local_modified"
    SYNC_ID = "sync_id"
    GTASK_ID = "gtask_id"
    DELETED = "deleted"


@dataclass
class LocalRow:
    """
    The fields of a local row the sync core reads.

    sync_id is the remote last_modified value recorded at the previous
    successful sync; gtask_id is the remote id recorded locally.
    """

    local_id: int
    note_type: NoteType
    parent_id: int
    snippet: str = ""
    local_modified: bool = False
    sync_id: int = 0
    gtask_id: Optional[str] = None
    deleted: bool = False

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "LocalRow":
        """
        Build a LocalRow from a store mapping.

        Raises:
            KeyError: If a required column is missing
            ValueError: If a column cannot be converted
        """
        return cls(
            local_id=int(row[LocalColumns.ID]),
            note_type=NoteType.from_value(row[LocalColumns.TYPE]),
            parent_id=int(row[LocalColumns.PARENT_ID]),
            snippet=row.get(LocalColumns.SNIPPET) or "",
            local_modified=bool(row[LocalColumns.LOCAL_MODIFIED]),
            sync_id=int(row[LocalColumns.SYNC_ID]),
            gtask_id=row[LocalColumns.GTASK_ID],
            deleted=bool(row.get(LocalColumns.DELETED, False)),
        )

    def to_mapping(self) -> dict[str, Any]:
        """Convert back to a store mapping."""
        return {
            LocalColumns.ID: self.local_id,
            LocalColumns.TYPE: self.note_type.value,
            LocalColumns.PARENT_ID: self.parent_id,
            LocalColumns.SNIPPET: self.snippet,
            LocalColumns.LOCAL_MODIFIED: self.local_modified,
            LocalColumns.SYNC_ID: self.sync_id,
            LocalColumns.GTASK_ID: self.gtask_id,
            LocalColumns.DELETED: self.deleted,
        }
