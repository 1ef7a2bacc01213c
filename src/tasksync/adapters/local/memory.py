"""
In-Memory Local Store - Dict-backed implementation of LocalStorePort.

Stands in for the on-device database in tests and dry runs.
"""

import copy
import logging
from typing import Any, Optional

from ...core.domain.enums import NoteType
from ...core.domain.keys import LocalKeys
from ...core.domain.local_row import LocalColumns, LocalRow
from ...core.ports.local_store import LocalStorePort


class InMemoryLocalStore(LocalStorePort):
    """Rows and their local JSON kept in dictionaries keyed by local id."""

    def __init__(self):
        self._rows: dict[int, dict[str, Any]] = {}
        self._content: dict[int, dict[str, Any]] = {}
        self.logger = logging.getLogger("InMemoryLocalStore")

    def add_row(
        self,
        row: LocalRow,
        local_json: Optional[dict[str, Any]] = None,
    ) -> None:
        """Insert or replace a row and its local JSON."""
        self._rows[row.local_id] = row.to_mapping()
        if local_json is not None:
            self._content[row.local_id] = copy.deepcopy(local_json)

    # -------------------------------------------------------------------------
    # LocalStorePort Implementation
    # -------------------------------------------------------------------------

    def get_row(self, local_id: int) -> Optional[LocalRow]:
        row = self._rows.get(local_id)
        if row is None:
            return None
        return LocalRow.from_mapping(row)

    def query_rows(self, parent_id: Optional[int] = None) -> list[LocalRow]:
        return [
            LocalRow.from_mapping(row)
            for row in self._rows.values()
            if parent_id is None or row[LocalColumns.PARENT_ID] == parent_id
        ]

    def get_local_json(self, local_id: int) -> Optional[dict[str, Any]]:
        js = self._content.get(local_id)
        return copy.deepcopy(js) if js is not None else None

    def save_local_json(self, local_id: int, js: dict[str, Any]) -> None:
        self._content[local_id] = copy.deepcopy(js)

        # keep the row's snippet in step with the content
        row = self._rows.get(local_id)
        if row is None:
            return
        if row[LocalColumns.TYPE] == NoteType.NOTE.value:
            for data in js.get(LocalKeys.META_DATA, []):
                if LocalKeys.CONTENT in data:
                    row[LocalColumns.SNIPPET] = data[LocalKeys.CONTENT]
                    break
        else:
            snippet = js.get(LocalKeys.META_NOTE, {}).get(LocalKeys.SNIPPET)
            if snippet is not None:
                row[LocalColumns.SNIPPET] = snippet

    def update_row(self, local_id: int, fields: dict[str, Any]) -> None:
        row = self._rows.get(local_id)
        if row is None:
            self.logger.warning(f"Update of unknown row {local_id} ignored")
            return
        row.update(fields)
