"""
Local Store Port - Row-oriented access to the on-device note store.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..domain.local_row import LocalRow


class LocalStorePort(ABC):
    """
    Abstract interface for the local note store.

    The sync core only needs row snapshots, the local JSON of a row, and
    partial updates keyed by local id.
    """

    @abstractmethod
    def get_row(self, local_id: int) -> Optional[LocalRow]:
        """Get a row snapshot, None if absent."""
        ...

    @abstractmethod
    def query_rows(self, parent_id: Optional[int] = None) -> list[LocalRow]:
        """Get all rows, or the rows under one parent."""
        ...

    @abstractmethod
    def get_local_json(self, local_id: int) -> Optional[dict[str, Any]]:
        """Get the local JSON representation of a row."""
        ...

    @abstractmethod
    def save_local_json(self, local_id: int, js: dict[str, Any]) -> None:
        """Replace the content of a row from its local JSON representation."""
        ...

    @abstractmethod
    def update_row(self, local_id: int, fields: dict[str, Any]) -> None:
        """
        Apply a partial update to a row.

        Args:
            local_id: Row to update
            fields: Column name -> new value
        """
        ...
