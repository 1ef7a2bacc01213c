"""
Sync Action Resolver - Pick the sync action for one node.

Compares the node's remote-derived state with a snapshot of its local row.
The resolver is total: malformed snapshots yield SyncAction.ERROR instead
of raising.
"""

import logging
from typing import TYPE_CHECKING, Any, Mapping, Union

from .enums import SyncAction
from .local_row import LocalRow

if TYPE_CHECKING:
    from .node import Node


logger = logging.getLogger("SyncActionResolver")


def resolve_sync_action(
    node: "Node",
    row: Union[LocalRow, Mapping[str, Any]],
) -> SyncAction:
    """
    Resolve the sync action for a node against its local row.

    Args:
        node: Task or TaskList (MetaData refuses with ProgrammingFault)
        row: LocalRow or a mapping of local store columns

    Returns:
        Exactly one SyncAction
    """
    return node.resolve_sync_action(row)


def evaluate_sync_action(
    node: "Node",
    row: Union[LocalRow, Mapping[str, Any]],
) -> SyncAction:
    """Shared algorithm behind Task and TaskList resolve_sync_action."""
    if not node.remote_id:
        return SyncAction.ADD_REMOTE

    try:
        if not isinstance(row, LocalRow):
            row = LocalRow.from_mapping(row)

        if row.deleted and node.deleted:
            return SyncAction.NONE
        if row.deleted:
            return SyncAction.DEL_REMOTE
        if node.deleted:
            return SyncAction.DEL_LOCAL

        if not row.local_modified:
            if row.sync_id == node.last_modified:
                return SyncAction.NONE
            return SyncAction.UPDATE_LOCAL

        if row.gtask_id != node.remote_id:
            logger.error(
                f"Remote id mismatch for local row {row.local_id}: "
                f"{row.gtask_id!r} != {node.remote_id!r}"
            )
            return SyncAction.ERROR

        if row.sync_id != node.last_modified:
            # both sides changed; the local edit wins
            logger.warning(
                f"Conflict on {node.remote_id}: local marker {row.sync_id}, "
                f"remote {node.last_modified}; pushing local content"
            )
        return SyncAction.UPDATE_REMOTE

    except Exception as e:
        logger.error(f"Failed to resolve sync action for {node!r}: {e}")
        return SyncAction.ERROR
