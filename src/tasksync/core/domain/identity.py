"""
Identity - Fields linking a local row to its remote entity.
"""

from typing import Any

from .local_row import LocalColumns
from .node import Node


def identity_update(node: Node) -> dict[str, Any]:
    """
    Partial local row update recording a node's remote identity.

    Written after a successful remote action so the next resolve sees a
    clean row whose sync marker matches the node.
    """
    return {
        LocalColumns.GTASK_ID: node.remote_id,
        LocalColumns.SYNC_ID: node.last_modified,
        LocalColumns.LOCAL_MODIFIED: False,
    }
