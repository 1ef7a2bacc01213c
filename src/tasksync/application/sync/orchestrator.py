"""
Sync Pass - Applies resolved sync actions one node at a time.

The orchestrator that walks the local tree and decides when to sync lives
outside this package. It drives a SyncPass:

    sync_pass = SyncPass(client, store, "user@example.com")
    if sync_pass.begin():
        for node, row in pairs:
            sync_pass.process(node, row)
        result = sync_pass.finish()
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from ...adapters.gtasks.client import GTasksClient
from ...core.domain.enums import SyncAction
from ...core.domain.events import (
    EventBus,
    NodeFailed,
    NodeSynced,
    SyncCompleted,
    SyncStarted,
)
from ...core.domain.identity import identity_update
from ...core.domain.local_row import LocalColumns, LocalRow
from ...core.domain.node import Node
from ...core.domain.task_list import TaskList
from ...core.exceptions import (
    ActionFailureError,
    BatchRejectedError,
    IdentityError,
    NetworkFailureError,
    TaskSyncError,
)
from ...core.ports.local_store import LocalStorePort


@dataclass
class FailedOperation:
    """A node whose sync action did not apply."""

    action: SyncAction
    local_id: Optional[int]
    remote_id: Optional[str]
    error: TaskSyncError


@dataclass
class SyncResult:
    """Per-pass summary of a sync."""

    success: bool = True
    cancelled: bool = False

    actions: Counter = field(default_factory=Counter)
    failures: list[FailedOperation] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: str) -> None:
        """Add an error message."""
        self.errors.append(error)
        self.success = False

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)

    def add_failure(self, failure: FailedOperation) -> None:
        self.failures.append(failure)
        self.add_error(str(failure.error))

    def record(self, action: SyncAction) -> None:
        self.actions[action] += 1

    def count(self, action: SyncAction) -> int:
        return self.actions[action]

    @property
    def nodes_processed(self) -> int:
        return sum(self.actions.values()) + len(self.failures)

class SyncPass:
    """
    One sync pass over one client session.

    Remote actions go through the client; local actions go to the store.
    Identities of nodes pushed through the update queue are persisted only
    once the batch carrying them has been acknowledged. Every node of a
    rejected batch is recorded as failed and keeps its dirty row.
    """

    def __init__(
        self,
        client: GTasksClient,
        store: LocalStorePort,
        account_name: str,
        event_bus: Optional[EventBus] = None,
    ):
        """
        Initialize the pass.

        Args:
            client: Remote protocol client (one session per pass)
            store: Local note store
            account_name: Account to log in with
            event_bus: Optional event bus
        """
        self.client = client
        self.store = store
        self.account_name = account_name
        self.event_bus = event_bus or EventBus()
        self.logger = logging.getLogger("SyncPass")

        self.result = SyncResult()
        self._pending_identities: list[tuple[int, Node]] = []
        self.client.subscribe_commits(self._on_commit)

    # -------------------------------------------------------------------------
    # Main Entry Points
    # -------------------------------------------------------------------------

    def begin(self) -> bool:
        """Log in and announce the pass."""
        self.event_bus.publish(SyncStarted(account_name=self.account_name))

        if not self.client.login(self.account_name):
            self.result.add_error(f"Login failed for {self.account_name}")
            return False
        return True

    def process(self, node: Node, row: LocalRow) -> SyncAction:
        """
        Resolve and apply the sync action of one node.

        ActionFailureError is recorded and the pass continues;
        NetworkFailureError is recorded and re-raised. UPDATE_REMOTE is
        counted when its batch is acknowledged.

        Returns:
            The resolved action
        """
        action = node.resolve_sync_action(row)

        try:
            try:
                self._apply(action, node, row)
            except BatchRejectedError as e:
                # an earlier batch was flushed ahead of this node and rejected
                self._abandon_batch(e)
                self._apply(action, node, row)
        except (ActionFailureError, IdentityError) as e:
            self._record_failure(action, node, row.local_id, e)
            return action
        except NetworkFailureError as e:
            self._record_failure(action, node, row.local_id, e)
            raise

        if action is SyncAction.UPDATE_REMOTE:
            return action

        self.result.record(action)
        if action is not SyncAction.NONE:
            self._publish_synced(action, node, row.local_id)
        return action

    def finish(self) -> SyncResult:
        """Flush queued updates and close the pass."""
        try:
            if not self.result.cancelled:
                try:
                    self.client.commit_update()
                except BatchRejectedError as e:
                    self._abandon_batch(e)
                except NetworkFailureError as e:
                    self.result.add_error(f"Batch update failed: {e}")
                    for local_id, node in self._take_pending():
                        self._record_failure(SyncAction.UPDATE_REMOTE, node, local_id, e)
                    self._publish_completed()
                    raise

            for local_id, node in self._take_pending():
                self.result.add_warning(
                    f"Update of row {local_id} was never acknowledged"
                )
        finally:
            self.client.unsubscribe_commits(self._on_commit)

        self._publish_completed()
        return self.result

    def cancel(self) -> None:
        """Stop the pass; queued updates are dropped, not retried."""
        self.client.cancel()
        self._pending_identities = []
        self.result.cancelled = True
        self.logger.info("Sync pass cancelled")

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def _apply(self, action: SyncAction, node: Node, row: LocalRow) -> None:
        if action is SyncAction.NONE:
            return

        if action is SyncAction.ADD_REMOTE:
            self._load_local_content(node, row)
            if isinstance(node, TaskList):
                self.client.create_task_list(node)
            else:
                self.client.create_task(node)
            self.store.update_row(row.local_id, identity_update(node))

        elif action is SyncAction.UPDATE_REMOTE:
            self._load_local_content(node, row)
            self.client.add_update_node(node)
            self._pending_identities.append((row.local_id, node))

        elif action is SyncAction.UPDATE_LOCAL:
            js = node.to_local_json()
            if js is None:
                self.result.add_warning(f"Nothing to write locally for {node.remote_id}")
            else:
                self.store.save_local_json(row.local_id, js)
            self.store.update_row(row.local_id, identity_update(node))

        elif action is SyncAction.DEL_REMOTE:
            self.client.delete_node(node)

        elif action is SyncAction.DEL_LOCAL:
            self.store.update_row(row.local_id, {LocalColumns.DELETED: True})

        elif action is SyncAction.ERROR:
            raise IdentityError(
                f"Local row {row.local_id} cannot be synced with {node.remote_id}; "
                f"re-link or recreate it",
                node_id=node.remote_id,
            )

        else:
            self.result.add_warning(
                f"Action {action.name} for {node.remote_id} is left to the orchestrator"
            )

    def _load_local_content(self, node: Node, row: LocalRow) -> None:
        js = self.store.get_local_json(row.local_id)
        if js is None:
            raise ActionFailureError(
                f"No local content for row {row.local_id}",
                node_id=node.remote_id,
            )
        node.apply_local_json(js)

    # -------------------------------------------------------------------------
    # Batches
    # -------------------------------------------------------------------------

    def _on_commit(self, nodes: list[Node]) -> None:
        """Persist the identities of an acknowledged batch."""
        for local_id, node in self._take_pending(nodes):
            self.store.update_row(local_id, identity_update(node))
            self.result.record(SyncAction.UPDATE_REMOTE)
            self._publish_synced(SyncAction.UPDATE_REMOTE, node, local_id)

    def _abandon_batch(self, error: BatchRejectedError) -> None:
        """Record every node of a rejected batch as failed; their rows stay dirty."""
        for local_id, node in self._take_pending(error.nodes):
            self._record_failure(SyncAction.UPDATE_REMOTE, node, local_id, error)

    def _take_pending(self, nodes: Optional[list[Node]] = None) -> list[tuple[int, Node]]:
        """Remove and return the pending entries for nodes (all if None)."""
        if nodes is None:
            taken, self._pending_identities = self._pending_identities, []
            return taken

        taken = []
        remaining = []
        for local_id, node in self._pending_identities:
            if any(node is n for n in nodes):
                taken.append((local_id, node))
            else:
                remaining.append((local_id, node))
        self._pending_identities = remaining
        return taken

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _record_failure(
        self,
        action: SyncAction,
        node: Node,
        local_id: int,
        error: TaskSyncError,
    ) -> None:
        self.logger.error(f"{action.name} failed for row {local_id}: {error}")
        self.result.add_failure(FailedOperation(
            action=action,
            local_id=local_id,
            remote_id=node.remote_id,
            error=error,
        ))
        self.event_bus.publish(NodeFailed(
            action=action,
            remote_id=node.remote_id,
            local_id=local_id,
            error=str(error),
        ))

    def _publish_synced(self, action: SyncAction, node: Node, local_id: int) -> None:
        self.event_bus.publish(NodeSynced(
            action=action,
            remote_id=node.remote_id,
            local_id=local_id,
            name=node.name,
        ))

    def _publish_completed(self) -> None:
        self.event_bus.publish(SyncCompleted(
            account_name=self.account_name,
            nodes_processed=self.result.nodes_processed,
            cancelled=self.result.cancelled,
            errors=list(self.result.errors),
        ))
