"""
GTasks Client - Session and wire protocol for the remote task service.

This handles the raw HTTP communication with the service:
- login (bearer token exchanged for a session cookie and client version)
- batching of update actions
- create, move, delete and read requests

One client is one session; the orchestrator owns it for a sync pass.
"""

import json
import logging
import time
from typing import Any, Callable, Optional

import requests

from ...core.domain.enums import SessionState
from ...core.domain.keys import ActionType, WireKeys
from ...core.domain.node import Node
from ...core.domain.task import Task
from ...core.domain.task_list import TaskList
from ...core.exceptions import (
    ActionFailureError,
    BatchRejectedError,
    CredentialError,
    NetworkFailureError,
    ProgrammingFault,
    SetupParseError,
    SyncCancelledError,
)
from ...core.ports.config_provider import RemoteConfig, SyncConfig
from ...core.ports.credentials import CredentialProviderPort
from .setup_parser import parse_client_version, parse_task_lists

DEFAULT_BASE_URL = "https://mail.google.com/tasks/"


class GTasksClient:
    """
    Low-level client for the remote task service.

    Handles authentication, batching, request/response and error mapping.
    """

    GET_PATH = "ig"
    POST_PATH = "r/ig"
    AUTH_COOKIE_MARKER = "GTL"

    def __init__(
        self,
        credentials: CredentialProviderPort,
        base_url: str = DEFAULT_BASE_URL,
        connect_timeout: float = 10.0,
        read_timeout: float = 15.0,
        session_ttl: float = 300.0,
        max_pending_updates: int = 10,
        consumer_domains: tuple[str, ...] = ("gmail.com", "googlemail.com"),
        session_factory: Callable[[], requests.Session] = requests.Session,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the client.

        Args:
            credentials: Source of bearer tokens
            base_url: Service root (default endpoint)
            connect_timeout: Seconds to wait for a connection
            read_timeout: Seconds to wait for a response
            session_ttl: Seconds after which a login is considered stale
            max_pending_updates: Queue size that triggers a flush
            consumer_domains: Account domains served by the default endpoint only
            session_factory: Creates the HTTP session for each login
            clock: Monotonic time source
        """
        self.logger = logging.getLogger("GTasksClient")

        self._credentials = credentials
        self._base_url = base_url.rstrip("/") + "/"
        self._timeout = (connect_timeout, read_timeout)
        self._session_ttl = session_ttl
        self._max_pending_updates = max_pending_updates
        self._consumer_domains = tuple(d.lower() for d in consumer_domains)
        self._session_factory = session_factory
        self._clock = clock

        self._session: Optional[requests.Session] = None
        self._state = SessionState.LOGGED_OUT
        self._get_url = self._base_url + self.GET_PATH
        self._post_url = self._base_url + self.POST_PATH
        self._client_version = -1
        self._last_login: Optional[float] = None
        self._account_name: Optional[str] = None
        self._token: Optional[str] = None
        self._token_refreshed = False
        self._cancelled = False

        self._action_id = 1
        self._update_queue: list[dict[str, Any]] = []
        self._queued_nodes: list[Node] = []
        self._commit_handlers: list[Callable[[list[Node]], None]] = []

    @classmethod
    def from_config(
        cls,
        remote: RemoteConfig,
        sync: SyncConfig,
        credentials: CredentialProviderPort,
    ) -> "GTasksClient":
        """Create a client from loaded configuration."""
        return cls(
            credentials,
            base_url=remote.base_url,
            connect_timeout=remote.connect_timeout,
            read_timeout=remote.read_timeout,
            session_ttl=remote.session_ttl,
            max_pending_updates=sync.max_pending_updates,
            consumer_domains=remote.consumer_domains,
        )

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_logged_in(self) -> bool:
        return self._state is SessionState.LOGGED_IN

    @property
    def account_name(self) -> Optional[str]:
        return self._account_name

    @property
    def client_version(self) -> int:
        return self._client_version

    @property
    def pending_update_count(self) -> int:
        return len(self._update_queue)

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def login(self, account_name: str) -> bool:
        """
        Log in to the service, reusing a fresh session for the same account.

        Args:
            account_name: Account to sync (e.g. user@example.com)

        Returns:
            True if the session is logged in
        """
        self._cancelled = False

        if self.is_logged_in and self._is_stale():
            self.logger.debug("Session is stale, logging in again")
            self._logout()

        if self.is_logged_in and account_name != self._account_name:
            self.logger.debug("Account changed, logging in again")
            self._logout()

        if self.is_logged_in:
            self.logger.debug("Already logged in")
            return True

        self._state = SessionState.LOGGING_IN
        self._account_name = account_name
        self._token_refreshed = False

        self._token = self._obtain_token(force_refresh=False)
        if not self._token:
            self.logger.error(f"Failed to get a bearer token for {account_name}")
            self._logout()
            return False

        for endpoint in self._endpoints(account_name):
            if self._try_login(endpoint):
                self._get_url = endpoint + self.GET_PATH
                self._post_url = endpoint + self.POST_PATH
                self._state = SessionState.LOGGED_IN
                self._last_login = self._clock()
                self.logger.info(
                    f"Logged in as {account_name} via {endpoint} "
                    f"(client version {self._client_version})"
                )
                return True

        self.logger.error(f"Login failed for {account_name}")
        self._logout()
        return False

    def close(self) -> None:
        """Drop the session and any pending updates."""
        self.reset_update_queue()
        self._logout()

    def _is_stale(self) -> bool:
        return self._last_login is None or self._clock() - self._last_login > self._session_ttl

    def _logout(self) -> None:
        if self._session is not None:
            self._session.close()
        self._session = None
        self._state = SessionState.LOGGED_OUT
        self._last_login = None

    def _endpoints(self, account_name: str) -> list[str]:
        """Default endpoint, then the domain-scoped one for non-consumer accounts."""
        endpoints = [self._base_url]
        domain = account_name.rpartition("@")[2].lower() if "@" in account_name else ""
        if domain and domain not in self._consumer_domains:
            endpoints.append(f"{self._base_url}a/{domain}/")
        return endpoints

    def _obtain_token(self, force_refresh: bool) -> Optional[str]:
        try:
            return self._credentials.obtain_bearer_token(
                self._account_name or "", force_refresh
            )
        except CredentialError as e:
            self.logger.error(f"Credential provider failed: {e}")
            return None

    def _try_login(self, endpoint: str) -> bool:
        """Exchange the token; on rejection refresh it once and retry once."""
        if self._login_exchange(endpoint):
            return True

        if self._token_refreshed:
            return False

        # the token may have expired
        self._token_refreshed = True
        self._token = self._obtain_token(force_refresh=True)
        if not self._token:
            self.logger.error("Failed to refresh the bearer token")
            return False

        return self._login_exchange(endpoint)

    def _login_exchange(self, endpoint: str) -> bool:
        """Trade the bearer token for a session cookie and client version."""
        session = self._session_factory()
        try:
            response = session.get(
                endpoint + self.GET_PATH,
                params={"auth": self._token},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.warning(f"Login request to {endpoint} failed: {type(e).__name__}")
            session.close()
            return False

        if not any(self.AUTH_COOKIE_MARKER in cookie.name for cookie in session.cookies):
            self.logger.warning("It seems that there is no auth cookie")

        try:
            version = parse_client_version(response.text)
        except SetupParseError as e:
            self.logger.warning(f"Login response from {endpoint} not understood: {e}")
            session.close()
            return False

        if self._session is not None:
            self._session.close()
        self._session = session
        self._client_version = version
        return True

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def _require_session(self) -> None:
        if not self.is_logged_in:
            raise ProgrammingFault("Not logged in")
        if self._cancelled:
            raise SyncCancelledError("Sync pass was cancelled")

    def _next_action_id(self) -> int:
        action_id = self._action_id
        self._action_id += 1
        return action_id

    def _build_request(self, actions: list[dict[str, Any]]) -> dict[str, Any]:
        return {
            WireKeys.ACTION_LIST: actions,
            WireKeys.CLIENT_VERSION: self._client_version,
        }

    def _post_request(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        POST an action list.

        Returns:
            JSON response as dict

        Raises:
            NetworkFailureError: On transport errors and 5xx responses
            ActionFailureError: On 4xx responses or unparseable bodies
        """
        self._require_session()

        try:
            response = self._session.post(
                self._post_url,
                data={"r": json.dumps(payload)},
                headers={
                    "Content-Type": "application/x-www-form-urlencoded;charset=utf-8",
                    "AT": "1",
                },
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as e:
            raise NetworkFailureError(f"Request timed out: {e}", cause=e)
        except requests.exceptions.ConnectionError as e:
            raise NetworkFailureError(f"Connection failed: {e}", cause=e)
        except requests.RequestException as e:
            raise NetworkFailureError(f"Request failed: {e}", cause=e)

        self._check_status(response)

        try:
            data = response.json()
        except ValueError as e:
            raise ActionFailureError(
                "Unable to convert response content to a JSON object", cause=e
            )

        if not isinstance(data, dict):
            raise ActionFailureError("Response content is not a JSON object")

        return data

    def _get_request(self) -> str:
        """GET the service page and return its text."""
        self._require_session()

        try:
            response = self._session.get(self._get_url, timeout=self._timeout)
        except requests.exceptions.Timeout as e:
            raise NetworkFailureError(f"Request timed out: {e}", cause=e)
        except requests.exceptions.ConnectionError as e:
            raise NetworkFailureError(f"Connection failed: {e}", cause=e)
        except requests.RequestException as e:
            raise NetworkFailureError(f"Request failed: {e}", cause=e)

        self._check_status(response)
        return response.text

    def _check_status(self, response: requests.Response) -> None:
        status = response.status_code
        if status >= 500:
            raise NetworkFailureError(f"Server error {status}")
        if status >= 400:
            body = response.text[:500] if response.text else ""
            raise ActionFailureError(f"API error {status}: {body}")

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create_task(self, task: Task) -> None:
        """Create a task remotely and record its new remote id."""
        self._create_node(task, "task")

    def create_task_list(self, task_list: TaskList) -> None:
        """Create a task list remotely and record its new remote id."""
        self._create_node(task_list, "task list")

    def _create_node(self, node: Node, kind: str) -> None:
        self.commit_update()

        action = node.create_action(self._next_action_id())
        response = self._post_request(self._build_request([action]))

        try:
            result = response[WireKeys.RESULTS][0]
            new_id = result[WireKeys.NEW_ID]
            last_modified = int(result.get(WireKeys.LAST_MODIFIED, node.last_modified))
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            raise ActionFailureError(
                f"Create {kind}: unexpected response content", cause=e
            )

        node.remote_id = str(new_id)
        node.last_modified = last_modified
        node.clear_changes()
        self.logger.info(f"Created {kind} '{node.name}' as {node.remote_id}")

    # -------------------------------------------------------------------------
    # Update Batching
    # -------------------------------------------------------------------------

    def add_update_node(self, node: Optional[Node]) -> None:
        """
        Queue a node's update action.

        The queue is flushed first when it already holds max_pending_updates
        actions, so no request carries more than that many updates.
        """
        if node is None:
            return

        self._require_session()

        if len(self._update_queue) >= self._max_pending_updates:
            self.commit_update()

        self._update_queue.append(node.update_action(self._next_action_id()))
        self._queued_nodes.append(node)

    def commit_update(self) -> list[Node]:
        """
        Send all queued update actions in one request.

        The queue survives a NetworkFailureError and is dropped on an
        ActionFailureError. Commit subscribers are told about every
        acknowledged batch, including flushes triggered by other calls.

        Returns:
            The nodes whose updates were acknowledged

        Raises:
            BatchRejectedError: If the service rejected the batch; carries
                every node of the batch
        """
        if not self._update_queue:
            return []

        nodes = list(self._queued_nodes)
        try:
            self._post_request(self._build_request(list(self._update_queue)))
        except ActionFailureError as e:
            self.logger.error(f"Batch of {len(nodes)} updates was rejected")
            self.reset_update_queue()
            raise BatchRejectedError(
                f"Batch of {len(nodes)} updates was rejected: {e}",
                nodes=nodes,
                cause=e,
            )

        for node in nodes:
            node.clear_changes()

        self.logger.debug(f"Committed {len(nodes)} updates")
        self.reset_update_queue()

        for handler in list(self._commit_handlers):
            handler(nodes)
        return nodes

    def subscribe_commits(self, handler: Callable[[list[Node]], None]) -> None:
        """Call handler with the nodes of every acknowledged batch."""
        self._commit_handlers.append(handler)

    def unsubscribe_commits(self, handler: Callable[[list[Node]], None]) -> None:
        if handler in self._commit_handlers:
            self._commit_handlers.remove(handler)

    def reset_update_queue(self) -> None:
        """Drop pending updates without sending them."""
        self._update_queue = []
        self._queued_nodes = []

    def cancel(self) -> None:
        """Drop pending updates and refuse network calls until the next login."""
        self._cancelled = True
        dropped = len(self._update_queue)
        self.reset_update_queue()
        self.logger.info(f"Sync cancelled, dropped {dropped} pending updates")

    # -------------------------------------------------------------------------
    # Move / Delete
    # -------------------------------------------------------------------------

    def move_task(self, task: Task, from_list: TaskList, to_list: TaskList) -> None:
        """
        Move a task to its current position in to_list.

        The task must already sit at its new position locally. Within one
        list its prior sibling there becomes the remote ordering anchor.
        """
        self.commit_update()

        action: dict[str, Any] = {
            WireKeys.ACTION_TYPE: ActionType.MOVE,
            WireKeys.ACTION_ID: self._next_action_id(),
            WireKeys.ID: task.remote_id,
            WireKeys.SOURCE_LIST: from_list.remote_id,
            WireKeys.DEST_PARENT: to_list.remote_id,
        }

        prior = task.prior_sibling
        if from_list is to_list and prior is not None:
            action[WireKeys.PRIOR_SIBLING_ID] = prior.remote_id

        if from_list is not to_list:
            action[WireKeys.DEST_LIST] = to_list.remote_id

        self._post_request(self._build_request([action]))
        self.logger.info(f"Moved task {task.remote_id} to {to_list.remote_id}")

    def delete_node(self, node: Node) -> None:
        """Mark a node deleted and send the update immediately."""
        self.commit_update()
        self._require_session()

        node.deleted = True
        action = node.update_action(self._next_action_id())
        self._post_request(self._build_request([action]))
        node.clear_changes()
        self.logger.info(f"Deleted {node.remote_id}")

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def get_all_remote_lists(self) -> list[dict[str, Any]]:
        """Get descriptors of all remote task lists."""
        self.commit_update()
        return parse_task_lists(self._get_request())

    def get_all_remote_tasks(self, list_id: str) -> list[dict[str, Any]]:
        """Get descriptors of all non-deleted tasks in a remote list."""
        self.commit_update()

        action = {
            WireKeys.ACTION_TYPE: ActionType.GET_ALL,
            WireKeys.ACTION_ID: self._next_action_id(),
            WireKeys.LIST_ID: list_id,
            WireKeys.GET_DELETED: False,
        }
        response = self._post_request(self._build_request([action]))

        tasks = response.get(WireKeys.TASKS)
        if not isinstance(tasks, list):
            raise ActionFailureError(f"Get tasks of {list_id}: unexpected response content")
        return tasks
