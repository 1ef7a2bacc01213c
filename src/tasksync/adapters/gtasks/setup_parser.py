"""
Setup Parser - Extract the setup payload embedded in the service's HTML.

The task service does not expose a JSON endpoint for its bootstrap data.
The login page and the list page both embed it as the argument of a
script call:

    <script>..._setup({"v": 1234, "t": {"lists": [...]}})}</script>

Everything that depends on that exact shape lives in this module.
"""

import json
from typing import Any

from ...core.exceptions import SetupParseError
from ...core.domain.keys import WireKeys

SETUP_BEGIN = "_setup("
SETUP_END = ")}</script>"

CLIENT_VERSION_KEY = "v"
TASK_DATA_KEY = "t"


def extract_setup_payload(body: str) -> dict[str, Any]:
    """
    Extract the JSON object passed to the setup call.

    Args:
        body: Response text of the service page

    Returns:
        Decoded setup object

    Raises:
        SetupParseError: If the wrapper is missing or its content is not a JSON object
    """
    if not body:
        raise SetupParseError("Empty response body")

    begin = body.find(SETUP_BEGIN)
    end = body.rfind(SETUP_END)
    if begin == -1 or end == -1 or begin >= end:
        raise SetupParseError("Setup call not found in response body")

    raw = body[begin + len(SETUP_BEGIN):end]
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise SetupParseError(f"Setup payload is not valid JSON: {e}", cause=e)

    if not isinstance(payload, dict):
        raise SetupParseError("Setup payload is not a JSON object")

    return payload


def parse_client_version(body: str) -> int:
    """Get the client protocol version from a login response body."""
    payload = extract_setup_payload(body)
    try:
        return int(payload[CLIENT_VERSION_KEY])
    except (KeyError, TypeError, ValueError) as e:
        raise SetupParseError(f"Setup payload has no client version: {e}", cause=e)


def parse_task_lists(body: str) -> list[dict[str, Any]]:
    """Get the remote task list descriptors from a list page body."""
    payload = extract_setup_payload(body)
    try:
        lists = payload[TASK_DATA_KEY][WireKeys.LISTS]
    except (KeyError, TypeError) as e:
        raise SetupParseError(f"Setup payload has no task lists: {e}", cause=e)

    if not isinstance(lists, list):
        raise SetupParseError("Task lists in setup payload are not an array")

    return lists
