"""
GTasks Adapter - Client for the remote list-of-lists task service.
"""

from .client import DEFAULT_BASE_URL, GTasksClient
from .setup_parser import extract_setup_payload, parse_client_version, parse_task_lists

__all__ = [
    "DEFAULT_BASE_URL",
    "GTasksClient",
    "extract_setup_payload",
    "parse_client_version",
    "parse_task_lists",
]
