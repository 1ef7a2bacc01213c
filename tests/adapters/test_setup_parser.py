"""Tests for the setup payload parser."""

import pytest

from tasksync.adapters.gtasks import (
    extract_setup_payload,
    parse_client_version,
    parse_task_lists,
)
from tasksync.core.exceptions import ActionFailureError, SetupParseError


def page(payload):
    return f"<html><head><script>var a=1;function f(){{_setup({payload})}}</script></head></html>"


class TestExtractSetupPayload:
    def test_extracts_object(self):
        assert extract_setup_payload(page('{"v": 3}')) == {"v": 3}

    @pytest.mark.parametrize("body", [
        "",
        "<html>nothing here</html>",
        "<script>_setup({\"v\": 3}</script>",
    ])
    def test_missing_wrapper(self, body):
        with pytest.raises(SetupParseError):
            extract_setup_payload(body)

    def test_invalid_json(self):
        with pytest.raises(SetupParseError):
            extract_setup_payload(page("{v: 3"))

    def test_not_an_object(self):
        with pytest.raises(SetupParseError):
            extract_setup_payload(page("[1, 2]"))

    def test_is_an_action_failure(self):
        with pytest.raises(ActionFailureError):
            extract_setup_payload("")


class TestParseClientVersion:
    def test_version(self):
        assert parse_client_version(page('{"v": 1234, "t": {}}')) == 1234

    def test_missing_version(self):
        with pytest.raises(SetupParseError):
            parse_client_version(page('{"t": {}}'))


class TestParseTaskLists:
    def test_lists(self):
        body = page('{"v": 1, "t": {"lists": [{"id": "L1", "name": "Work"}, {"id": "L2", "name": "Home"}]}}')

        lists = parse_task_lists(body)

        assert [item["id"] for item in lists] == ["L1", "L2"]

    def test_missing_lists(self):
        with pytest.raises(SetupParseError):
            parse_task_lists(page('{"v": 1}'))

    def test_lists_not_an_array(self):
        with pytest.raises(SetupParseError):
            parse_task_lists(page('{"t": {"lists": {}}}'))
