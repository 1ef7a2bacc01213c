"""Shared fixtures for the client and sync pass tests."""

from unittest.mock import Mock

import pytest

from tasksync.adapters.gtasks import GTasksClient

from fakes import FakeClock, make_http_session


@pytest.fixture
def credentials():
    provider = Mock()
    provider.obtain_bearer_token.return_value = "token-1"
    return provider


@pytest.fixture
def http_session():
    return make_http_session()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(credentials, http_session, clock):
    return GTasksClient(
        credentials,
        session_factory=Mock(return_value=http_session),
        clock=clock,
    )


@pytest.fixture
def logged_in_client(client):
    assert client.login("user@example.com")
    return client
