import pytest

from mbclient.rest import Client


@pytest.fixture
def client():
    with Client(None, "http://localhost:2525") as cli:
        yield cli


@pytest.fixture
def bare_client():
    with Client(None, None) as cli:
        yield cli
