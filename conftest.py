"""Shared fixtures: a HarvestClient wired to an in-memory httpx transport."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from harvest_api import HarvestClient

TOKEN = "test-token"
ACCOUNT_ID = "123456"
USER_AGENT = "HarvestTests (tests@example.com)"
BASE_URL = "https://api.harvestapp.com/v2/"


@pytest.fixture(autouse=True)
def _isolated_settings():
    """Keep HARVEST_* variables from the developer's environment out of tests."""
    settings = MagicMock(access_token=None, account_id=None, user_agent=None, base_url=BASE_URL)
    with patch("harvest_api.client.get_settings", return_value=settings):
        yield settings


@pytest.fixture
def requests_log():
    return []


@pytest.fixture
def make_client(requests_log):
    """Build a client whose requests are answered by ``handler(request)``."""
    http_clients = []

    def _make(handler):
        def _recording(request: httpx.Request) -> httpx.Response:
            requests_log.append(request)
            return handler(request)

        http_client = httpx.Client(transport=httpx.MockTransport(_recording))
        client = HarvestClient(
            access_token=TOKEN,
            account_id=ACCOUNT_ID,
            user_agent=USER_AGENT,
            http_client=http_client,
        )
        http_clients.append(http_client)
        return client

    yield _make
    for c in http_clients:
        c.close()


def _page_body(key, items, *, page=None, next_page=None, previous_page=None, next_url=None,
               per_page=2, total_pages=1, total_entries=None):
    """Build a Harvest pagination envelope."""
    return {
        key: items,
        "per_page": per_page,
        "total_pages": total_pages,
        "total_entries": total_entries if total_entries is not None else len(items),
        "next_page": next_page,
        "previous_page": previous_page,
        "page": page,
        "links": {
            "first": f"{BASE_URL}{key}?page=1&per_page={per_page}",
            "next": next_url,
            "previous": None,
            "last": f"{BASE_URL}{key}?page={total_pages}&per_page={per_page}",
        },
    }


@pytest.fixture
def page_body():
    return _page_body

