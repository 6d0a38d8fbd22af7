import json

import httpx
import pytest
from loguru import logger

from fixr import Client, ClientConfig


class ClosingStream(httpx.SyncByteStream):
    """Response body that records whether it was released."""

    def __init__(self, content: bytes):
        self.content = content
        self.closed = False

    def __iter__(self):
        yield self.content

    def close(self):
        self.closed = True


class FakeFixr:
    """
    In-memory stand-in for the FIXR and Stripe APIs.

    Routes map (method, url) to a JSON body or to an exception to raise.
    Every request that reaches the fake is recorded.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, url, body, status_code=200):
        self.routes[(method, url)] = (body, status_code)

    def fail(self, method, url, exc):
        self.routes[(method, url)] = (exc, None)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body, status_code = self.routes.get(
            (request.method, str(request.url)), ({"detail": "Not found."}, 404)
        )
        if isinstance(body, Exception):
            raise body
        if isinstance(body, httpx.SyncByteStream):
            return httpx.Response(status_code, stream=body)
        if isinstance(body, (bytes, str)):
            return httpx.Response(status_code, content=body)
        return httpx.Response(status_code, json=body)

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def config():
    return ClientConfig(
        api_url="https://fixr.test/api/v2/app",
        stripe_url="https://stripe.test/v1",
        stripe_key="pk_test_123",
        app_version="9.9.9",
        platform_version="TestBrowser/1.0",
        user_agent="fixr-tests/1.0",
        timeout=1.0,
    )


@pytest.fixture
def fake_api():
    return FakeFixr()


@pytest.fixture
def client(config, fake_api):
    http_client = httpx.Client(transport=httpx.MockTransport(fake_api.handler))
    with Client("ticket.buyer@example.com", config=config, http_client=http_client) as c:
        yield c
    http_client.close()


@pytest.fixture
def sample_event():
    return {
        "id": 1234,
        "name": "Warehouse Rave",
        "tickets": [
            {
                "id": 11, "name": "Early Bird", "type": 0, "currency": "GBP",
                "price": 0, "booking_fee": 0, "max_per_user": 4,
                "sold_out": True, "expired": False, "not_yet_valid": False,
            },
            {
                "id": 12, "name": "General Release", "type": 0, "currency": "GBP",
                "price": 10.5, "booking_fee": 1.25, "max_per_user": 3,
                "sold_out": False, "expired": False, "not_yet_valid": False,
            },
            {
                "id": 13, "name": "Final Release", "type": 1, "currency": "GBP",
                "price": 15, "booking_fee": 1.5, "max_per_user": 2,
                "sold_out": False, "expired": False, "not_yet_valid": True,
            },
        ],
    }


@pytest.fixture
def log_messages():
    messages = []
    logger.enable("fixr")
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
    logger.disable("fixr")


@pytest.fixture
def closing_stream():
    return ClosingStream
