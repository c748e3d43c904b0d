"""Shared fixtures for EAN client tests."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from ean import Configuration


@pytest.fixture
def config() -> Configuration:
    return Configuration(api_key="testkey", cid=12345, shared_secret="s3cret")


@pytest.fixture
def signed_config() -> Configuration:
    return Configuration(
        api_key="testkey", cid=12345, shared_secret="s3cret", use_signature_auth=True
    )


@pytest.fixture
def recorder() -> Callable[..., tuple[list[httpx.Request], httpx.MockTransport]]:
    """Build a mock transport answering every request with the same response."""

    def make(
        status_code: int = 200,
        json: Any = None,
        text: str | None = None,
    ) -> tuple[list[httpx.Request], httpx.MockTransport]:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json if json is not None else {})

        return seen, httpx.MockTransport(handler)

    return make
