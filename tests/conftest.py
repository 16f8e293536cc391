"""
Shared test fixtures.

Nothing here talks to a real provider: the HTTP primitive and the image
download primitive are replaced by recording fakes, and provider environment
variables are cleared so a developer's .env cannot leak into assertions.
"""

import os
import sys
from typing import Any, Dict, List

import pytest

# Ensure project root is on sys.path so 'llm_bridge' imports resolve in tests
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from llm_bridge.providers.base.factory import ProviderFactory  # noqa: E402
from llm_bridge.providers.base.repositories.keys import KeysRepository  # noqa: E402

_ENV_VARS = sorted(set(KeysRepository.ENV_MAP.values()) | set(KeysRepository.BASE_URL_ENV_MAP.values()))


class FakeHttp:
    """Records calls and returns a canned response (or raises)."""

    def __init__(self, response: Any = None, error: Exception = None) -> None:
        self.response = response if response is not None else {}
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, url, method, payload, headers):
        self.calls.append({"url": url, "method": method, "payload": payload, "headers": headers})
        if self.error is not None:
            raise self.error
        return self.response


class FakeDownload:
    def __init__(self) -> None:
        self.calls: List[str] = []

    def __call__(self, url: str) -> str:
        self.calls.append(url)
        return f"BASE 64 THIS {url}"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    # keep load_dotenv from picking up a developer's .env
    monkeypatch.setattr("llm_bridge.providers.base.factory.load_dotenv", lambda *a, **k: False)


@pytest.fixture
def fake_http():
    return FakeHttp(response={"choices": [{"message": {"content": '{"dummy":"response"}'}}]})


@pytest.fixture
def make_http():
    """make_http(response=...) or make_http(error=...) for one-off canned replies."""
    return FakeHttp


@pytest.fixture
def fake_download():
    return FakeDownload()


@pytest.fixture
def make_provider(fake_http, fake_download):
    """make_provider("openai", "key", "https://...") with fake primitives wired in."""
    def _make(name, api_key="testkey", base_url=None, http=None, download=None):
        return ProviderFactory.create(
            name,
            api_key=api_key,
            base_url=base_url,
            http_call=http or fake_http,
            download=download or fake_download,
        )
    return _make


VALID_FORMAT = {
    "name": "ValidSchema",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {"field": {"type": "number"}},
        "required": ["field"],
        "additionalProperties": False,
    },
}


@pytest.fixture
def valid_format():
    import copy
    return copy.deepcopy(VALID_FORMAT)
