import base64
import json

import pytest
import requests
import responses

from llm_bridge.core.transport import requests_call, requests_download_base64
from llm_bridge.exceptions import TransportFailure
from llm_bridge.providers import openai_provider

URL = "https://api.example.com/v1/chat/completions"


@responses.activate
def test_json_body_sent_and_decoded():
    responses.add(responses.POST, URL, json={"choices": [{"message": {"content": "hi"}}]}, status=200)

    result = requests_call(URL, "post", {"model": "m"}, {"Authorization": "Bearer k"})

    assert result == {"choices": [{"message": {"content": "hi"}}]}
    sent = responses.calls[0].request
    assert json.loads(sent.body) == {"model": "m"}
    assert sent.headers["Authorization"] == "Bearer k"


@responses.activate
def test_non_json_body_comes_back_as_text():
    responses.add(responses.POST, URL, body="plain words", status=200)
    assert requests_call(URL, "POST", {}, {}) == "plain words"


@responses.activate
def test_http_error_raises_transport_failure():
    responses.add(responses.POST, URL, json={"error": {"message": "bad key"}}, status=401)
    with pytest.raises(TransportFailure) as exc:
        requests_call(URL, "POST", {}, {})
    assert "HTTP 401" in str(exc.value)
    assert "bad key" in str(exc.value)


@responses.activate
def test_connection_error_raises_transport_failure():
    responses.add(responses.POST, URL, body=requests.exceptions.ConnectionError("refused"))
    with pytest.raises(TransportFailure):
        requests_call(URL, "POST", {}, {})


@responses.activate
def test_download_returns_base64():
    responses.add(responses.GET, "https://img.example/cat.png", body=b"\x89PNG-bytes", status=200)
    assert requests_download_base64("https://img.example/cat.png") == base64.b64encode(b"\x89PNG-bytes").decode()


@responses.activate
def test_download_failure_raises():
    responses.add(responses.GET, "https://img.example/gone.png", status=404)
    with pytest.raises(TransportFailure):
        requests_download_base64("https://img.example/gone.png")


@responses.activate
def test_provider_over_default_transport():
    responses.add(responses.POST, "https://api.openai.com/v1/chat/completions",
                  json={"choices": [{"message": {"content": "pong"}}]}, status=200)
    assert openai_provider("k").generate_text("ping") == "pong"


@responses.activate
def test_provider_http_error_is_a_failure_value():
    responses.add(responses.POST, "https://api.openai.com/v1/chat/completions",
                  json={"error": {"message": "Incorrect API key provided: sk-abc"}}, status=401)
    result = openai_provider("sk-abc").generate_text("ping")
    assert result["status"] == "failure"
    assert "sk-abc" not in json.dumps(result)


def test_timeout_from_env(monkeypatch):
    from llm_bridge.core import transport

    monkeypatch.setenv("LLM_BRIDGE_HTTP_TIMEOUT", "5")
    assert transport._timeout() == 5.0
    monkeypatch.setenv("LLM_BRIDGE_HTTP_TIMEOUT", "soon")
    assert transport._timeout() == transport.DEFAULT_TIMEOUT
