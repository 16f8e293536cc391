from llm_bridge.core.attachments import deferred_marker
from llm_bridge.providers.base.models import REDACTED

FULL_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions"


def test_native_schema_and_context(make_provider, valid_format):
    provider = make_provider("gemini_openai", api_key="geminiOpenAIKey", base_url=FULL_ENDPOINT)
    provider.add_context("SUper Context", "Duper Context")
    result = provider.generate_text(
        "GeminiViaOpenAI test", debug_prompt=True, max_tokens=250, responseFormat=valid_format
    )

    assert result["payload"]["messages"] == [
        {"role": "user", "content": '{"SUper Context":["Duper Context"]}'},
        {"role": "user", "content": "GeminiViaOpenAI test"},
    ]
    assert result["url"] == FULL_ENDPOINT
    assert result["headers"]["Authorization"] == REDACTED
    assert result["payload"]["max_tokens"] == 250
    assert result["payload"]["response_format"] == {"json_schema": valid_format, "type": "json_schema"}


def test_path_appended_to_compat_root(make_provider):
    for base in ("https://generativelanguage.googleapis.com/v1beta/openai",
                 "https://generativelanguage.googleapis.com/v1beta/openai/",
                 FULL_ENDPOINT + "/"):
        result = make_provider("gemini_openai", base_url=base).generate_text("hi", debug_prompt=True)
        assert result["url"] == FULL_ENDPOINT


def test_invalid_format_is_rejected(make_provider, fake_http):
    result = make_provider("gemini_openai").generate_text("hi", response_format={"name": "x", "strict": True})
    assert result == ["Missing 'schema' property."]
    assert fake_http.calls == []


def test_images_go_out_as_data_uris(make_provider, make_http, fake_download):
    http = make_http(response={"choices": [{"message": {"content": "two cats"}}]})
    provider = make_provider("gemini_openai", http=http)

    assert provider.analyze_image(["https://cats.webp"], "How many cats?") == "two cats"
    assert fake_download.calls == ["https://cats.webp"]
    image_part = http.calls[0]["payload"]["messages"][0]["content"][0]
    assert image_part == {
        "type": "image_url",
        "image_url": {"url": "data:image/webp;base64,BASE 64 THIS https://cats.webp"},
    }


def test_debug_image_analysis_does_not_download(make_provider, fake_download):
    result = make_provider("gemini_openai").analyze_image(["https://cats.png"], "Count", debug_prompt=True)
    assert fake_download.calls == []
    url = result["payload"]["messages"][0]["content"][0]["image_url"]["url"]
    assert url == "data:image/png;base64," + deferred_marker("https://cats.png")
    assert result["payload"]["model"] == "gemini-2.0-flash"


def test_empty_format_is_validated_not_ignored(make_provider, fake_http):
    result = make_provider("gemini_openai").generate_text("hi", responseFormat={})
    assert result == ["Missing 'name' property.", "'strict' must be true.", "Missing 'schema' property."]
    assert fake_http.calls == []
