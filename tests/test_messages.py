import pytest

from llm_bridge.core.messages import build_messages
from llm_bridge.exceptions import InvalidPromptShapeError
from llm_bridge.providers.base.models import Attachment, Message


def test_string_becomes_single_user_message():
    assert build_messages("Tell me a joke") == [Message("user", "Tell me a joke")]


def test_role_content_pairs():
    out = build_messages([["assistant", "Hello"], ("user", "How are you?")])
    assert out == [Message("assistant", "Hello"), Message("user", "How are you?")]


def test_message_mappings_and_instances():
    out = build_messages([
        {"role": "system", "content": "Be brief"},
        Message("user", [Attachment.of_text("hi")]),
    ])
    assert out[0] == Message("system", "Be brief")
    assert out[1].is_structured()


@pytest.mark.parametrize("bad", [
    None,
    42,
    [],
    {"role": "user", "content": "x"},
    [["user"]],
    [["robot", "hi"]],
    [{"role": "user"}],
    [["user", 5]],
    [["user", [{"type": "text", "text": "raw dict"}]]],
])
def test_invalid_shapes_raise(bad):
    with pytest.raises(InvalidPromptShapeError):
        build_messages(bad)
