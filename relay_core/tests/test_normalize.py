import pytest

from relay_core.domain.exceptions import MalformedResponseError
from relay_core.providers.normalize import normalize_reply


def test_choices_take_precedence_over_data():
    body = {
        "choices": [{"message": {"role": "assistant", "content": "from choices"}}],
        "data": {"answer": "from data"},
    }
    assert normalize_reply(body) == "from choices"


def test_data_answer():
    assert normalize_reply({"data": {"answer": "X", "content": "ignored"}}) == "X"


def test_data_content_when_no_answer():
    assert normalize_reply({"data": {"content": "C"}}) == "C"


def test_data_object_without_known_fields_is_serialized():
    assert normalize_reply({"data": {"id": 1, "名称": "值"}}) == '{"id":1,"名称":"值"}'


def test_data_plain_string_verbatim():
    assert normalize_reply({"data": "plain text"}) == "plain text"


def test_data_other_types_use_textual_form():
    assert normalize_reply({"data": 42}) == "42"
    assert normalize_reply({"data": True}) == "true"


def test_null_choices_and_data_fall_through_to_answer():
    assert normalize_reply({"choices": None, "data": None, "answer": "Y"}) == "Y"


def test_top_level_answer():
    assert normalize_reply({"answer": "Y"}) == "Y"


def test_passthrough_returns_whole_body():
    assert normalize_reply({"code": 0, "message": "ok"}) == '{"code":0,"message":"ok"}'


def test_content_parts_are_joined():
    body = {"choices": [{"message": {"content": [{"type": "text", "text": "a"}, {"type": "text", "text": "b"}]}}]}
    assert normalize_reply(body) == "a\nb"


def test_empty_choices_is_malformed():
    with pytest.raises(MalformedResponseError):
        normalize_reply({"choices": []})


def test_non_object_body_is_malformed():
    with pytest.raises(MalformedResponseError):
        normalize_reply(["not", "an", "object"])
