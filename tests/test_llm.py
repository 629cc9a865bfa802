# tests/test_llm.py
import json

import anthropic
import httpx
import pytest

from utils import llm

OUTLINE = {
    "mainPoints": [{"heading": "Love is patient", "subPoints": ["Kind", "Not envious"]}],
    "keyThemes": ["Love"],
    "crossReferences": ["1 John 4:8"],
}


@pytest.mark.parametrize("text", [
    '{"a": 1}',
    '```json\n{"a": 1}\n```',
    '```\n{"a": 1}\n```',
    '  ```json\n{"a": 1}```  ',
])
def test_extract_json_text_strips_fences(text):
    assert llm.extract_json_text(text) == '{"a": 1}'


def test_no_api_key_means_no_client():
    assert llm.get_client() is None
    assert llm.generate_sermon_outline("1 Corinthians 13:4-7") is None


def test_sermon_outline(fake_anthropic):
    fake = fake_anthropic("```json\n" + json.dumps(OUTLINE) + "\n```")
    outline = llm.generate_sermon_outline("1 Corinthians 13:4-7", "Love")

    assert outline == OUTLINE
    prompt = fake.messages.calls[0]["messages"][0]["content"]
    assert "1 Corinthians 13:4-7" in prompt
    assert "Sermon Title: Love" in prompt


def test_sermon_outline_uses_configured_model(monkeypatch, fake_anthropic):
    monkeypatch.setenv("ANTHROPIC_MODEL", "claude-test-model")
    fake = fake_anthropic(OUTLINE)
    llm.generate_sermon_outline("John 1:1")
    assert fake.messages.calls[0]["model"] == "claude-test-model"


@pytest.mark.parametrize("reply", [
    "not json at all",
    {"keyThemes": ["missing main points"]},
    [1, 2, 3],
])
def test_sermon_outline_bad_payload(fake_anthropic, reply):
    fake_anthropic(reply)
    assert llm.generate_sermon_outline("John 1:1") is None


def test_api_error_returns_none(fake_anthropic):
    error = anthropic.APIConnectionError(request=httpx.Request("POST", "https://api.anthropic.com/v1/messages"))
    fake_anthropic(error=error)
    assert llm.generate_sermon_outline("John 1:1") is None
    assert llm.generate_reflection_questions("John 1:1") is None


def test_reflection_questions_coerce_unknown_category(fake_anthropic):
    fake = fake_anthropic([
        {"question": "What does the text say about love?", "category": "observation"},
        {"question": "How would you live this out?", "category": "application"},
        {"question": "Who wrote this?", "category": "history"},
    ])
    questions = llm.generate_reflection_questions("1 Corinthians 13:4-7", count=3)

    assert [q["category"] for q in questions] == ["observation", "application", "observation"]
    assert "Generate 3 reflection questions" in fake.messages.calls[0]["messages"][0]["content"]


def test_reflection_questions_bad_payload(fake_anthropic):
    fake_anthropic({"questions": "not a list"})
    assert llm.generate_reflection_questions("John 1:1") is None
