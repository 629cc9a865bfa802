# tests/test_bible_api.py
import pytest
import requests

from models.bible import Translation, VerseReference
from utils.bible_api import (
    BibleAPIError,
    BibleAPIProvider,
    BSBProvider,
    ESVProvider,
    VerseAggregator,
    extract_verse_text,
)

JOHN_3_16 = VerseReference("John", 3, 16)


# ---------------------------------------------------------------------
# ESV
# ---------------------------------------------------------------------
def test_esv_returns_trimmed_first_passage(fake_http, fake_response):
    http = fake_http(fake_response(200, {"passages": ["  For God so loved the world  \n"]}))
    verse = ESVProvider(api_key="esv-key", http=http).fetch(JOHN_3_16)

    assert verse.text == "For God so loved the world"
    assert verse.translation is Translation.ESV
    assert verse.reference == JOHN_3_16

    url, kwargs = http.calls[0]
    assert url.startswith("https://api.esv.org/")
    assert kwargs["headers"] == {"Authorization": "Token esv-key"}
    assert kwargs["params"]["q"] == "John 3:16"
    assert kwargs["params"]["include-footnotes"] == "false"
    assert kwargs["params"]["include-verse-numbers"] == "false"


def test_esv_without_key_makes_no_request(fake_http):
    http = fake_http()
    assert ESVProvider(http=http).fetch(JOHN_3_16) is None
    assert http.calls == []


def test_esv_reads_key_from_environment(monkeypatch, fake_http, fake_response):
    monkeypatch.setenv("ESV_API_KEY", "from-env")
    http = fake_http(fake_response(200, {"passages": ["text"]}))
    assert ESVProvider(http=http).fetch(JOHN_3_16).text == "text"
    assert http.calls[0][1]["headers"]["Authorization"] == "Token from-env"


@pytest.mark.parametrize("response_args", [
    (500, {"passages": ["text"]}),
    (401, None),
    (200, {"passages": []}),
    (200, {"passages": ["   "]}),
    (200, {}),
])
def test_esv_failures_return_none(fake_http, fake_response, response_args):
    http = fake_http(fake_response(*response_args))
    assert ESVProvider(api_key="k", http=http).fetch(JOHN_3_16) is None


def test_esv_transport_error_returns_none(fake_http):
    http = fake_http(error=requests.ConnectionError("boom"))
    assert ESVProvider(api_key="k", http=http).fetch(JOHN_3_16) is None


def test_timeout_comes_from_environment(monkeypatch, fake_http, fake_response):
    monkeypatch.setenv("UPSTREAM_TIMEOUT", "2.5")
    http = fake_http(fake_response(200, {"passages": ["text"]}))
    ESVProvider(api_key="k", http=http).fetch(JOHN_3_16)
    assert http.calls[0][1]["timeout"] == 2.5


# ---------------------------------------------------------------------
# api.bible
# ---------------------------------------------------------------------
def test_bible_api_without_configured_id_returns_none(fake_http):
    http = fake_http()
    provider = BibleAPIProvider(api_key="k", bible_ids={}, http=http)
    assert provider.fetch(JOHN_3_16, Translation.NIV) is None
    assert http.calls == []


def test_bible_api_without_key_returns_none(fake_http):
    http = fake_http()
    assert BibleAPIProvider(http=http).fetch(JOHN_3_16, Translation.NIV) is None
    assert http.calls == []


def test_bible_api_search_content(fake_http, fake_response):
    http = fake_http(fake_response(200, {"data": {"content": " For God so loved "}}))
    verse = BibleAPIProvider(api_key="k", http=http).fetch(JOHN_3_16, Translation.NIV)

    assert verse.text == "For God so loved"
    assert verse.translation is Translation.NIV
    url, kwargs = http.calls[0]
    assert url.endswith("/bibles/78a9f6124f344018-01/search")
    assert kwargs["headers"] == {"api-key": "k"}
    assert kwargs["params"] == {"query": "John 3:16"}


def test_bible_api_ids_env_override(monkeypatch, fake_http, fake_response):
    monkeypatch.setenv("BIBLE_API_IDS", '{"kjv": "de4e12af7f28f599-02"}')
    http = fake_http(fake_response(200, {"data": {"content": "text"}}))
    verse = BibleAPIProvider(api_key="k", http=http).fetch(JOHN_3_16, Translation.KJV)
    assert verse is not None
    assert "de4e12af7f28f599-02" in http.calls[0][0]


def test_bible_api_ignores_malformed_id_override(monkeypatch):
    monkeypatch.setenv("BIBLE_API_IDS", "{not json")
    assert BibleAPIProvider().get_bible_id(Translation.NIV) == "78a9f6124f344018-01"


@pytest.mark.parametrize("response_args", [
    (404, None),
    (200, {"data": {}}),
    (200, {"data": {"content": ""}}),
])
def test_bible_api_failures_return_none(fake_http, fake_response, response_args):
    http = fake_http(fake_response(*response_args))
    assert BibleAPIProvider(api_key="k", http=http).fetch(JOHN_3_16, Translation.NIV) is None


# ---------------------------------------------------------------------
# BSB
# ---------------------------------------------------------------------
def test_bsb_range_is_inclusive_and_ordered(fake_http, fake_response, bsb_payload):
    payload = bsb_payload({18: "eighteen", 15: "fifteen", 17: "seventeen", 16: "sixteen"}, chapter=3)
    http = fake_http(fake_response(200, payload))

    verse = BSBProvider(http=http).fetch(VerseReference("John", 3, 16, 17))

    assert verse.text == "sixteen seventeen"
    assert verse.translation is Translation.BSB
    assert http.calls[0][0].endswith("/BSB/JHN/3.json")


def test_bsb_missing_verses_returns_none(fake_http, fake_response, bsb_payload):
    http = fake_http(fake_response(200, bsb_payload({1: "one", 2: "two"})))
    assert BSBProvider(http=http).fetch(VerseReference("John", 1, 40, 42)) is None


def test_bsb_unknown_book_makes_no_request(fake_http):
    http = fake_http()
    assert BSBProvider(http=http).fetch(VerseReference("Hezekiah", 1, 1)) is None
    assert http.calls == []


@pytest.mark.parametrize("response", [
    dict(status_code=404),
    dict(status_code=503),
    dict(status_code=200, invalid_json=True),
    dict(status_code=200, payload={"chapter": {}}),
])
def test_bsb_upstream_failures_return_none(fake_http, fake_response, response):
    http = fake_http(fake_response(**response))
    assert BSBProvider(http=http).fetch(JOHN_3_16) is None


def test_extract_verse_text_skips_notes():
    content = ["In the beginning ", {"type": "text", "text": "was the Word"}, {"noteId": 3}, {"type": "note", "text": "x"}]
    assert extract_verse_text(content) == "In the beginning was the Word"


def test_fetch_chapter(fake_http, fake_response, bsb_payload):
    http = fake_http(fake_response(200, bsb_payload({1: "In the beginning", 2: "He was with God"})))
    chapter = BSBProvider(http=http).fetch_chapter("jhn", 1)

    assert chapter.book == "JHN"
    assert chapter.book_name == "John"
    assert [v.verse for v in chapter.verses] == [1, 2]
    assert chapter.to_json()["verses"][1] == {"book": "JHN", "chapter": 1, "verse": 2, "text": "He was with God"}


def test_fetch_chapter_not_found(fake_http, fake_response):
    assert BSBProvider(http=fake_http(fake_response(404))).fetch_chapter("JHN", 99) is None


def test_fetch_chapter_upstream_error_raises(fake_http, fake_response):
    with pytest.raises(BibleAPIError):
        BSBProvider(http=fake_http(fake_response(500))).fetch_chapter("JHN", 1)


# ---------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------
class ExplodingProvider:
    name = "exploding"

    def fetch(self, reference, translation):
        raise RuntimeError("unexpected")


def test_aggregator_dispatches_by_translation_code(fake_http, fake_response, bsb_payload):
    http = fake_http(fake_response(200, bsb_payload({16: "For God so loved"}, chapter=3)))
    aggregator = VerseAggregator({Translation.BSB: BSBProvider(http=http)})
    assert aggregator.fetch_verse(JOHN_3_16, "bsb").text == "For God so loved"


def test_aggregator_unknown_translation_returns_none():
    assert VerseAggregator().fetch_verse(JOHN_3_16, "XYZ") is None


def test_aggregator_niv_without_configuration_returns_none():
    assert VerseAggregator().fetch_verse(JOHN_3_16, "NIV") is None


def test_aggregator_contains_provider_exceptions():
    aggregator = VerseAggregator({Translation.ESV: ExplodingProvider()})
    assert aggregator.fetch_verse(JOHN_3_16) is None
