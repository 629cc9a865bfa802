# utils/bible_api.py
"""
Bible text providers.

Each translation is served by an upstream API with its own request and
response shape:

- ESV:   api.esv.org passage endpoint (token auth, one concatenated passage)
- NIV &c: api.bible search endpoint (api-key auth, keyed by a bible id)
- BSB:   bible.helloao.org chapter JSON (no auth, per-verse content tree)

VerseAggregator hides the differences: fetch_verse() returns a VerseData
or None. Failures (missing keys, HTTP errors, transport errors, empty
payloads) are logged here and never raised to the caller.
"""
import logging
from typing import Optional

import requests

import config
from config import Config
from models.bible import BibleChapter, BibleVerse, Translation, VerseData, VerseReference
from utils.books import get_book_code, get_book_name
from utils.verse_parser import format_verse_reference

logger = logging.getLogger(__name__)


class BibleAPIError(Exception):
    """An upstream provider failed for a reason other than 'not found'."""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class VerseProvider:
    """Base class for one upstream text source."""

    name = 'provider'

    def __init__(self, http=None, timeout=None):
        # Anything with a requests-style .get() works here
        self.http = http or requests
        self._timeout = timeout

    @property
    def timeout(self):
        return self._timeout if self._timeout is not None else config.upstream_timeout()

    def fetch(self, reference: VerseReference, translation: Translation) -> Optional[VerseData]:
        raise NotImplementedError

    def _get_json(self, url, **kwargs):
        """GET url and decode JSON. Returns None (after logging) on any failure."""
        try:
            response = self.http.get(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{self.name} request failed: {e}")
            return None

        if not response.ok:
            logger.error(f"{self.name} error: {response.status_code}")
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{self.name} returned invalid JSON: {e}")
            return None


class ESVProvider(VerseProvider):
    name = 'ESV API'

    def __init__(self, api_key=None, http=None, timeout=None):
        super().__init__(http=http, timeout=timeout)
        self.api_key = api_key

    def fetch(self, reference, translation=Translation.ESV):
        api_key = self.api_key or config.esv_api_key()
        if not api_key:
            logger.error("ESV_API_KEY not configured")
            return None

        params = {
            'q': format_verse_reference(reference),
            'include-headings': 'false',
            'include-footnotes': 'false',
            'include-verse-numbers': 'false',
            'include-short-copyright': 'false',
            'include-passage-references': 'false',
        }
        data = self._get_json(
            Config.ESV_API_URL,
            params=params,
            headers={'Authorization': f'Token {api_key}'},
        )
        if not isinstance(data, dict):
            return None

        passages = data.get('passages') or []
        text = passages[0].strip() if passages and isinstance(passages[0], str) else ''
        if not text:
            logger.info(f"ESV API returned no passage for {format_verse_reference(reference)}")
            return None

        return VerseData(reference=reference, text=text, translation=Translation.ESV)


class BibleAPIProvider(VerseProvider):
    name = 'Bible API'

    def __init__(self, api_key=None, bible_ids=None, http=None, timeout=None):
        super().__init__(http=http, timeout=timeout)
        self.api_key = api_key
        self.bible_ids = bible_ids

    def get_bible_id(self, translation):
        ids = self.bible_ids if self.bible_ids is not None else config.bible_api_ids()
        return ids.get(translation.value)

    def fetch(self, reference, translation):
        api_key = self.api_key or config.bible_api_key()
        if not api_key:
            logger.error("BIBLE_API_KEY not configured")
            return None

        bible_id = self.get_bible_id(translation)
        if not bible_id:
            logger.error(f"Unsupported translation for api.bible: {translation.value}")
            return None

        data = self._get_json(
            f"{Config.BIBLE_API_URL}/bibles/{bible_id}/search",
            params={'query': format_verse_reference(reference)},
            headers={'api-key': api_key},
        )
        if not isinstance(data, dict):
            return None

        content = (data.get('data') or {}).get('content')
        text = content.strip() if isinstance(content, str) else ''
        if not text:
            logger.info(f"Bible API returned no content for {format_verse_reference(reference)}")
            return None

        return VerseData(reference=reference, text=text, translation=translation)


def extract_verse_text(content) -> str:
    """Plain text of a BSB verse content list.

    Items are either bare strings or {"type": ..., "text": ...} objects;
    only text items count (footnote markers are type "noteId").
    """
    parts = []
    for item in content:
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, dict) and item.get('type') == 'text' and item.get('text'):
            parts.append(item['text'])
    return ''.join(parts).strip()


def iter_verses(chapter_content):
    """Yield (verse number, text) for each verse node in a BSB chapter."""
    for item in chapter_content:
        if not isinstance(item, dict) or item.get('type') != 'verse':
            continue
        number = item.get('number')
        content = item.get('content')
        if not number or not content:
            continue
        yield number, extract_verse_text(content)


class BSBProvider(VerseProvider):
    name = 'BSB API'

    def _get_chapter_payload(self, book_code, chapter):
        """Raw chapter JSON. None if upstream has no such chapter."""
        url = f"{Config.BSB_API_URL}/{book_code}/{chapter}.json"
        try:
            response = self.http.get(url, headers={'Accept': 'application/json'}, timeout=self.timeout)
        except requests.RequestException as e:
            raise BibleAPIError(f"BSB API request failed: {e}") from e

        if response.status_code == 404:
            return None
        if not response.ok:
            raise BibleAPIError(f"BSB API error: {response.status_code}", status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise BibleAPIError(f"BSB API returned invalid JSON: {e}") from e

        chapter_data = data.get('chapter') if isinstance(data, dict) else None
        if not isinstance(chapter_data, dict) or not isinstance(chapter_data.get('content'), list):
            raise BibleAPIError("BSB API returned an unexpected payload")
        return data

    def fetch(self, reference, translation=Translation.BSB):
        book_code = get_book_code(reference.book)
        if not book_code:
            logger.error(f"Unknown book: {reference.book}")
            return None

        try:
            data = self._get_chapter_payload(book_code, reference.chapter)
        except BibleAPIError as e:
            logger.error(str(e))
            return None
        if data is None:
            logger.info(f"BSB API has no chapter {book_code} {reference.chapter}")
            return None

        start_verse = reference.start_verse
        end_verse = reference.end_verse if reference.end_verse is not None else start_verse

        selected = sorted(
            (number, text)
            for number, text in iter_verses(data['chapter']['content'])
            if start_verse <= number <= end_verse
        )
        if not selected:
            return None

        return VerseData(
            reference=reference,
            text=' '.join(text for _, text in selected),
            translation=Translation.BSB,
        )

    def fetch_chapter(self, book_code, chapter) -> Optional[BibleChapter]:
        """Whole chapter for the chapter endpoint.

        Returns None when upstream has no such chapter; raises BibleAPIError
        for any other upstream failure.
        """
        book_code = book_code.upper()
        data = self._get_chapter_payload(book_code, chapter)
        if data is None:
            return None

        chapter_number = data['chapter'].get('number', chapter)
        verses = [
            BibleVerse(book=book_code, chapter=chapter_number, verse=number, text=text)
            for number, text in iter_verses(data['chapter']['content'])
        ]
        book_name = get_book_name(book_code) or (data.get('book') or {}).get('name', book_code)

        return BibleChapter(
            book=book_code,
            book_name=book_name,
            chapter=chapter_number,
            verses=verses,
        )


def default_providers(http=None):
    """Translation -> provider strategy."""
    esv = ESVProvider(http=http)
    bible_api = BibleAPIProvider(http=http)
    bsb = BSBProvider(http=http)
    return {
        Translation.ESV: esv,
        Translation.BSB: bsb,
        Translation.NIV: bible_api,
        Translation.NASB: bible_api,
        Translation.LSB: bible_api,
        Translation.KJV: bible_api,
    }


class VerseAggregator:
    def __init__(self, providers=None):
        self.providers = dict(providers if providers is not None else default_providers())

    def fetch_verse(self, reference: VerseReference, translation=Translation.ESV) -> Optional[VerseData]:
        """Fetch a passage in the given translation. None if it can't be had."""
        code = Translation.from_code(translation)
        provider = self.providers.get(code) if code else None
        if provider is None:
            logger.error(f"Translation {translation} not yet supported")
            return None

        try:
            return provider.fetch(reference, code)
        except Exception as e:
            logger.error(f"{provider.name} failed for {format_verse_reference(reference)}: {e}", exc_info=True)
            return None

    def fetch_chapter(self, book_code, chapter) -> Optional[BibleChapter]:
        provider = self.providers.get(Translation.BSB)
        if provider is None:
            raise BibleAPIError("No chapter provider configured")
        return provider.fetch_chapter(book_code, chapter)


_aggregator = None


def get_aggregator():
    global _aggregator
    if _aggregator is None:
        _aggregator = VerseAggregator()
    return _aggregator


def fetch_verse(reference, translation=Translation.ESV):
    return get_aggregator().fetch_verse(reference, translation)
