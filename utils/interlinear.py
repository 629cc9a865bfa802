# utils/interlinear.py
"""
Word-by-word Hebrew/Greek data from the per-book JSON files written by
scripts/convert_bsb_tables.py.

Book file shape:
    {"book": "JHN", "chapters": {"3": {"16": [word, ...]}}}
"""
import os
import json
import logging
from functools import lru_cache

import config

logger = logging.getLogger(__name__)


@lru_cache(maxsize=16)
def _read_book_file(path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_book_data(book_code, data_dir=None):
    """Parsed book file for a code, or None if there isn't a usable one."""
    if not book_code:
        return None
    path = os.path.join(data_dir or config.interlinear_data_dir(), f'{book_code.upper()}.json')
    if not os.path.isfile(path):
        return None
    try:
        data = _read_book_file(path)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load interlinear data {path}: {e}")
        return None
    if (
        not isinstance(data, dict)
        or not isinstance(data.get('book'), str)
        or not isinstance(data.get('chapters'), dict)
    ):
        logger.error(f"Interlinear data {path} has an unexpected shape")
        return None
    return data


def _verse(book_data, chapter, verse, words):
    return {
        'book': book_data['book'],
        'chapter': chapter,
        'verse': verse,
        'words': words,
    }


def get_chapter_from_book_data(book_data, chapter):
    """All verses of a chapter sorted by verse number, or None."""
    chapter_data = book_data['chapters'].get(str(chapter))
    if not chapter_data:
        return None

    verses = [
        _verse(book_data, chapter, int(verse_num), words)
        for verse_num, words in chapter_data.items()
    ]
    verses.sort(key=lambda v: v['verse'])
    return verses


def get_verse_from_book_data(book_data, chapter, verse):
    chapter_data = book_data['chapters'].get(str(chapter))
    if not chapter_data:
        return None

    words = chapter_data.get(str(verse))
    if not words:
        return None
    return _verse(book_data, chapter, verse, words)
