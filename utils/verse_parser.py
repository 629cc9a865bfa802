# utils/verse_parser.py
"""
Verse reference parsing.

Handles the formats people actually type: "John 3:16", "Jn 3:16",
"John 3:16-18", "1 Corinthians 13:4-7", "1Cor 13:4", "Gen. 1:1".
"""
import re
import logging
from typing import Optional

from models.bible import VerseReference
from utils.books import BOOKS

logger = logging.getLogger(__name__)

# Abbreviations to display names. Keys are lowercase with no spaces.
BOOK_ABBREVIATIONS = {
    # Old Testament
    'gen': 'Genesis',
    'ge': 'Genesis',
    'gn': 'Genesis',
    'ex': 'Exodus',
    'exo': 'Exodus',
    'exod': 'Exodus',
    'lev': 'Leviticus',
    'lv': 'Leviticus',
    'num': 'Numbers',
    'nm': 'Numbers',
    'nu': 'Numbers',
    'deut': 'Deuteronomy',
    'dt': 'Deuteronomy',
    'de': 'Deuteronomy',
    'josh': 'Joshua',
    'jos': 'Joshua',
    'judg': 'Judges',
    'jdg': 'Judges',
    'ru': 'Ruth',
    'rth': 'Ruth',
    '1sa': '1 Samuel',
    '2sa': '2 Samuel',
    '1ki': '1 Kings',
    '2ki': '2 Kings',
    '1ch': '1 Chronicles',
    '2ch': '2 Chronicles',
    'ezr': 'Ezra',
    'neh': 'Nehemiah',
    'ne': 'Nehemiah',
    'esth': 'Esther',
    'est': 'Esther',
    'jb': 'Job',
    'ps': 'Psalms',
    'psa': 'Psalms',
    'pss': 'Psalms',
    'prov': 'Proverbs',
    'pro': 'Proverbs',
    'prv': 'Proverbs',
    'eccl': 'Ecclesiastes',
    'ecc': 'Ecclesiastes',
    'qoh': 'Ecclesiastes',
    'song': 'Song of Solomon',
    'sng': 'Song of Solomon',
    'sos': 'Song of Solomon',
    'isa': 'Isaiah',
    'jer': 'Jeremiah',
    'lam': 'Lamentations',
    'ezek': 'Ezekiel',
    'ezk': 'Ezekiel',
    'eze': 'Ezekiel',
    'dan': 'Daniel',
    'dn': 'Daniel',
    'hos': 'Hosea',
    'jl': 'Joel',
    'am': 'Amos',
    'obad': 'Obadiah',
    'oba': 'Obadiah',
    'jnh': 'Jonah',
    'mic': 'Micah',
    'nah': 'Nahum',
    'nam': 'Nahum',
    'hab': 'Habakkuk',
    'zeph': 'Zephaniah',
    'zep': 'Zephaniah',
    'hag': 'Haggai',
    'zech': 'Zechariah',
    'zec': 'Zechariah',
    'mal': 'Malachi',
    # New Testament
    'mt': 'Matthew',
    'matt': 'Matthew',
    'mat': 'Matthew',
    'mk': 'Mark',
    'mr': 'Mark',
    'mrk': 'Mark',
    'lk': 'Luke',
    'lu': 'Luke',
    'luk': 'Luke',
    'jn': 'John',
    'joh': 'John',
    'jhn': 'John',
    'ac': 'Acts',
    'act': 'Acts',
    'rom': 'Romans',
    'ro': 'Romans',
    '1co': '1 Corinthians',
    '1cor': '1 Corinthians',
    '2co': '2 Corinthians',
    '2cor': '2 Corinthians',
    'gal': 'Galatians',
    'ga': 'Galatians',
    'eph': 'Ephesians',
    'php': 'Philippians',
    'phil': 'Philippians',
    'col': 'Colossians',
    '1th': '1 Thessalonians',
    '1thess': '1 Thessalonians',
    '2th': '2 Thessalonians',
    '2thess': '2 Thessalonians',
    '1ti': '1 Timothy',
    '1tim': '1 Timothy',
    '2ti': '2 Timothy',
    '2tim': '2 Timothy',
    'tit': 'Titus',
    'phm': 'Philemon',
    'philem': 'Philemon',
    'heb': 'Hebrews',
    'jas': 'James',
    'jam': 'James',
    '1pe': '1 Peter',
    '1pet': '1 Peter',
    '2pe': '2 Peter',
    '2pet': '2 Peter',
    '1jn': '1 John',
    '1jo': '1 John',
    '1john': '1 John',
    '2jn': '2 John',
    '2jo': '2 John',
    '2john': '2 John',
    '3jn': '3 John',
    '3jo': '3 John',
    '3john': '3 John',
    'jud': 'Jude',
    'rev': 'Revelation',
    're': 'Revelation',
}

# Full names are accepted in any case as well
_KNOWN_NAMES = dict(BOOK_ABBREVIATIONS)
_KNOWN_NAMES.update({book.name.lower(): book.name for book in BOOKS})

# (optional digit + book words)(optional period) chapter:verse(-end)
_REFERENCE_PATTERN = re.compile(
    r'^(\d?\s*[A-Za-z]+(?:\s+[A-Za-z]+)*)\.?\s+(\d+):(\d+)(?:\s*[-–]\s*(\d+))?$',
    re.ASCII,
)


def normalize_book_name(name: str) -> str:
    """Map an abbreviation or any-case book name to its display name.

    Unknown names come back exactly as given.
    """
    if not name:
        return name

    key = re.sub(r'\s+', ' ', name.strip().lower()).rstrip('.')
    if key in _KNOWN_NAMES:
        return _KNOWN_NAMES[key]

    # "1 cor" and "1cor" are the same abbreviation
    compact = key.replace(' ', '')
    if compact in _KNOWN_NAMES:
        return _KNOWN_NAMES[compact]

    return name


def parse_verse_reference(reference: str) -> Optional[VerseReference]:
    """
    Parse a verse reference string into a VerseReference.

    Args:
        reference: e.g. "John 3:16", "1 Cor 13:4-7"

    Returns:
        VerseReference, or None if the text is not a verse reference.
        Book names we don't recognise are kept as typed; they are caught
        later when a provider needs a book code.
    """
    if not reference or not isinstance(reference, str):
        return None

    collapsed = re.sub(r'\s+', ' ', reference.strip())
    match = _REFERENCE_PATTERN.match(collapsed)
    if not match:
        return None

    book_part, chapter_str, start_str, end_str = match.groups()
    try:
        chapter = int(chapter_str)
        start_verse = int(start_str)
        end_verse = int(end_str) if end_str is not None else None
    except ValueError:
        return None

    if chapter < 1 or start_verse < 1:
        return None
    if end_verse is not None and end_verse < start_verse:
        logger.debug(f"Rejecting backwards verse range in {reference!r}")
        return None

    return VerseReference(
        book=normalize_book_name(book_part.strip()),
        chapter=chapter,
        start_verse=start_verse,
        end_verse=end_verse,
    )


def format_verse_reference(ref: VerseReference) -> str:
    base = f"{ref.book} {ref.chapter}:{ref.start_verse}"
    return f"{base}-{ref.end_verse}" if ref.end_verse is not None else base


def parse_positive_int(value):
    """'3' -> 3. None for anything but ASCII digits >= 1 ('0', '-1', '²', '')."""
    if not value or not value.isascii() or not value.isdigit():
        return None
    number = int(value)
    return number if number >= 1 else None
