# utils/books.py
"""
Canonical table of the 66 books of the Protestant canon.

Each book has a 3-letter code (the codes used by the BSB community API),
a display name, its testament and the language it was written in. The
table is built once at import and is read-only afterwards; every
name <-> code lookup in the app goes through it.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Testament(str, Enum):
    OT = "OT"
    NT = "NT"


class Language(str, Enum):
    HEBREW = "Hebrew"
    GREEK = "Greek"


@dataclass(frozen=True)
class Book:
    code: str
    name: str
    testament: Testament
    language: Language


_CANON = [
    ('GEN', 'Genesis'),
    ('EXO', 'Exodus'),
    ('LEV', 'Leviticus'),
    ('NUM', 'Numbers'),
    ('DEU', 'Deuteronomy'),
    ('JOS', 'Joshua'),
    ('JDG', 'Judges'),
    ('RUT', 'Ruth'),
    ('1SA', '1 Samuel'),
    ('2SA', '2 Samuel'),
    ('1KI', '1 Kings'),
    ('2KI', '2 Kings'),
    ('1CH', '1 Chronicles'),
    ('2CH', '2 Chronicles'),
    ('EZR', 'Ezra'),
    ('NEH', 'Nehemiah'),
    ('EST', 'Esther'),
    ('JOB', 'Job'),
    ('PSA', 'Psalms'),
    ('PRO', 'Proverbs'),
    ('ECC', 'Ecclesiastes'),
    ('SNG', 'Song of Solomon'),
    ('ISA', 'Isaiah'),
    ('JER', 'Jeremiah'),
    ('LAM', 'Lamentations'),
    ('EZK', 'Ezekiel'),
    ('DAN', 'Daniel'),
    ('HOS', 'Hosea'),
    ('JOL', 'Joel'),
    ('AMO', 'Amos'),
    ('OBA', 'Obadiah'),
    ('JON', 'Jonah'),
    ('MIC', 'Micah'),
    ('NAM', 'Nahum'),
    ('HAB', 'Habakkuk'),
    ('ZEP', 'Zephaniah'),
    ('HAG', 'Haggai'),
    ('ZEC', 'Zechariah'),
    ('MAL', 'Malachi'),
    ('MAT', 'Matthew'),
    ('MRK', 'Mark'),
    ('LUK', 'Luke'),
    ('JHN', 'John'),
    ('ACT', 'Acts'),
    ('ROM', 'Romans'),
    ('1CO', '1 Corinthians'),
    ('2CO', '2 Corinthians'),
    ('GAL', 'Galatians'),
    ('EPH', 'Ephesians'),
    ('PHP', 'Philippians'),
    ('COL', 'Colossians'),
    ('1TH', '1 Thessalonians'),
    ('2TH', '2 Thessalonians'),
    ('1TI', '1 Timothy'),
    ('2TI', '2 Timothy'),
    ('TIT', 'Titus'),
    ('PHM', 'Philemon'),
    ('HEB', 'Hebrews'),
    ('JAS', 'James'),
    ('1PE', '1 Peter'),
    ('2PE', '2 Peter'),
    ('1JN', '1 John'),
    ('2JN', '2 John'),
    ('3JN', '3 John'),
    ('JUD', 'Jude'),
    ('REV', 'Revelation'),
]

# Malachi is the last Old Testament book; Matthew opens the New Testament.
_NT_START = 39

BOOKS = tuple(
    Book(
        code=code,
        name=name,
        testament=Testament.OT if index < _NT_START else Testament.NT,
        language=Language.HEBREW if index < _NT_START else Language.GREEK,
    )
    for index, (code, name) in enumerate(_CANON)
)

BOOKS_BY_CODE = {book.code: book for book in BOOKS}
BOOKS_BY_NAME = {book.name: book for book in BOOKS}
_BOOKS_BY_LOWER_NAME = {book.name.lower(): book for book in BOOKS}

# Free-form shorthand that the reference parser's abbreviation table does
# not cover.
_CODE_VARIATIONS = {
    'song of songs': 'SNG',
    'songs': 'SNG',
    'psalm': 'PSA',
    '1sam': '1SA',
    '2sam': '2SA',
    '1kgs': '1KI',
    '2kgs': '2KI',
    '1chr': '1CH',
    '2chr': '2CH',
    '1cor': '1CO',
    '2cor': '2CO',
    '1thess': '1TH',
    '2thess': '2TH',
    '1tim': '1TI',
    '2tim': '2TI',
    '1pet': '1PE',
    '2pet': '2PE',
    '1jn': '1JN',
    '2jn': '2JN',
    '3jn': '3JN',
}


def get_book_code(name: str) -> Optional[str]:
    """Get the 3-letter book code for a display name or common variant.

    Returns None when the name is not a book we know about.
    """
    if not name:
        return None

    book = BOOKS_BY_NAME.get(name)
    if book:
        return book.code

    lower_name = name.strip().lower()
    book = _BOOKS_BY_LOWER_NAME.get(lower_name)
    if book:
        return book.code

    return _CODE_VARIATIONS.get(lower_name)


def get_book(code: str) -> Optional[Book]:
    if not code:
        return None
    return BOOKS_BY_CODE.get(code.strip().upper())


def get_book_name(code: str) -> Optional[str]:
    book = get_book(code)
    return book.name if book else None


def is_valid_book_code(code: str) -> bool:
    return get_book(code) is not None


def get_testament(code: str) -> Optional[str]:
    """'OT' or 'NT' for a book code (any case); None for an unknown code."""
    book = get_book(code)
    return book.testament.value if book else None


def get_original_language(code: str) -> Optional[str]:
    """'Hebrew' or 'Greek' for a book code (any case); None for an unknown code."""
    book = get_book(code)
    return book.language.value if book else None
