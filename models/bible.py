# models/bible.py
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Translation(str, Enum):
    ESV = "ESV"
    NIV = "NIV"
    NASB = "NASB"
    LSB = "LSB"
    BSB = "BSB"
    KJV = "KJV"

    @classmethod
    def from_code(cls, code):
        """Translation for a code (any case), or None if we don't know it."""
        if isinstance(code, cls):
            return code
        if not code:
            return None
        try:
            return cls(str(code).strip().upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class VerseReference:
    book: str
    chapter: int
    start_verse: int
    end_verse: Optional[int] = None

    def to_json(self):
        return {
            "book": self.book,
            "chapter": self.chapter,
            "startVerse": self.start_verse,
            "endVerse": self.end_verse,
        }


@dataclass(frozen=True)
class VerseData:
    reference: VerseReference
    text: str
    translation: Translation

    def to_json(self):
        return {
            "reference": self.reference.to_json(),
            "text": self.text,
            "translation": self.translation.value,
        }


@dataclass(frozen=True)
class BibleVerse:
    book: str
    chapter: int
    verse: int
    text: str

    def to_json(self):
        return {
            "book": self.book,
            "chapter": self.chapter,
            "verse": self.verse,
            "text": self.text,
        }


@dataclass
class BibleChapter:
    book: str
    book_name: str
    chapter: int
    verses: List[BibleVerse] = field(default_factory=list)
    translation: Translation = Translation.BSB

    def to_json(self):
        return {
            "book": self.book,
            "bookName": self.book_name,
            "chapter": self.chapter,
            "verses": [verse.to_json() for verse in self.verses],
            "translation": self.translation.value,
        }
