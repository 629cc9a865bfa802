# This file makes the models directory a Python package
from .bible import Translation, VerseReference, VerseData, BibleVerse, BibleChapter
from .game import GameMode, Difficulty

__all__ = [
    'Translation',
    'VerseReference',
    'VerseData',
    'BibleVerse',
    'BibleChapter',
    'GameMode',
    'Difficulty',
]
