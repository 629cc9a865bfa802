# utils/strongs.py
"""
Strong's Concordance utilities.

Hebrew numbers run H1-H8674, Greek G1-G5624. Lexicon files key entries by
the unpadded form ("H430"); responses show the zero-padded form ("H0430").
"""
import os
import re
import json
import logging
import threading

import config

logger = logging.getLogger(__name__)

_VALID_PATTERN = re.compile(r'^[HG]\d{1,4}$', re.IGNORECASE | re.ASCII)
_NUMBER_PATTERN = re.compile(r'^([HG])(\d+)$', re.ASCII)

HEBREW_RANGE = 'Hebrew entries range from H1 to H8674'
GREEK_RANGE = 'Greek entries range from G1 to G5624'


def is_valid_strongs_number(number):
    return bool(number) and bool(_VALID_PATTERN.match(number))


def get_strongs_language(number):
    """'hebrew' or 'greek', or None for a malformed number."""
    if not is_valid_strongs_number(number):
        return None
    return 'hebrew' if number.upper().startswith('H') else 'greek'


def format_strongs_number(number):
    """H1 -> H0001. None for a malformed number."""
    if not is_valid_strongs_number(number):
        return None
    return f"{number[0].upper()}{number[1:].zfill(4)}"


def normalize_strongs_number(number):
    """h0001 -> H1. Malformed input comes back upper-cased."""
    upper = (number or '').strip().upper()
    match = _NUMBER_PATTERN.match(upper)
    if not match:
        return upper
    prefix, digits = match.groups()
    return f"{prefix}{int(digits)}"


def is_lookup_key(number):
    """True for a normalized H####/G#### key."""
    return bool(_NUMBER_PATTERN.match(number or ''))


class StrongsLexicon:
    """Hebrew and Greek lexicons loaded from <data_dir>/hebrew.json and greek.json."""

    def __init__(self, data_dir=None):
        self.data_dir = data_dir or config.strongs_data_dir()
        self._lexicons = {}
        self._lock = threading.Lock()

    def _load(self, language):
        with self._lock:
            if language not in self._lexicons:
                path = os.path.join(self.data_dir, f'{language}.json')
                try:
                    with open(path, 'r', encoding='utf-8') as f:
                        self._lexicons[language] = json.load(f)
                    logger.info(f"Loaded {len(self._lexicons[language])} {language} lexicon entries")
                except FileNotFoundError:
                    logger.error(f"Strong's lexicon file not found: {path}")
                    self._lexicons[language] = {}
                except (OSError, json.JSONDecodeError) as e:
                    logger.error(f"Failed to load Strong's lexicon {path}: {e}")
                    self._lexicons[language] = {}
            return self._lexicons[language]

    def lookup(self, number):
        """Lexicon entry with display metadata, or None."""
        key = normalize_strongs_number(number)
        if not is_lookup_key(key):
            return None

        is_hebrew = key.startswith('H')
        entry = self._load('hebrew' if is_hebrew else 'greek').get(key)
        if not entry:
            return None

        result = {
            'number': format_strongs_number(key),
            'lemma': entry.get('word'),
            'language': 'Hebrew' if is_hebrew else 'Greek',
        }
        result.update(entry)
        return result


_lexicon = None


def get_lexicon():
    global _lexicon
    if _lexicon is None:
        _lexicon = StrongsLexicon()
    return _lexicon
