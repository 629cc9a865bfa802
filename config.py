# config.py
import os
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent


class Config:
    DATA_DIR = os.path.join(BASE_DIR, 'data')

    # Upstream text providers
    ESV_API_URL = 'https://api.esv.org/v3/passage/text/'
    BIBLE_API_URL = 'https://api.scripture.api.bible/v1'
    BSB_API_URL = 'https://bible.helloao.org/api/BSB'

    # api.bible ids per translation; extend with the BIBLE_API_IDS env var
    DEFAULT_BIBLE_API_IDS = {
        'NIV': '78a9f6124f344018-01',
    }

    DEFAULT_ANTHROPIC_MODEL = 'claude-sonnet-4-20250514'

    # (limit, window in seconds) per endpoint group
    RATE_LIMITS = {
        'sermon': (10, 60),
        'verse': (60, 60),
        'strongs': (100, 60),
        'interlinear': (60, 60),
        'bible': (60, 60),
        'game': (30, 60),
    }


# Environment lookups happen at call time so a missing key is reported per
# request instead of failing at import.

def esv_api_key():
    return os.getenv('ESV_API_KEY')


def bible_api_key():
    return os.getenv('BIBLE_API_KEY')


def bible_api_ids():
    """Translation -> api.bible id, env overrides merged over the defaults."""
    ids = dict(Config.DEFAULT_BIBLE_API_IDS)
    raw = os.getenv('BIBLE_API_IDS')
    if not raw:
        return ids
    try:
        overrides = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring malformed BIBLE_API_IDS: {e}")
        return ids
    if not isinstance(overrides, dict):
        logger.warning("Ignoring BIBLE_API_IDS: expected a JSON object")
        return ids
    ids.update({str(k).upper(): str(v) for k, v in overrides.items() if v})
    return ids


def upstream_timeout():
    """Seconds to wait on an upstream provider, or None for no limit."""
    raw = os.getenv('UPSTREAM_TIMEOUT')
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric UPSTREAM_TIMEOUT: {raw!r}")
        return None


def anthropic_api_key():
    return os.getenv('ANTHROPIC_API_KEY')


def anthropic_model():
    return os.getenv('ANTHROPIC_MODEL', Config.DEFAULT_ANTHROPIC_MODEL)


def strongs_data_dir():
    return os.getenv('STRONGS_DATA_DIR', os.path.join(Config.DATA_DIR, 'strongs'))


def interlinear_data_dir():
    return os.getenv('INTERLINEAR_DATA_DIR', os.path.join(Config.DATA_DIR, 'bsb'))


def questions_file():
    return os.getenv('QUESTIONS_FILE', os.path.join(Config.DATA_DIR, 'questions.json'))
