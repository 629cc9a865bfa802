# utils/game.py
import json
import random
import logging
from functools import lru_cache

import config

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def load_questions(path=None):
    """Question bank from the questions JSON file ({"questions": [...]})."""
    path = path or config.questions_file()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load game questions from {path}: {e}")
        return ()
    return tuple(data.get('questions', []))


def pick_question(questions, mode=None, difficulty=None, rng=random):
    """Random question matching mode and difficulty (either may be None)."""
    filtered = [
        q for q in questions
        if (mode is None or q.get('mode') == mode)
        and (difficulty is None or q.get('difficulty') == difficulty)
    ]
    if not filtered:
        return None

    question = rng.choice(filtered)
    return {
        'id': question['id'],
        'mode': question['mode'],
        'difficulty': question['difficulty'],
        'verseReference': question['verseReference'],
        'questionText': question['questionText'],
        'correctAnswer': question['correctAnswer'],
        'incorrectAnswers': question['incorrectAnswers'],
        'strongsNumber': question.get('strongsNumber'),
        'explanation': question.get('explanation'),
    }
