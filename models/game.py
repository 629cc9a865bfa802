from enum import Enum


class GameMode(str, Enum):
    VERSE_DETECTIVE = "verse_detective"
    CONTEXT_CLUES = "context_clues"
    WORD_CONNECTIONS = "word_connections"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


VALID_MODES = {mode.value for mode in GameMode}
VALID_DIFFICULTIES = {difficulty.value for difficulty in Difficulty}
