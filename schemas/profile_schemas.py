from pydantic import BaseModel, Field
from typing import Optional

from models.bible import Translation
from models.game import GameMode


class ProfileUpdate(BaseModel):
    display_name: Optional[str] = Field(None, max_length=100)
    preferred_translation: Optional[Translation] = None


class GameProgressUpdate(BaseModel):
    mode: GameMode
    questions_answered: Optional[int] = Field(None, ge=0)
    correct_answers: Optional[int] = Field(None, ge=0)
    current_streak: Optional[int] = Field(None, ge=0)
    best_streak: Optional[int] = Field(None, ge=0)
