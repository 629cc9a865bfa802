from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Literal, Optional

REFLECTION_CATEGORIES = ('observation', 'interpretation', 'application')


class OutlinePoint(BaseModel):
    heading: str
    subPoints: List[str] = Field(default_factory=list)


class GeneratedOutline(BaseModel):
    """Shape the model is asked to return for a sermon outline."""
    mainPoints: List[OutlinePoint]
    keyThemes: List[str] = Field(default_factory=list)
    crossReferences: List[str] = Field(default_factory=list)


class ReflectionQuestion(BaseModel):
    question: str
    category: Literal['observation', 'interpretation', 'application'] = 'observation'

    @field_validator('category', mode='before')
    @classmethod
    def default_unknown_category(cls, value):
        # Models occasionally invent categories; file those under observation
        return value if value in REFLECTION_CATEGORIES else 'observation'


class SermonRequest(BaseModel):
    passage: str = Field(..., min_length=1)
    title: Optional[str] = None

    @field_validator('passage')
    @classmethod
    def passage_not_blank(cls, value):
        if not value.strip():
            raise ValueError('passage must not be blank')
        return value


class ReflectionRequest(BaseModel):
    passage: str = Field(..., min_length=1)
    count: int = Field(5, ge=1, le=20)

    @field_validator('passage')
    @classmethod
    def passage_not_blank(cls, value):
        if not value.strip():
            raise ValueError('passage must not be blank')
        return value


class SermonNoteCreate(BaseModel):
    passage_reference: str = Field(..., min_length=1)
    sermon_title: Optional[str] = None
    sermon_date: Optional[str] = None
    generated_outline: Optional[Any] = None
    user_notes: Optional[str] = None
    reflection_answers: Optional[Any] = None


class SermonNoteUpdate(BaseModel):
    id: str = Field(..., min_length=1)
    sermon_title: Optional[str] = None
    sermon_date: Optional[str] = None
    generated_outline: Optional[Any] = None
    user_notes: Optional[str] = None
    reflection_answers: Optional[Any] = None
