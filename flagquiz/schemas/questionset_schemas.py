# flagquiz/schemas/questionset_schemas.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Los campos se exponen en camelCase (promptId, correctIndex, ...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuestionOut(CamelModel):
    prompt_id: str = Field(..., examples=["FR"])
    image_url: str = Field(..., examples=["https://flagcdn.com/w320/fr.png"])
    choices: List[str] = Field(..., examples=[["Italy", "France", "Chad", "Romania"]])
    correct_index: int = Field(..., ge=0, le=3, examples=[1])


class QuestionSetResponse(CamelModel):
    mode: str
    category: str
    total_planned: int
    total_available: int
    total_used: int
    questions: List[QuestionOut]
    generated_at: Optional[int] = Field(None, description="Epoch en milisegundos")


class ReloadResponse(CamelModel):
    status: str
    count: int
    loaded_at: Optional[str] = None
