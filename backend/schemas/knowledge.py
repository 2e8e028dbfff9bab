from pydantic import Field
from typing import Optional
from uuid import UUID

from schemas.response import CamelModel, AwareDatetime


class KnowledgeCreate(CamelModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)


class KnowledgeUpdate(CamelModel):
    question: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1, max_length=100)


class KnowledgeResponse(CamelModel):
    id: UUID
    question: str
    answer: str
    category: str
    created_at: Optional[AwareDatetime] = None
    updated_at: Optional[AwareDatetime] = None
