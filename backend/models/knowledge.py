from sqlalchemy import Column, String, Text
from core.database import BaseModel


class KnowledgeEntry(BaseModel):
    __tablename__ = "knowledge_base"

    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, index=True)
