from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.dependencies import require_admin
from core.utils.response import Response
from schemas.knowledge import KnowledgeCreate, KnowledgeUpdate, KnowledgeResponse
from services.knowledge import KnowledgeService

# Every knowledge-base operation is admin only
router = APIRouter(prefix="/knowledge", tags=["Knowledge Base"], dependencies=[Depends(require_admin)])


@router.get("")
async def list_entries(db: AsyncSession = Depends(get_db)):
    entries = await KnowledgeService(db).list_entries()
    return Response.collection("entries", [KnowledgeResponse.model_validate(e) for e in entries])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_entry(entry_data: KnowledgeCreate, db: AsyncSession = Depends(get_db)):
    entry = await KnowledgeService(db).create_entry(entry_data)
    return Response.success(
        data=KnowledgeResponse.model_validate(entry),
        message="Knowledge entry created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/{entry_id}")
async def update_entry(entry_id: UUID, entry_data: KnowledgeUpdate, db: AsyncSession = Depends(get_db)):
    entry = await KnowledgeService(db).update_entry(entry_id, entry_data)
    return Response.success(data=KnowledgeResponse.model_validate(entry), message="Knowledge entry updated successfully")


@router.delete("/{entry_id}")
async def delete_entry(entry_id: UUID, db: AsyncSession = Depends(get_db)):
    await KnowledgeService(db).delete_entry(entry_id)
    return Response.success(message="Knowledge entry deleted successfully")
