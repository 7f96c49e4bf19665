import asyncio
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.logging import get_logger
from app.models import MAX_INTEGER, MIN_INTEGER, Teacher
from app.services.record_service import RecordService
from app.schemas.teacher import TeacherCreate, TeacherResponse
from app.schemas.responses import SuccessResponse

logger = get_logger(__name__)

router = APIRouter()


@router.get("/teacher", response_model=List[TeacherResponse])
async def list_teachers(db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    List all teachers ordered by id.
    """
    try:
        return await RecordService.list_records(db, Teacher)
    except SQLAlchemyError:
        logger.error("Error fetching teachers", exc_info=True)
        raise HTTPException(status_code=500, detail="Error fetching teachers")


@router.post("/addteacher", response_model=SuccessResponse[TeacherResponse])
async def create_teacher(
    teacher_in: TeacherCreate,
    db: AsyncSession = Depends(deps.get_db),
    lock: asyncio.Lock = Depends(deps.teacher_lock),
) -> Any:
    try:
        teacher = await RecordService.create_record(
            db,
            Teacher,
            lock,
            name=teacher_in.name,
            subject=teacher_in.subject,
            class_name=teacher_in.class_name,
        )
    except SQLAlchemyError:
        logger.error("Error inserting teacher data", exc_info=True)
        raise HTTPException(status_code=500, detail="Error inserting teacher data")

    return SuccessResponse(
        data=TeacherResponse.model_validate(teacher),
        message="Data inserted successfully",
    )


@router.delete("/teacher/{teacher_id}", response_model=SuccessResponse)
async def delete_teacher(
    teacher_id: int = Path(..., ge=MIN_INTEGER, le=MAX_INTEGER),
    db: AsyncSession = Depends(deps.get_db),
    lock: asyncio.Lock = Depends(deps.teacher_lock),
) -> Any:
    try:
        await RecordService.delete_and_renumber(db, Teacher, teacher_id, lock)
    except SQLAlchemyError:
        logger.error("Error deleting teacher", extra={"teacher_id": teacher_id})
        raise HTTPException(status_code=500, detail="Error deleting teacher")

    return SuccessResponse(data=None, message="Teacher deleted successfully")
