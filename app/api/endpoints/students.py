import asyncio
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.logging import get_logger
from app.models import MAX_INTEGER, MIN_INTEGER, Student
from app.services.record_service import RecordService
from app.schemas.student import StudentCreate, StudentResponse, RootResponse
from app.schemas.responses import SuccessResponse

logger = get_logger(__name__)

router = APIRouter()


@router.get("/", response_model=RootResponse)
async def root(db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    Student list wrapped in the greeting envelope.
    """
    try:
        students = await RecordService.list_records(db, Student)
    except SQLAlchemyError:
        logger.error("Error fetching student data", exc_info=True)
        raise HTTPException(status_code=500, detail="Error fetching student data")

    return RootResponse(student_data=[StudentResponse.model_validate(s) for s in students])


@router.get("/student", response_model=List[StudentResponse])
async def list_students(db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    List all students ordered by id.
    """
    try:
        return await RecordService.list_records(db, Student)
    except SQLAlchemyError:
        logger.error("Error fetching students", exc_info=True)
        raise HTTPException(status_code=500, detail="Error fetching students")


@router.post("/addstudent", response_model=SuccessResponse[StudentResponse])
async def create_student(
    student_in: StudentCreate,
    db: AsyncSession = Depends(deps.get_db),
    lock: asyncio.Lock = Depends(deps.student_lock),
) -> Any:
    """
    Create a student with the next free id.
    """
    try:
        student = await RecordService.create_record(
            db,
            Student,
            lock,
            name=student_in.name,
            roll_number=student_in.roll_number,
            class_name=student_in.class_name,
        )
    except SQLAlchemyError:
        logger.error("Error inserting student data", exc_info=True)
        raise HTTPException(status_code=500, detail="Error inserting student data")

    return SuccessResponse(
        data=StudentResponse.model_validate(student),
        message="Data inserted successfully",
    )


@router.delete("/student/{student_id}", response_model=SuccessResponse)
async def delete_student(
    student_id: int = Path(..., ge=MIN_INTEGER, le=MAX_INTEGER),
    db: AsyncSession = Depends(deps.get_db),
    lock: asyncio.Lock = Depends(deps.student_lock),
) -> Any:
    """
    Delete a student and renumber the rest to 1..N.
    Deleting an unknown id still renumbers and succeeds.
    """
    try:
        await RecordService.delete_and_renumber(db, Student, student_id, lock)
    except SQLAlchemyError:
        logger.error("Error deleting student", extra={"student_id": student_id})
        raise HTTPException(status_code=500, detail="Error deleting student")

    return SuccessResponse(data=None, message="Student deleted successfully")
