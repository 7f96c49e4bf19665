"""API Dependencies"""

import asyncio

from fastapi import Depends

from app.database import Database, get_database, get_db
from app.models import Student, Teacher

__all__ = ["get_db", "get_database", "student_lock", "teacher_lock"]


def student_lock(database: Database = Depends(get_database)) -> asyncio.Lock:
    """Writer lock of the student table"""
    return database.lock_for(Student.__tablename__)


def teacher_lock(database: Database = Depends(get_database)) -> asyncio.Lock:
    """Writer lock of the teacher table"""
    return database.lock_for(Teacher.__tablename__)
