"""API Router"""

from fastapi import APIRouter

# Import endpoint routers
from app.api.endpoints import students, teachers

# Create API router
api_router = APIRouter()

# Resource paths (/student, /addstudent, ...) live at the router root
api_router.include_router(students.router, tags=["Student Management"])
api_router.include_router(teachers.router, tags=["Teacher Management"])
