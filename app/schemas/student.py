from typing import Any, List
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models import MAX_INTEGER, MIN_INTEGER


class StudentCreate(BaseModel):
    """Payload of POST /addstudent. Identifiers are assigned by the server."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    roll_number: int = Field(..., alias="rollNo", ge=MIN_INTEGER, le=MAX_INTEGER)
    class_name: str = Field(..., alias="class", min_length=1, max_length=50)

    @field_validator("roll_number", mode="before")
    @classmethod
    def reject_boolean_roll(cls, v: Any) -> Any:
        """true/false would otherwise be coerced to 1/0"""
        if isinstance(v, bool):
            raise ValueError("rollNo must be numeric")
        return v


class StudentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    roll_number: int
    class_name: str = Field(..., alias="class")


class RootResponse(BaseModel):
    """GET / wraps the student list in a greeting envelope"""
    model_config = ConfigDict(populate_by_name=True)

    message: str = "From Backend!!!"
    student_data: List[StudentResponse] = Field(..., alias="studentData")
