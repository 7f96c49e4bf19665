from pydantic import BaseModel, ConfigDict, Field


class TeacherCreate(BaseModel):
    """Payload of POST /addteacher"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=100)
    class_name: str = Field(..., alias="class", min_length=1, max_length=50)


class TeacherResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    subject: str
    class_name: str = Field(..., alias="class")
