from sqlalchemy import Column, String

from app.models.base import RosterRecord


class Teacher(RosterRecord):
    __tablename__ = "teacher"

    subject = Column(String(100), nullable=False)
