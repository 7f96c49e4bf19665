from sqlalchemy import Column, Integer

from app.models.base import RosterRecord


class Student(RosterRecord):
    __tablename__ = "student"

    roll_number = Column(Integer, nullable=False)
