"""Base Models and Mixins for roster tables"""

from sqlalchemy import Column, Integer, String

from app.database import Base

# Range of the INTEGER columns on every backend (PostgreSQL INTEGER is 32-bit)
MIN_INTEGER = -(2 ** 31)
MAX_INTEGER = 2 ** 31 - 1


class RosterRecord(Base):
    """
    Base model class for roster tables.

    Provides:
    - integer primary key assigned by the record service, never by the database
    - name
    - class (exposed as class_name, since class is reserved in Python)

    Identifiers within a table always form the dense sequence 1..N.
    """
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)
    class_name = Column("class", String(50), nullable=False)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} name={self.name!r}>"
