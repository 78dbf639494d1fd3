# takween/models/sprint.py
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Enum, Text
from sqlalchemy.orm import relationship
from takween.database import Base
import enum
from datetime import datetime

class SprintStatus(str, enum.Enum):
    PLANNED = "PLANNED"
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"

class Sprint(Base):
    __tablename__ = "sprints"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(Enum(SprintStatus), default=SprintStatus.PLANNED, nullable=False)
    project_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Append-only reschedule ledger
    extensions = relationship(
        "SprintExtension", back_populates="sprint", cascade="all, delete-orphan", order_by="SprintExtension.id"
    )

class SprintExtension(Base):
    __tablename__ = "sprint_extensions"

    id = Column(Integer, primary_key=True, index=True)
    sprint_id = Column(Integer, ForeignKey("sprints.id"), nullable=False)
    old_end_date = Column(Date, nullable=False)
    new_end_date = Column(Date, nullable=False)
    reason = Column(Text, nullable=False)
    extended_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    extended_by = Column(Integer, nullable=True)

    sprint = relationship("Sprint", back_populates="extensions")
