# takween/models/task.py
from sqlalchemy import Column, Integer, String, Float, DateTime, Date, ForeignKey, Enum, Text
from sqlalchemy.orm import relationship
from takween.database import Base
import enum
from datetime import datetime

class TaskStatus(str, enum.Enum):
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    REVIEW = "REVIEW"
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"

class TaskPriority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

class AttachmentType(str, enum.Enum):
    AUTOCAD = "autocad"
    MAX3D = "3dmax"
    IMAGE = "image"
    VIDEO = "video"
    PDF = "pdf"
    OTHER = "other"

class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")

    # Plain references, dangling ids are rendered as blanks
    assigned_to = Column(Integer, nullable=True, index=True)
    department_id = Column(String, nullable=True, index=True)
    project_id = Column(Integer, nullable=True, index=True)

    status = Column(Enum(TaskStatus), default=TaskStatus.NEW, nullable=False)
    priority = Column(Enum(TaskPriority), default=TaskPriority.MEDIUM, nullable=False)
    due_date = Column(Date, nullable=True)

    estimated_hours = Column(Float, default=0, nullable=False)
    actual_hours = Column(Float, default=0, nullable=False)
    kpi_points = Column(Integer, default=0, nullable=False)
    weight = Column(Integer, default=10, nullable=False)  # Percentage contribution to the project

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    comments = relationship(
        "TaskComment", back_populates="task", cascade="all, delete-orphan", order_by="TaskComment.id"
    )
    attachments = relationship(
        "TaskAttachment", back_populates="task", cascade="all, delete-orphan", order_by="TaskAttachment.id"
    )

class TaskComment(Base):
    __tablename__ = "task_comments"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=False)
    author_id = Column(Integer, nullable=True)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    task = relationship("Task", back_populates="comments")

class TaskAttachment(Base):
    __tablename__ = "task_attachments"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=False)
    name = Column(String(255), nullable=False)
    url = Column(String(1000), nullable=False)
    type = Column(Enum(AttachmentType), default=AttachmentType.OTHER, nullable=False)
    uploaded_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    task = relationship("Task", back_populates="attachments")
