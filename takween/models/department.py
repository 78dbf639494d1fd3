# takween/models/department.py
from sqlalchemy import Column, String, Float
from takween.database import Base

class Department(Base):
    __tablename__ = "departments"

    id = Column(String, primary_key=True, index=True)  # Short code, e.g. "arch"
    name = Column(String, nullable=False)
    color = Column(String, nullable=False, default="#64748b")
    kpi_target = Column(Float, nullable=True)
