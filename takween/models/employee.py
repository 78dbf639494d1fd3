# takween/models/employee.py
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, Enum
from takween.database import Base
import enum
from datetime import date, datetime

class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    DEPT_MANAGER = "DEPT_MANAGER"
    TEAM_LEADER = "TEAM_LEADER"
    EMPLOYEE = "EMPLOYEE"

class EmployeeStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"

class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=True)  # Registration requests may arrive without one
    role = Column(Enum(Role), default=Role.EMPLOYEE, nullable=False)
    department_id = Column(String, nullable=False, index=True)  # No FK: dangling departments are tolerated
    avatar = Column(String, nullable=True)
    kpi = Column(Float, default=0, nullable=False)  # 0-100
    kpi_target = Column(Float, nullable=True)
    joined_date = Column(Date, default=date.today, nullable=False)
    status = Column(Enum(EmployeeStatus), default=EmployeeStatus.PENDING, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
