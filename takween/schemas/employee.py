# takween/schemas/employee.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import date

from takween.models.employee import Role, EmployeeStatus

class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class EmployeeBasic(BaseModel):
    id: int
    name: str
    role: Role
    department_id: str
    avatar: Optional[str] = None

    model_config = {
        "from_attributes": True
    }

class EmployeeOut(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    department_id: str
    avatar: Optional[str] = None
    kpi: float
    kpi_target: Optional[float] = None
    joined_date: date
    status: EmployeeStatus

    model_config = {
        "from_attributes": True
    }

class Token(BaseModel):
    access_token: str
    token_type: str
    user: EmployeeOut

class ApproveRequest(BaseModel):
    role: Role
    department_id: str

class RoleUpdate(BaseModel):
    role: Role

class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    avatar: Optional[str] = None
