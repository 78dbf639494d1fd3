# takween/routers/auth.py
import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session

from takween.config.settings import Settings
from takween.database import get_db
from takween.models.employee import Employee, EmployeeStatus, Role
from takween.schemas.employee import RegisterRequest, LoginRequest, EmployeeOut, Token
from takween.services.activity_log import record_activity
from takween.utils.security import hash_password, verify_password, create_access_token

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/register", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Registration request: the account stays PENDING until a manager approves it"""
    existing = db.query(Employee).filter(Employee.email == request.email).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")

    employee = Employee(
        name=request.name,
        email=request.email,
        hashed_password=hash_password(request.password),
        role=Role.EMPLOYEE,
        department_id=Settings.DEFAULT_DEPARTMENT_ID,
        avatar=f"https://i.pravatar.cc/150?u={request.email}",
        kpi=0,
        joined_date=date.today(),
        status=EmployeeStatus.PENDING,
    )
    db.add(employee)
    db.flush()
    record_activity(db, employee, "registration requested", employee.email)
    db.commit()
    db.refresh(employee)

    logger.info(f"Registration request from {employee.email}")
    return employee

@router.post("/login", response_model=Token)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    employee = db.query(Employee).filter(Employee.email == request.email).first()
    if not employee or not verify_password(request.password, employee.hashed_password):
        raise HTTPException(status_code=400, detail="Invalid credentials")
    if employee.status != EmployeeStatus.ACTIVE:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account is pending approval")

    token = create_access_token(data={"sub": employee.email})
    return {
        "access_token": token,
        "token_type": "bearer",
        "user": employee,
    }
