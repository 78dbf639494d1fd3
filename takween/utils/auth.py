# takween/utils/auth.py
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from takween.config.settings import Settings
from takween.database import get_db
from takween.models.employee import Employee, EmployeeStatus
from takween.utils.visibility import can_access_section

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Employee:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    payload = verify_token(token)
    if payload is None or payload.get("sub") is None:
        raise credentials_exception

    user = db.query(Employee).filter(Employee.email == payload["sub"]).first()
    if user is None:
        raise credentials_exception

    # Registration requests stay locked until approved
    if user.status != EmployeeStatus.ACTIVE:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is pending approval",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user

def verify_token(token: str) -> Optional[dict]:
    """Decode a JWT and return its payload, None when invalid"""
    try:
        return jwt.decode(token, Settings.SECRET_KEY, algorithms=[Settings.ALGORITHM])
    except JWTError:
        return None

def require_section(section: str):
    """Dependency factory closing a dashboard section to the roles that may not open it"""
    def dependency(current_user: Employee = Depends(get_current_user)) -> Employee:
        if not can_access_section(current_user.role, section):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Your role cannot access the {section} section",
            )
        return current_user
    return dependency
