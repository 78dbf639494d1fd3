# takween/routers/settings.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from takween.database import get_db
from takween.models.employee import Employee
from takween.models.kpi_rule import KpiRule
from takween.schemas.employee import EmployeeOut, ProfileUpdate
from takween.schemas.kpi_rule import KpiRuleCreate, KpiRuleOut
from takween.utils.auth import get_current_user
from takween.utils.visibility import can_manage_kpi_rules

logger = logging.getLogger(__name__)

router = APIRouter()

def _require_rule_admin(current_user: Employee):
    if not can_manage_kpi_rules(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only admins can manage KPI rules")

@router.get("/kpi-rules", response_model=List[KpiRuleOut])
def list_kpi_rules(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return db.query(KpiRule).order_by(KpiRule.id).all()

@router.post("/kpi-rules", response_model=KpiRuleOut, status_code=status.HTTP_201_CREATED)
def create_kpi_rule(
    rule: KpiRuleCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    _require_rule_admin(current_user)

    db_rule = KpiRule(**rule.model_dump())
    db.add(db_rule)
    db.commit()
    db.refresh(db_rule)
    logger.info(f"KPI rule {db_rule.id} created by {current_user.id}")
    return db_rule

@router.delete("/kpi-rules/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_kpi_rule(
    rule_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    _require_rule_admin(current_user)
    rule = db.query(KpiRule).filter(KpiRule.id == rule_id).first()
    if not rule:
        raise HTTPException(status_code=404, detail="KPI rule not found")

    db.delete(rule)
    db.commit()

@router.patch("/profile", response_model=EmployeeOut)
def update_profile(
    update: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Name and avatar of the caller"""
    for field, value in update.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(current_user, field, value.strip() if field == "name" else value)

    db.commit()
    db.refresh(current_user)
    return current_user
