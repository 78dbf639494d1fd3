# takween/models/kpi_rule.py
from sqlalchemy import Column, Integer, String, Float
from takween.database import Base

class KpiRule(Base):
    """Template used to pre-fill task creation fields"""
    __tablename__ = "kpi_rules"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    category = Column(String, nullable=False, default="General")
    default_points = Column(Integer, nullable=False, default=20)
    default_hours = Column(Float, nullable=False, default=2)
