from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from takween.database import Base, get_db
from takween.models import Department, Employee, EmployeeStatus, Role
from takween.utils.security import create_access_token, hash_password

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "secret123"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def departments(db):
    rows = [
        Department(id="arch", name="Architecture", color="#2563eb"),
        Department(id="interior", name="Interior Design", color="#ec4899"),
    ]
    db.add_all(rows)
    db.commit()
    return rows


@pytest.fixture
def make_employee(db):
    counter = {"n": 0}

    def _make(role=Role.EMPLOYEE, department_id="arch", kpi=70, status=EmployeeStatus.ACTIVE, name=None):
        counter["n"] += 1
        employee = Employee(
            name=name or f"Employee {counter['n']}",
            email=f"employee{counter['n']}@takween.com",
            hashed_password=hash_password(PASSWORD),
            role=role,
            department_id=department_id,
            kpi=kpi,
            joined_date=date(2024, 1, 1),
            status=status,
        )
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee

    return _make


@pytest.fixture
def admin(make_employee):
    return make_employee(role=Role.ADMIN, name="Admin", kpi=94)


@pytest.fixture
def manager(make_employee):
    return make_employee(role=Role.DEPT_MANAGER, name="Arch Manager", kpi=88)


@pytest.fixture
def employee(make_employee):
    return make_employee(role=Role.EMPLOYEE, name="Arch Engineer", kpi=72)


@pytest.fixture
def interior_manager(make_employee):
    return make_employee(role=Role.DEPT_MANAGER, department_id="interior", name="Interior Manager", kpi=81)


def auth_headers(employee):
    token = create_access_token(data={"sub": employee.email})
    return {"Authorization": f"Bearer {token}"}
