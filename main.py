import json
import logging
from datetime import datetime

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from takween.config.settings import Settings
from takween.database import Base, SessionLocal, engine
from takween.models.employee import Employee, EmployeeStatus
from takween.routers import (
    activity, analytics, attendance, auth, dashboard, departments, employees, leaves,
    projects, settings, snapshot, sprints, task_store, tasks,
)
from takween.seed import seed_demo_data
from takween.services.scheduler import task_scheduler
from takween.services.websocket_manager import websocket_manager
from takween.utils.auth import verify_token

logging.basicConfig(
    level=Settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("takween")

app = FastAPI(title="Takween Workspace API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=Settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Route registration
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(employees.router, prefix="/employees", tags=["Employees"])
app.include_router(departments.router, prefix="/departments", tags=["Departments"])
app.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
app.include_router(projects.router, prefix="/projects", tags=["Projects"])
app.include_router(sprints.router, prefix="/sprints", tags=["Sprints"])
app.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
app.include_router(dashboard.router, tags=["Dashboard"])
app.include_router(settings.router, prefix="/settings", tags=["Settings"])
app.include_router(leaves.router, prefix="/leaves", tags=["Leave"])
app.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
app.include_router(activity.router, prefix="/activity", tags=["Activity"])
app.include_router(snapshot.router, prefix="/snapshot", tags=["Snapshot"])
app.include_router(task_store.router, prefix="/api", tags=["Task store"])

# Startup and shutdown events
@app.on_event("startup")
async def startup_event():
    logger.info("Starting Takween API...")
    Base.metadata.create_all(bind=engine)

    if Settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()

    if Settings.SCHEDULER_ENABLED:
        task_scheduler.start()

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down Takween API...")
    task_scheduler.stop()

# Root route
@app.get("/")
def read_root():
    return {"message": "Takween Workspace API"}

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/scheduler/status")
def get_scheduler_status():
    """Scheduler status and job information"""
    return task_scheduler.get_scheduler_status()

@app.post("/scheduler/trigger/expiring-sprints")
async def trigger_expiring_sprints_check():
    """Manually run the expiring sprint check"""
    try:
        count = await task_scheduler.check_expiring_sprints()
        return {"message": "Expiring sprint check triggered successfully", "found": count}
    except Exception as e:
        return {"error": f"Failed to trigger expiring sprint check: {str(e)}"}

@app.post("/scheduler/trigger/overdue")
async def trigger_overdue_check():
    """Manually run the overdue task check"""
    try:
        count = await task_scheduler.check_overdue_tasks()
        return {"message": "Overdue check triggered successfully", "found": count}
    except Exception as e:
        return {"error": f"Failed to trigger overdue check: {str(e)}"}

def _employee_for_token(token: str):
    payload = verify_token(token) if token else None
    if not payload or "sub" not in payload:
        return None
    db = SessionLocal()
    try:
        employee = db.query(Employee).filter(Employee.email == payload["sub"]).first()
        if employee is None or employee.status != EmployeeStatus.ACTIVE:
            return None
        return employee.id, employee.name, employee.department_id
    finally:
        db.close()

# WebSocket endpoint for notifications, authenticated with the bearer token
@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket, token: str = None):
    await websocket.accept()

    identity = await run_in_threadpool(_employee_for_token, token)
    if identity is None:
        logger.info("Rejected WebSocket connection without a valid token")
        await websocket.close(code=1008)
        return

    employee_id, employee_name, department_id = identity
    await websocket_manager.connect(websocket, employee_id, department_id)

    try:
        while True:
            data = await websocket.receive_text()
            try:
                received = json.loads(data)
            except json.JSONDecodeError:
                continue

            if received.get("type") == "ping":
                await websocket_manager.send_personal_message(
                    {"type": "pong", "timestamp": datetime.now().isoformat()},
                    websocket
                )
            elif received.get("type") == "get_users":
                await websocket_manager.send_personal_message(
                    {
                        "type": "users_list",
                        "users": websocket_manager.get_connected_employees(),
                        "total_count": websocket_manager.get_total_connections(),
                        "timestamp": datetime.now().isoformat()
                    },
                    websocket
                )
    except WebSocketDisconnect:
        websocket_manager.disconnect(websocket, employee_id)
        logger.info(f"WebSocket closed for {employee_name}")
