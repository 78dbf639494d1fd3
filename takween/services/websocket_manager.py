from fastapi import WebSocket
from typing import Dict, List, Optional, Set
import json
import logging
from datetime import datetime

logger = logging.getLogger(__name__)

class WebSocketManager:
    def __init__(self):
        # Active sockets by employee id; an employee may have several tabs open
        self.active_connections: Dict[int, Set[WebSocket]] = {}
        self.departments: Dict[int, str] = {}

    async def connect(self, websocket: WebSocket, employee_id: int, department_id: Optional[str] = None):
        """Register an accepted WebSocket for an employee"""
        # websocket.accept() is called in the endpoint, not here
        if employee_id not in self.active_connections:
            self.active_connections[employee_id] = set()

        self.active_connections[employee_id].add(websocket)
        if department_id:
            self.departments[employee_id] = department_id
        logger.info(f"Employee {employee_id} connected. Total connections: {len(self.active_connections[employee_id])}")

        await self.send_personal_message(
            {
                "type": "connection",
                "message": "Connected to notification service",
                "timestamp": datetime.now().isoformat()
            },
            websocket
        )

    def disconnect(self, websocket: WebSocket, employee_id: int):
        """Forget a WebSocket for an employee"""
        if employee_id in self.active_connections:
            self.active_connections[employee_id].discard(websocket)

            if not self.active_connections[employee_id]:
                del self.active_connections[employee_id]
                self.departments.pop(employee_id, None)

            logger.info(f"Employee {employee_id} disconnected. Remaining connections: {len(self.active_connections.get(employee_id, set()))}")

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """Send a message to one WebSocket connection"""
        await websocket.send_text(json.dumps(message, default=str))

    async def _send_to_employee(self, employee_id: int, message: dict):
        disconnected = set()
        for websocket in list(self.active_connections.get(employee_id, set())):
            try:
                await self.send_personal_message(message, websocket)
            except Exception as e:
                logger.error(f"Error sending to employee {employee_id}: {e}")
                disconnected.add(websocket)

        for websocket in disconnected:
            self.disconnect(websocket, employee_id)

    async def send_to_employee(self, employee_id: int, event_type: str, data: dict):
        """Send an event to every connection of one employee"""
        if employee_id not in self.active_connections:
            logger.info(f"Employee {employee_id} not connected, event {event_type} dropped")
            return

        await self._send_to_employee(employee_id, {
            "type": event_type,
            "data": data,
            "timestamp": datetime.now().isoformat()
        })

    async def send_to_department(self, department_id: str, event_type: str, data: dict):
        """Send an event to every connected employee of a department"""
        message = {
            "type": event_type,
            "data": data,
            "timestamp": datetime.now().isoformat()
        }
        for employee_id, employee_department in list(self.departments.items()):
            if employee_department == department_id:
                await self._send_to_employee(employee_id, message)

    async def broadcast_to_all(self, event_type: str, data: dict):
        """Broadcast an event to all connected employees"""
        message = {
            "type": event_type,
            "data": data,
            "timestamp": datetime.now().isoformat()
        }
        for employee_id in list(self.active_connections.keys()):
            await self._send_to_employee(employee_id, message)

    def get_connected_employees(self) -> List[int]:
        """Ids of currently connected employees"""
        return list(self.active_connections.keys())

    def get_total_connections(self) -> int:
        return sum(len(connections) for connections in self.active_connections.values())

# Global instance
websocket_manager = WebSocketManager()
