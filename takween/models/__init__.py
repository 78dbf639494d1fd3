from .employee import Employee, Role, EmployeeStatus
from .department import Department
from .task import Task, TaskComment, TaskAttachment, TaskStatus, TaskPriority, AttachmentType
from .project import Project, ProjectStatus
from .sprint import Sprint, SprintExtension, SprintStatus
from .kpi_rule import KpiRule
from .leave import LeaveRequest, LeaveType, LeaveStatus
from .attendance import AttendanceRecord, AttendanceStatus
from .activity import Activity
