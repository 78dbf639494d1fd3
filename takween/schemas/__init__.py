from .employee import RegisterRequest, LoginRequest, EmployeeBasic, EmployeeOut, Token, ApproveRequest, RoleUpdate, ProfileUpdate
from .department import DepartmentOut
from .task import TaskCreate, BulkTaskCreate, BulkTaskRow, TaskUpdate, TaskStatusUpdate, TaskOut, BoardOut, TaskRecordIn, CommentCreate, CommentOut, AttachmentIn, AttachmentOut, TaskSuggestionRequest, TaskSuggestion
from .project import ProjectStep, ProjectCreate, ProjectUpdate, ProjectOut, ProjectDetailOut
from .sprint import SprintCreate, SprintExtendRequest, SprintExtensionOut, SprintOut, SprintActionResult
from .kpi_rule import KpiRuleCreate, KpiRuleOut
from .leave import LeaveCreate, LeaveOut
from .attendance import AttendanceOut
from .activity import ActivityOut
