"""String enums mirroring the backend's database enums."""

from enum import StrEnum


class GoalType(StrEnum):
    FOUNDATION = "foundation"
    ACTION = "action"
    STRATEGY = "strategy"
    VISION = "vision"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return STORE_GOAL_TYPES.get(value.lower())
        return None

    @property
    def stored(self) -> str:
        """Spelling of this type in the store's ``goal_type`` enum."""
        return STORED_SPELLINGS.get(self, self.value)


# The store's goal_type enum keeps the original French spellings for two types
STORED_SPELLINGS: dict[GoalType, str] = {
    GoalType.FOUNDATION: "fondation",
    GoalType.STRATEGY: "strategie",
}
STORE_GOAL_TYPES: dict[str, GoalType] = {v: k for k, v in STORED_SPELLINGS.items()}


# Left-to-right column order on the goal canvas
GOAL_TYPE_ORDER: tuple[GoalType, ...] = (
    GoalType.FOUNDATION,
    GoalType.ACTION,
    GoalType.STRATEGY,
    GoalType.VISION,
)


class GoalStatus(StrEnum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    BLOCKED = "blocked"


class TaskStatus(StrEnum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TeamRole(StrEnum):
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


class AssignableType(StrEnum):
    ORGANIZATION = "organization"
    WORKSPACE = "workspace"
    GOAL = "goal"
    MILESTONE = "milestone"
    TASK = "task"

    @classmethod
    def _missing_(cls, value):
        if value == "organisation":
            return cls.ORGANIZATION
        return None


class ResourceType(StrEnum):
    FILE = "file"
    LINK = "link"
    DOCUMENT = "document"
    IMAGE = "image"
    VIDEO = "video"


class UpdateType(StrEnum):
    COMMENT = "comment"
    STATUS_CHANGE = "status_change"
    PROGRESS_UPDATE = "progress_update"
    MILESTONE = "milestone"
    ASSIGNMENT = "assignment"


class ConnectionStatus(StrEnum):
    ACTIVE = "active"
    BLOCKED = "blocked"
    COMPLETED = "completed"


class ConnectionStrength(StrEnum):
    STRONG = "strong"
    MEDIUM = "medium"
    WEAK = "weak"


class ChangeEvent(StrEnum):
    ALL = "*"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class TimeRange(StrEnum):
    WEEK = "1w"
    MONTH = "1m"
    QUARTER = "3m"
    HALF_YEAR = "6m"
    YEAR = "1y"


class TrendDirection(StrEnum):
    UP = "up"
    DOWN = "down"


class RiskSeverity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class OAuthProvider(StrEnum):
    GOOGLE = "google"
    GITHUB = "github"


class AnalysisType(StrEnum):
    TIMELINE = "timeline"
    RESOURCES = "resources"
    PERFORMANCE = "performance"
    RISKS = "risks"


class ReportFormat(StrEnum):
    PDF = "pdf"
    EXCEL = "excel"
    JSON = "json"


class AutomationTrigger(StrEnum):
    EVENT = "event"
    SCHEDULE = "schedule"
    CONDITION = "condition"


# Subscription statuses that count as a live plan
ACTIVE_SUBSCRIPTION_STATUSES: tuple[str, ...] = ("trialing", "active")
