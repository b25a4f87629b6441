import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Dict, List, Optional

MESSAGE_TYPES = ("user", "bot", "system", "feedback")
CONFIDENCE_LEVELS = ("high", "medium", "low")

FOLLOW_UP_KINDS = ("feedback_prompt", "volunteer_offer", "off_topic_reminder", "urgent_warning")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Collision-resistant identifier for sessions, messages and questions."""
    return uuid.uuid4().hex


@dataclass
class UserContext:
    role: str = "unknown"
    issue_type: str = "unknown"
    urgency: str = "low"
    specific_details: List[str] = field(default_factory=list)
    conversation_history: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class Message:
    content: str
    type: str
    language: str
    timestamp: datetime = field(default_factory=utcnow)
    id: str = field(default_factory=new_id)
    question_id: Optional[str] = None
    confidence: Optional[str] = None
    is_helpful: Optional[bool] = None
    has_actions: bool = False
    suggested_actions: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.type not in MESSAGE_TYPES:
            raise ValueError(f"Unknown message type: {self.type}")
        if self.confidence is not None and self.confidence not in CONFIDENCE_LEVELS:
            raise ValueError(f"Unknown confidence level: {self.confidence}")

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


@dataclass
class ChatSession:
    start_time: datetime
    last_activity_time: datetime
    language: str = "en"
    id: str = field(default_factory=new_id)
    is_active: bool = True
    volunteer_connected: bool = False
    attempt_counts: Dict[str, int] = field(default_factory=dict)
    user_context: UserContext = field(default_factory=UserContext)
    unhelpful_feedback_count: int = 0

    @property
    def state(self) -> str:
        return "active" if self.is_active else "inactive"

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "state": self.state,
            "start_time": self.start_time.isoformat(),
            "last_activity_time": self.last_activity_time.isoformat(),
            "is_active": self.is_active,
            "volunteer_connected": self.volunteer_connected,
            "language": self.language,
            "attempt_counts": dict(self.attempt_counts),
            "user_context": self.user_context.to_dict(),
            "unhelpful_feedback_count": self.unhelpful_feedback_count,
        }


@dataclass
class AIResponse:
    content: str
    confidence: str
    is_housing_related: bool
    suggested_actions: List[str] = field(default_factory=list)
    requires_urgent_action: bool = False


@dataclass
class FollowUp:
    kind: str
    delay_seconds: float
    question_id: Optional[str] = None

    def __post_init__(self):
        if self.kind not in FOLLOW_UP_KINDS:
            raise ValueError(f"Unknown follow-up kind: {self.kind}")


@dataclass
class ScheduledFollowUp:
    due_at: datetime
    follow_up: FollowUp
