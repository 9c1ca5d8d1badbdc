from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Optional, Dict, Any

USER_TYPES = ("high_school", "uni_postgrad")
DISCIPLINES = ("Tech", "Business", "Arts", "Science", "Education", "General")


class NotFoundError(LookupError):
    pass


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class User:
    id: str
    email: str
    user_type: str
    dse_scores: Optional[Dict[str, str]] = None
    discipline: Optional[str] = None
    created_at: str = field(default_factory=utcnow_iso)
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Job:
    id: int
    title: str
    company: str
    description: str
    discipline: str
    location: Optional[str] = None
    job_type: Optional[str] = None
    category: Optional[str] = None
    salary: Optional[str] = None
    source: Optional[str] = None
    url: Optional[str] = None
    scam_score: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Application:
    id: int
    user_id: str
    job_id: int
    status: str = "Applied"
    applied_at: str = field(default_factory=utcnow_iso)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ChatQuery:
    id: int
    user_id: str
    query: str
    response: str
    created_at: str = field(default_factory=utcnow_iso)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CompanyStats:
    company: str
    response_rate: float
    avg_response_time: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
