import json
import os
import threading
from typing import List, Optional, Protocol, Dict, Any

from careerplanner.careers.models import User, Job, Application, ChatQuery, CompanyStats


def _read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_jobs(root: str) -> List[Job]:
    return [Job(**j) for j in _read_json(os.path.join(root, "jobs.json"))]


def load_company_stats(root: str) -> List[CompanyStats]:
    return [CompanyStats(**s) for s in _read_json(os.path.join(root, "company_stats.json"))]


class JobRepository(Protocol):
    def list_jobs(self) -> List[Job]:
        ...

    def get(self, job_id: int) -> Optional[Job]:
        ...

    def stats_for(self, company: str) -> Optional[CompanyStats]:
        ...

    def all_stats(self) -> List[CompanyStats]:
        ...


class StaticJobRepository:
    """Read-only postings bundled with the app."""

    def __init__(self, jobs: List[Job], stats: Optional[List[CompanyStats]] = None):
        self.jobs = list(jobs)
        self.stats: Dict[str, CompanyStats] = {s.company: s for s in (stats or [])}

    def list_jobs(self) -> List[Job]:
        return list(self.jobs)

    def get(self, job_id: int) -> Optional[Job]:
        for job in self.jobs:
            if job.id == job_id:
                return job
        return None

    def stats_for(self, company: str) -> Optional[CompanyStats]:
        return self.stats.get(company)

    def all_stats(self) -> List[CompanyStats]:
        return list(self.stats.values())


class InMemoryUserRepository:
    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()

    def add(self, user: User) -> User:
        with self._lock:
            self._users[user.id] = user
        return user

    def get(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def save(self, user: User) -> User:
        return self.add(user)


class InMemoryApplicationRepository:
    def __init__(self):
        self._apps: List[Application] = []
        self._lock = threading.Lock()

    def find(self, user_id: str, job_id: int) -> Optional[Application]:
        for app in self._apps:
            if app.user_id == user_id and app.job_id == job_id:
                return app
        return None

    def get(self, application_id: int) -> Optional[Application]:
        for app in self._apps:
            if app.id == application_id:
                return app
        return None

    def for_user(self, user_id: str) -> List[Application]:
        return [a for a in self._apps if a.user_id == user_id]

    def get_or_create(self, user_id: str, job_id: int) -> Application:
        with self._lock:
            existing = self.find(user_id, job_id)
            if existing is not None:
                return existing
            app = Application(id=len(self._apps) + 1, user_id=user_id, job_id=job_id)
            self._apps.append(app)
            return app


class InMemoryChatRepository:
    def __init__(self):
        self._queries: List[ChatQuery] = []
        self._lock = threading.Lock()

    def count_for(self, user_id: str) -> int:
        return sum(1 for q in self._queries if q.user_id == user_id)

    def for_user(self, user_id: str) -> List[ChatQuery]:
        return [q for q in self._queries if q.user_id == user_id]

    def add_if_under(self, user_id: str, query: str, response: str, limit: int) -> Optional[ChatQuery]:
        """Count and insert under one lock; returns None once the user already has `limit` queries."""
        with self._lock:
            if self.count_for(user_id) >= limit:
                return None
            q = ChatQuery(id=len(self._queries) + 1, user_id=user_id, query=query, response=response)
            self._queries.append(q)
            return q
