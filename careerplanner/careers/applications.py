import logging
from typing import List, Dict, Any

from careerplanner.careers.jobs import JobService
from careerplanner.careers.models import Application, NotFoundError
from careerplanner.careers.repositories import InMemoryApplicationRepository

logger = logging.getLogger(__name__)

APPLICATION_STATUSES = ("Applied", "Interviewing", "Offer", "Rejected", "Withdrawn")


class ApplicationService:
    def __init__(self, repo: InMemoryApplicationRepository, jobs: JobService):
        self.repo = repo
        self.jobs = jobs

    def apply(self, user_id: str, job_id: int) -> Application:
        """Applying twice to the same job returns the first application."""
        self.jobs.get_job(job_id)
        app = self.repo.get_or_create(user_id, job_id)
        logger.info("Application %s: user=%s job=%s status=%s", app.id, user_id, job_id, app.status)
        return app

    def has_applied(self, user_id: str, job_id: int) -> bool:
        return self.repo.find(user_id, job_id) is not None

    def update_status(self, application_id: int, status: str) -> Application:
        if status not in APPLICATION_STATUSES:
            raise ValueError(f"Unknown application status: {status!r}")
        app = self.repo.get(application_id)
        if app is None:
            raise NotFoundError(f"Application not found: {application_id}")
        app.status = status
        return app

    def list_with_jobs(self, user_id: str) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for app in self.repo.for_user(user_id):
            job = self.jobs.repo.get(app.job_id)
            if job is None:
                continue
            item = app.to_dict()
            item["job"] = job.to_dict()
            out.append(item)
        return out
