from typing import List, Optional

from careerplanner.careers.models import Job, CompanyStats, NotFoundError
from careerplanner.careers.repositories import JobRepository

# title keywords that mark a posting as suitable for secondary school students
ENTRY_LEVEL_KEYWORDS = ("intern", "junior")


class JobService:
    def __init__(self, repo: JobRepository):
        self.repo = repo

    def list_jobs(self, user_type: Optional[str] = None,
                  discipline: Optional[str] = None) -> List[Job]:
        jobs = self.repo.list_jobs()
        if user_type == "high_school":
            return [j for j in jobs if self._is_entry_level(j)]
        if user_type == "uni_postgrad" and discipline:
            return [j for j in jobs if j.discipline == discipline]
        return jobs

    @staticmethod
    def _is_entry_level(job: Job) -> bool:
        title = job.title.lower()
        return any(k in title for k in ENTRY_LEVEL_KEYWORDS) or job.discipline == "Education"

    def search_jobs(self, term: str, user_type: Optional[str] = None,
                    discipline: Optional[str] = None) -> List[Job]:
        jobs = self.list_jobs(user_type, discipline)
        needle = (term or "").strip().lower()
        if not needle:
            return jobs
        return [
            j for j in jobs
            if needle in j.title.lower()
            or needle in j.company.lower()
            or needle in j.description.lower()
        ]

    def get_job(self, job_id: int) -> Job:
        job = self.repo.get(job_id)
        if job is None:
            raise NotFoundError(f"Job not found: {job_id}")
        return job

    def company_stats(self, company: str) -> Optional[CompanyStats]:
        return self.repo.stats_for(company)

    def all_company_stats(self) -> List[CompanyStats]:
        return self.repo.all_stats()
