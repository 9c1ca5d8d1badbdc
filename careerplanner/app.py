import logging
import traceback
from typing import List, Dict, Any, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from careerplanner.config import Settings
from careerplanner.core.engine import ProgramMatcher
from careerplanner.core.models import IncompleteScoresError, InvalidScoresError
from careerplanner.core.repositories import JsonProgramRepository
from careerplanner.core.rule_factory import RuleFactory

# ---------- DSE ----------
from careerplanner.exams.dse.loaders import (
    load_subjects as dse_load_subjects,
    load_policy as dse_load_policy,
    load_universities as dse_load_universities,
)
from careerplanner.exams.dse.policy import DsePolicy

# ---------- Careers ----------
from careerplanner.careers.applications import ApplicationService
from careerplanner.careers.chat import ChatAssistant
from careerplanner.careers.jobs import JobService
from careerplanner.careers.models import NotFoundError
from careerplanner.careers.repositories import (
    StaticJobRepository,
    InMemoryUserRepository,
    InMemoryApplicationRepository,
    InMemoryChatRepository,
    load_jobs,
    load_company_stats,
)
from careerplanner.careers.users import UserService

logger = logging.getLogger(__name__)


# --------- Request models ----------
class ComputeRequest(BaseModel):
    scores: Dict[str, Optional[str]]
    electives: Optional[List[str]] = None
    top_unqualified: Optional[int] = Field(default=None, ge=0)


class CreateUserRequest(BaseModel):
    email: str
    user_type: str
    dse_scores: Optional[Dict[str, str]] = None
    electives: Optional[List[str]] = None
    discipline: Optional[str] = None


class UpdateUserRequest(BaseModel):
    user_type: Optional[str] = None
    dse_scores: Optional[Dict[str, str]] = None
    electives: Optional[List[str]] = None
    discipline: Optional[str] = None


class ApplyRequest(BaseModel):
    user_id: str
    job_id: int


class StatusRequest(BaseModel):
    status: str


class ChatRequest(BaseModel):
    user_id: str
    query: str = Field(min_length=1)


def _unprocessable(e: ValueError) -> HTTPException:
    return HTTPException(status_code=422, detail=str(e))


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    # Load DSE resources once; the catalog is read-only afterwards
    policy = DsePolicy(dse_load_policy(settings.dse_dir), dse_load_subjects(settings.dse_dir))
    repo = JsonProgramRepository(dse_load_universities(settings.dse_dir), RuleFactory())
    matcher = ProgramMatcher(repo=repo, policy=policy)
    logger.info("Loaded %d programs from %s", len(repo.list_programs()), settings.dse_dir)

    jobs = JobService(StaticJobRepository(load_jobs(settings.data_dir), load_company_stats(settings.data_dir)))
    users = UserService(InMemoryUserRepository(), policy)
    applications = ApplicationService(InMemoryApplicationRepository(), jobs)
    chat = ChatAssistant(InMemoryChatRepository(), settings)

    app = FastAPI(title="Student Career Planner")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def run_matcher(raw_scores, electives, top_unqualified=None) -> List[Dict[str, Any]]:
        scores = policy.build_scores(raw_scores, electives)
        results = matcher.evaluate_student(scores)
        out: List[Dict[str, Any]] = []
        unqualified_seen = 0
        for r in results:
            if not r.qualified:
                if top_unqualified is not None and unqualified_seen >= top_unqualified:
                    continue
                unqualified_seen += 1
            out.append(r.to_dict())
        return out

    # --------- Endpoints ----------
    @app.get("/")
    def root() -> Dict[str, Any]:
        return {"name": "Student Career Planner", "user_types": ["high_school", "uni_postgrad"]}

    @app.get("/subjects")
    def subjects() -> Dict[str, Any]:
        return {
            "grades": list(policy.subjects_catalog.get("grades", [])),
            "core": policy.core_subjects,
            "electives": policy.electives,
        }

    @app.get("/programs")
    def programs() -> List[Dict[str, Any]]:
        # Only the fields a program list needs
        return [
            {
                "university": p.university,
                "abbreviation": p.abbreviation,
                "code": p.code,
                "name": p.name,
                "min_score": p.min_score,
            }
            for p in repo.list_programs()
        ]

    @app.post("/compute")
    def compute(req: ComputeRequest):
        try:
            return run_matcher(req.scores, req.electives, req.top_unqualified)
        except (IncompleteScoresError, InvalidScoresError) as e:
            raise _unprocessable(e)
        except Exception as e:
            logger.error("Compute failed: %s\n%s", e, traceback.format_exc())
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Compute failed", "details": str(e)}
            )

    # --------- Profiles ----------
    @app.post("/users", status_code=status.HTTP_201_CREATED)
    def create_user(req: CreateUserRequest) -> Dict[str, Any]:
        try:
            user = users.create_user(req.email, req.user_type, req.dse_scores, req.electives, req.discipline)
        except ValueError as e:
            raise _unprocessable(e)
        return user.to_dict()

    @app.get("/users/{user_id}")
    def get_user(user_id: str) -> Dict[str, Any]:
        try:
            return users.get_user(user_id).to_dict()
        except NotFoundError as e:
            raise _not_found(e)

    @app.patch("/users/{user_id}")
    def update_user(user_id: str, req: UpdateUserRequest) -> Dict[str, Any]:
        try:
            return users.update_user(user_id, req.model_dump(exclude_unset=True)).to_dict()
        except NotFoundError as e:
            raise _not_found(e)
        except ValueError as e:
            raise _unprocessable(e)

    @app.get("/users/{user_id}/matches")
    def user_matches(user_id: str, top_unqualified: Optional[int] = Query(None, ge=0)):
        try:
            user = users.get_user(user_id)
        except NotFoundError as e:
            raise _not_found(e)
        if not user.dse_scores:
            raise HTTPException(status_code=422,
                                detail="Missing required subject scores")
        try:
            return run_matcher(user.dse_scores, None, top_unqualified)
        except ValueError as e:
            raise _unprocessable(e)

    # --------- Jobs ----------
    @app.get("/jobs")
    def list_jobs(user_type: Optional[str] = Query(None),
                  discipline: Optional[str] = Query(None),
                  q: Optional[str] = Query(None)) -> List[Dict[str, Any]]:
        return [j.to_dict() for j in jobs.search_jobs(q or "", user_type, discipline)]

    @app.get("/jobs/{job_id}")
    def get_job(job_id: int, user_id: Optional[str] = Query(None)) -> Dict[str, Any]:
        try:
            job = jobs.get_job(job_id)
        except NotFoundError as e:
            raise _not_found(e)
        item = job.to_dict()
        stats = jobs.company_stats(job.company)
        item["company_stats"] = stats.to_dict() if stats else None
        if user_id is not None:
            item["has_applied"] = applications.has_applied(user_id, job_id)
        return item

    @app.get("/companies/stats")
    def company_stats() -> List[Dict[str, Any]]:
        return [s.to_dict() for s in jobs.all_company_stats()]

    # --------- Applications ----------
    @app.post("/applications", status_code=status.HTTP_201_CREATED)
    def apply(req: ApplyRequest) -> Dict[str, Any]:
        try:
            users.get_user(req.user_id)
            return applications.apply(req.user_id, req.job_id).to_dict()
        except NotFoundError as e:
            raise _not_found(e)

    @app.get("/users/{user_id}/applications")
    def user_applications(user_id: str) -> List[Dict[str, Any]]:
        return applications.list_with_jobs(user_id)

    @app.patch("/applications/{application_id}")
    def update_application(application_id: int, req: StatusRequest) -> Dict[str, Any]:
        try:
            return applications.update_status(application_id, req.status).to_dict()
        except NotFoundError as e:
            raise _not_found(e)
        except ValueError as e:
            raise _unprocessable(e)

    # --------- Chat ----------
    @app.post("/chat")
    def ask(req: ChatRequest) -> Dict[str, Any]:
        try:
            user = users.get_user(req.user_id)
        except NotFoundError as e:
            raise _not_found(e)
        return chat.submit_query(user.id, user.user_type, req.query)

    @app.get("/users/{user_id}/chat")
    def chat_history(user_id: str, limit: Optional[int] = Query(None, ge=0)) -> List[Dict[str, Any]]:
        return [q.to_dict() for q in chat.history(user_id, limit)]

    return app


settings = Settings.from_env()
logging.basicConfig(level=settings.log_level,
                    format="[%(asctime)s] %(levelname)s [%(name)s]: %(message)s")
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run("careerplanner.app:app", host="0.0.0.0", port=settings.port, reload=True)
