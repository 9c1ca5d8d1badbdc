import logging
import uuid
from typing import Optional, Dict, List, Any

from careerplanner.careers.models import User, USER_TYPES, DISCIPLINES, NotFoundError, utcnow_iso
from careerplanner.careers.repositories import InMemoryUserRepository
from careerplanner.core.models import InvalidScoresError
from careerplanner.exams.dse.policy import DsePolicy

logger = logging.getLogger(__name__)


class UserService:
    """
    Onboarding and profile updates.
    High-school users may carry DSE scores (validated as a complete set when present);
    university/postgraduate users must pick a discipline.
    """

    def __init__(self, repo: InMemoryUserRepository, policy: DsePolicy):
        self.repo = repo
        self.policy = policy

    def _check_type(self, user_type: str) -> None:
        if user_type not in USER_TYPES:
            raise ValueError(f"Unknown user type: {user_type!r}")

    def _check_discipline(self, discipline: Optional[str]) -> None:
        if discipline is not None and discipline not in DISCIPLINES:
            raise ValueError(f"Unknown discipline: {discipline!r}")

    def _normalise_scores(self, dse_scores: Optional[Dict[str, str]],
                          electives: Optional[List[str]]) -> Optional[Dict[str, str]]:
        if not dse_scores:
            return None
        # raises IncompleteScoresError / InvalidScoresError
        return self.policy.build_scores(dse_scores, electives).as_dict()

    def _check_profile(self, user_type: str, discipline: Optional[str],
                       dse_scores: Optional[Dict[str, str]]) -> None:
        self._check_type(user_type)
        self._check_discipline(discipline)
        if user_type == "uni_postgrad" and not discipline:
            raise ValueError("Please select a discipline")
        if user_type == "uni_postgrad" and dse_scores:
            raise InvalidScoresError("DSE scores are only stored for high school users")

    def create_user(self, email: str, user_type: str,
                    dse_scores: Optional[Dict[str, str]] = None,
                    electives: Optional[List[str]] = None,
                    discipline: Optional[str] = None) -> User:
        self._check_profile(user_type, discipline, dse_scores)

        user = User(
            id=f"user-{uuid.uuid4().hex[:12]}",
            email=email,
            user_type=user_type,
            dse_scores=self._normalise_scores(dse_scores, electives),
            discipline=discipline if user_type == "uni_postgrad" else (discipline or "General"),
        )
        self.repo.add(user)
        logger.info("Onboarded %s user %s", user.user_type, user.id)
        return user

    def get_user(self, user_id: str) -> User:
        user = self.repo.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}")
        return user

    def update_user(self, user_id: str, updates: Dict[str, Any]) -> User:
        """Apply a partial update; the merged profile must pass the onboarding rules or nothing changes."""
        user = self.get_user(user_id)
        user_type = updates.get("user_type") or user.user_type
        discipline = updates["discipline"] if "discipline" in updates else user.discipline
        if "dse_scores" in updates:
            dse_scores = self._normalise_scores(updates["dse_scores"], updates.get("electives"))
        else:
            dse_scores = user.dse_scores
        self._check_profile(user_type, discipline, dse_scores)

        user.user_type = user_type
        user.discipline = discipline
        user.dse_scores = dse_scores
        user.updated_at = utcnow_iso()
        return self.repo.save(user)
