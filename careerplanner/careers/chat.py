import logging
from typing import Dict, Any, List, Optional

import openai

from careerplanner.careers.models import ChatQuery
from careerplanner.careers.prompts import SYSTEM_PROMPTS, fallback_response
from careerplanner.careers.repositories import InMemoryChatRepository
from careerplanner.config import Settings

logger = logging.getLogger(__name__)


class ChatAssistant:
    """
    Answers career questions through an OpenAI-compatible chat API (POE by default).
    Without an API key, or when the call fails, answers come from the canned keyword rules.
    Each user may save at most `query_limit` questions.
    """

    def __init__(self, repo: InMemoryChatRepository, settings: Settings, client: Any = None):
        self.repo = repo
        self.settings = settings
        self.model = settings.poe_model
        self.max_tokens = 500
        self.temperature = 0.7
        self.query_limit = settings.chat_query_limit

        self.client = client
        if self.client is None and settings.poe_api_key:
            self.client = openai.OpenAI(api_key=settings.poe_api_key, base_url=settings.poe_base_url)

    def generate_response(self, user_type: str, query: str,
                          history: Optional[List[Dict[str, str]]] = None) -> str:
        if not self.client:
            return fallback_response(user_type, query)

        messages = [{"role": "system", "content": SYSTEM_PROMPTS.get(user_type, SYSTEM_PROMPTS["uni_postgrad"])}]
        messages.extend(history or [])
        messages.append({"role": "user", "content": query})

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            if not response.choices:
                raise RuntimeError("No response choices returned from chat API")
            content = (response.choices[0].message.content or "").strip()
            if not content:
                raise RuntimeError("Empty response from chat API")
            return content
        except Exception as e:
            logger.warning("Chat API failed, using canned answer: %s", e)
            return fallback_response(user_type, query)

    def history(self, user_id: str, limit: Optional[int] = None) -> List[ChatQuery]:
        """Most recent `limit` queries, oldest first."""
        limit = self.settings.chat_history_limit if limit is None else limit
        if limit <= 0:
            return []
        queries = sorted(self.repo.for_user(user_id), key=lambda q: (q.created_at, q.id))
        return queries[-limit:]

    def _limit_reached(self) -> Dict[str, Any]:
        return {
            "response": f"You have reached the maximum of {self.query_limit} queries.",
            "saved": False,
            "limit_reached": True,
        }

    def submit_query(self, user_id: str, user_type: str, query: str) -> Dict[str, Any]:
        # early exit skips the chat API call; add_if_under enforces the limit
        if self.repo.count_for(user_id) >= self.query_limit:
            return self._limit_reached()

        turns: List[Dict[str, str]] = []
        for q in self.history(user_id):
            turns.append({"role": "user", "content": q.query})
            turns.append({"role": "assistant", "content": q.response})

        response = self.generate_response(user_type, query, turns)
        if self.repo.add_if_under(user_id, query, response, self.query_limit) is None:
            return self._limit_reached()
        return {"response": response, "saved": True, "limit_reached": False}
