import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_DATA_DIR = os.path.join(PROJECT_ROOT, "data")


@dataclass
class Settings:
    data_dir: str = DEFAULT_DATA_DIR
    poe_api_key: Optional[str] = None
    poe_base_url: str = "https://api.poe.com/v1"
    poe_model: str = "GenAI-career-planner"
    chat_query_limit: int = 10
    chat_history_limit: int = 2
    log_level: str = "INFO"
    port: int = 8000

    @property
    def dse_dir(self) -> str:
        return os.path.join(self.data_dir, "dse")

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            data_dir=os.getenv("CAREERPLANNER_DATA_DIR", DEFAULT_DATA_DIR),
            poe_api_key=os.getenv("POE_API_KEY") or None,
            poe_base_url=os.getenv("POE_BASE_URL", "https://api.poe.com/v1"),
            poe_model=os.getenv("POE_MODEL", "GenAI-career-planner"),
            chat_query_limit=int(os.getenv("CHAT_QUERY_LIMIT", "10")),
            chat_history_limit=int(os.getenv("CHAT_HISTORY_LIMIT", "2")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            port=int(os.getenv("PORT", "8000")),
        )
