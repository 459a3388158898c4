from __future__ import annotations
import os
from pydantic import BaseModel

class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "dev")
    app_name: str = os.getenv("APP_NAME", "hackathon-api")
    app_display_name: str = os.getenv("APP_DISPLAY_NAME", "Hackathon")
    app_version: str = os.getenv("APP_VERSION", "0.1.0")
    git_sha: str = os.getenv("GIT_SHA", "dev")
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Voting policy
    public_vote_cap: int = int(os.getenv("PUBLIC_VOTE_CAP", "3"))  # distinct submissions per public voter per event
    default_judge_weight: str = os.getenv("DEFAULT_JUDGE_WEIGHT", "1")
    default_judge_max_votes: int = int(os.getenv("DEFAULT_JUDGE_MAX_VOTES", "100"))

settings = Settings()
