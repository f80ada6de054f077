"""
File Access Configuration

Session refresh, token reuse and retention windows, the serve endpoint
origin and the edge function secret. The token lifetime is a fixed policy
constant in the domain and is not configurable.
"""

import os
from datetime import timedelta
from typing import List, Optional


class FileAccessConfig:
    """File access settings read from the environment."""

    def __init__(self):
        self.functions_base_url = (
            os.getenv("FUNCTIONS_BASE_URL")
            or os.getenv("SUPABASE_URL")
            or "http://localhost:8000"
        ).rstrip("/")

        self.session_refresh_threshold_seconds = int(
            os.getenv("SESSION_REFRESH_THRESHOLD_SECONDS", 60)
        )
        self.token_reuse_grace_seconds = int(os.getenv("TOKEN_REUSE_GRACE_SECONDS", 30))
        self.token_retention_seconds = int(os.getenv("TOKEN_RETENTION_SECONDS", 3600))

        self.allowed_origins: List[str] = [
            origin.strip()
            for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
            if origin.strip()
        ]
        self.edge_secret_key: Optional[str] = os.getenv("EDGE_SECRET_KEY") or None

    @property
    def session_refresh_threshold(self) -> timedelta:
        return timedelta(seconds=self.session_refresh_threshold_seconds)

    @property
    def token_reuse_grace_period(self) -> timedelta:
        return timedelta(seconds=self.token_reuse_grace_seconds)

    @property
    def token_retention(self) -> timedelta:
        return timedelta(seconds=self.token_retention_seconds)
