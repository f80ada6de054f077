"""
Supabase Configuration

Settings for the Supabase auth endpoint used by the session gateway.
"""

import os
from typing import Optional

from ..infrastructure.supabase_auth_gateway import SupabaseAuthGateway


class SupabaseConfig:
    """Supabase auth settings."""

    def __init__(self):
        self.url = os.getenv("SUPABASE_URL", "").rstrip("/")
        self.anon_key = os.getenv("SUPABASE_ANON_KEY", "")
        self.timeout = float(os.getenv("AUTH_TIMEOUT_SECONDS", 10))

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)


def create_auth_gateway(config: Optional[SupabaseConfig] = None) -> SupabaseAuthGateway:
    """
    Create a Supabase auth gateway.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_ANON_KEY is missing
    """
    if config is None:
        config = SupabaseConfig()

    if not config.is_configured:
        raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")

    return SupabaseAuthGateway(config.url, config.anon_key, timeout=config.timeout)
