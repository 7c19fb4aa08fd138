"""Shared configuration and HTTP helpers for the chat proxy."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from openai import AsyncOpenAI
from dotenv import load_dotenv

from backend.formatting import Pricing

load_dotenv()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Content-Type": "application/json",
}

TIMEOUT_MESSAGE = "Request timed out."


@dataclass
class Settings:
    """Runtime configuration handed to the orchestrator.

    Only the credential and the per-call HTTP timeout come from the
    environment; the polling horizon and pricing table are fixed.
    """

    openai_api_key: Optional[str] = None
    openai_timeout: float = 15
    run_timeout: float = 60
    poll_interval: float = 1
    pricing: Pricing = field(default_factory=Pricing)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            openai_timeout=float(os.getenv("OPENAI_TIMEOUT", "15")),
        )


def get_openai_client(settings: Settings) -> AsyncOpenAI:
    """Return an OpenAI client for the configured credential."""
    return AsyncOpenAI(api_key=settings.openai_api_key, timeout=settings.openai_timeout)
