"""Harness configuration and endpoint resolution."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .transport.http_client import DEFAULT_ENDPOINT

ENDPOINT_ENV_VAR = "PAYMENT_API_URL"

# Pause between consecutive requests of a batch, in seconds
DEFAULT_INTER_CALL_DELAY = 0.5


def default_env_path() -> Path:
    return Path.home() / ".payment-tester" / "env"


def load_endpoint(env_path: Optional[Path] = None) -> str:
    """Resolve the API endpoint from environment or config file.

    Lookup order: the PAYMENT_API_URL environment variable, a
    ``PAYMENT_API_URL=...`` line in ``~/.payment-tester/env``, then the
    public default endpoint.
    """
    endpoint = os.environ.get(ENDPOINT_ENV_VAR)
    if endpoint and endpoint.strip():
        return endpoint.strip()

    if env_path is None:
        env_path = default_env_path()

    if env_path.exists():
        with open(env_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line.startswith("#") or not line:
                    continue
                if line.startswith(f"{ENDPOINT_ENV_VAR}="):
                    value = line.split("=", 1)[1].strip()
                    if value:
                        return value

    return DEFAULT_ENDPOINT


@dataclass
class HarnessConfig:
    """Configuration for test execution."""
    endpoint: str = field(default_factory=load_endpoint)
    inter_call_delay: float = DEFAULT_INTER_CALL_DELAY
    request_timeout: Optional[float] = None
    save_report: bool = False
    report_dir: Optional[Path] = None
    pretty_output: bool = True

    def __post_init__(self):
        if self.inter_call_delay < 0:
            raise ValueError(f"inter_call_delay must not be negative, got {self.inter_call_delay}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")
