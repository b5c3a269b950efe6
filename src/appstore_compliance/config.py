"""Runtime settings, read from the environment (and a .env file via the CLI)."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_AGENT_ID = "699888d562205d38ecc8323f"
DEFAULT_AGENT_URL = "http://localhost:8000/api/agent"


class Settings(BaseModel):
    """Application settings."""

    github_token: Optional[str] = None
    agent_backend: str = "http"  # "http" or "copilot"
    agent_url: str = DEFAULT_AGENT_URL
    agent_id: str = DEFAULT_AGENT_ID
    model: str = "gpt-4.1"
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".appstore-compliance")
    export_dir: Path = Field(default_factory=Path.cwd)
    log_level: str = "WARNING"

    @property
    def history_path(self) -> Path:
        return self.data_dir / "compliance_history.json"

    @property
    def log_path(self) -> Path:
        return self.data_dir / "appstore-compliance.log"

    @classmethod
    def from_env(cls) -> "Settings":
        env = os.environ
        values: dict[str, object] = {
            "github_token": env.get("GITHUB_TOKEN") or env.get("GH_TOKEN") or None,
            "agent_backend": env.get("COMPLIANCE_AGENT_BACKEND", "http").strip().lower(),
            "agent_url": env.get("COMPLIANCE_AGENT_URL", DEFAULT_AGENT_URL),
            "agent_id": env.get("COMPLIANCE_AGENT_ID", DEFAULT_AGENT_ID),
            "model": env.get("COMPLIANCE_MODEL", "gpt-4.1"),
            "log_level": env.get("COMPLIANCE_LOG_LEVEL", "WARNING").upper(),
        }
        if env.get("COMPLIANCE_DATA_DIR"):
            values["data_dir"] = Path(env["COMPLIANCE_DATA_DIR"]).expanduser()
        if env.get("COMPLIANCE_EXPORT_DIR"):
            values["export_dir"] = Path(env["COMPLIANCE_EXPORT_DIR"]).expanduser()
        return cls(**values)
