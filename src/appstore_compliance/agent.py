"""Transports for the external analysis agent.

Every transport exposes ``call(message, agent_id)`` and answers with the
agent envelope ``{"success": bool, "response": {"result": ..., "message": ...},
"error": str}``.
"""

import asyncio
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional

import httpx

from appstore_compliance.config import Settings

logger = logging.getLogger(__name__)


class AgentTransport:
    """Base class for agent transports."""

    async def call(self, message: str, agent_id: str) -> dict:
        raise NotImplementedError

    async def close(self) -> None:
        pass


class HttpAgentTransport(AgentTransport):
    """POSTs the message to an agent gateway over HTTP."""

    def __init__(self, url: str, token: Optional[str] = None) -> None:
        self.url = url
        self.token = token
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def headers(self) -> dict[str, str]:
        h = {"Content-Type": "application/json"}
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            # No timeout: the agent call lasts as long as the network allows.
            self._client = httpx.AsyncClient(headers=self.headers, timeout=None)
        return self._client

    async def call(self, message: str, agent_id: str) -> dict:
        client = await self._client_instance()
        resp = await client.post(self.url, json={"message": message, "agent_id": agent_id})
        if resp.is_error:
            return {
                "success": False,
                "error": f"Agent request failed ({resp.status_code}): {resp.reason_phrase}",
            }
        data = resp.json()
        if not isinstance(data, dict):
            return {"success": True, "response": {"result": data}}
        return data

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence, if any."""
    text = text.strip()
    if text.startswith("```"):
        lines = text.splitlines()
        text = "\n".join(lines[1:])
        if text.endswith("```"):
            text = text[:-3]
    return text.strip()


def _make_cli_executable() -> None:
    """Restore the execute bit on the CLI bundled with the pip-installed SDK."""
    try:
        import copilot.bin as bin_pkg  # type: ignore[import-untyped]
    except ImportError:
        return
    cli = Path(bin_pkg.__file__).parent / "copilot"
    try:
        if cli.exists() and not os.access(cli, os.X_OK):
            cli.chmod(cli.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError:
        logger.warning("Could not mark %s executable", cli, exc_info=True)


async def _deny_tool(input: dict, invocation: object) -> dict:
    return {"permissionDecision": "deny"}


class ReplyCollector:
    """Accumulates assistant message chunks from session events.

    ``finished`` is set on the first assistant message or when the session
    goes idle.
    """

    def __init__(self) -> None:
        self.finished = asyncio.Event()
        self._chunks: list[str] = []

    def __call__(self, event: object) -> None:
        kind = getattr(getattr(event, "type", None), "value", "")
        if kind == "session.idle":
            self.finished.set()
        elif kind == "assistant.message":
            data = getattr(event, "data", None)
            if data is not None and getattr(data, "content", ""):
                self._chunks.append(data.content)
            self.finished.set()

    @property
    def text(self) -> str:
        return "".join(self._chunks).strip()


class CopilotAgentTransport(AgentTransport):
    """Runs the analysis through a GitHub Copilot SDK session."""

    SYSTEM_MESSAGE = (
        "You are an App Store Review compliance analyst. You ONLY analyze the "
        "submission data provided in the prompt and NEVER use tools, browse the "
        "filesystem, run commands, or access external resources. Respond with a "
        "single JSON object with the keys compliance_score (0-100), "
        "readiness_status, risk_summary {high, medium, low}, readiness_checklist, "
        "categories [{category_name, category_summary, violations [{title, "
        "severity, guideline_reference, description, affected_code, "
        "suggested_fix}]}], overall_assessment (markdown) and priority_fixes "
        "[{priority, title, category, action}]. Return ONLY the JSON object."
    )

    def __init__(self, model: str = "gpt-4.1") -> None:
        self.model = model
        self._copilot_client: object | None = None
        self._copilot_session: object | None = None

    def session_config(self) -> dict:
        """Single-shot session: no persistence and every tool call refused."""
        return {
            "model": self.model,
            "infinite_sessions": {"enabled": False},
            "system_message": {"content": self.SYSTEM_MESSAGE},
            "hooks": {"on_pre_tool_use": _deny_tool},
        }

    async def _ensure_copilot(self) -> None:
        if self._copilot_session is not None:
            return

        from copilot import CopilotClient  # type: ignore[import-untyped]

        _make_cli_executable()
        # scratch cwd keeps CLI state out of the user's checkout
        workdir = tempfile.mkdtemp(prefix="appstore-compliance-copilot-")
        client = CopilotClient({"cwd": workdir})
        await client.start()
        self._copilot_client = client
        self._copilot_session = await client.create_session(self.session_config())
        logger.info("Copilot session started with model %s", self.model)

    async def _ask(self, prompt: str) -> str:
        await self._ensure_copilot()
        session = self._copilot_session
        collector = ReplyCollector()
        unsubscribe = session.on(collector)  # type: ignore[union-attr]
        try:
            await session.send({"prompt": prompt})  # type: ignore[union-attr]
            await collector.finished.wait()
        finally:
            if callable(unsubscribe):
                unsubscribe()
        return collector.text

    async def call(self, message: str, agent_id: str) -> dict:
        text = await self._ask(message)
        if not text:
            return {"success": False, "error": "The agent returned an empty response"}
        return {"success": True, "response": {"result": strip_code_fences(text)}}

    async def close(self) -> None:
        session, client = self._copilot_session, self._copilot_client
        self._copilot_session = None
        self._copilot_client = None
        for target, method in ((session, "destroy"), (client, "stop")):
            if target is None:
                continue
            try:
                await getattr(target, method)()
            except Exception:
                logger.warning("Copilot %s failed during shutdown", method, exc_info=True)


def build_transport(settings: Settings) -> AgentTransport:
    if settings.agent_backend == "copilot":
        return CopilotAgentTransport(model=settings.model)
    return HttpAgentTransport(settings.agent_url)
