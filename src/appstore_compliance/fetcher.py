"""GitHub repository tree and file content fetching via REST API."""

import base64
import logging
from typing import Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)


class GitHubFetcher:
    """Fetches repository trees and file contents from the GitHub REST API."""

    def __init__(self, token: Optional[str] = None) -> None:
        self.token = token
        self.base_url = "https://api.github.com"
        self._client: Optional[httpx.AsyncClient] = None
        self._saml_fallback = False  # True if we dropped auth due to SAML

    # ── HTTP plumbing ─────────────────────────────────────────────────────

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token and not self._saml_fallback:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=None,
            )
        return self._client

    async def _rebuild_client_without_auth(self) -> None:
        """Drop auth and rebuild client for SAML-protected public repos."""
        if self._client:
            await self._client.aclose()
            self._client = None
        self._saml_fallback = True
        await self._client_instance()

    async def _get(self, path: str, **kwargs) -> httpx.Response:  # type: ignore[no-untyped-def]
        """GET with automatic SAML fallback."""
        client = await self._client_instance()
        resp = await client.get(path, **kwargs)
        if resp.status_code == 403 and "SAML" in resp.text:
            logger.info("SAML enforcement on %s, retrying without token", path)
            await self._rebuild_client_without_auth()
            client = await self._client_instance()
            resp = await client.get(path, **kwargs)
        return resp

    @property
    def is_unauthenticated(self) -> bool:
        """True if we fell back to no-auth (SAML) mode."""
        return self._saml_fallback

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Trees ─────────────────────────────────────────────────────────────

    async def fetch_tree(self, owner: str, repo: str, ref: str) -> list[dict]:
        """Fetch the recursive file tree of ``ref``.

        Raises :class:`httpx.HTTPStatusError` on a non-2xx status so the
        caller can decide on a branch fallback, and ValueError when a 2xx
        body is not a JSON object.
        """
        resp = await self._get(
            f"/repos/{owner}/{repo}/git/trees/{quote(ref, safe='')}",
            params={"recursive": "1"},
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected tree response for {owner}/{repo}@{ref}")
        tree = data.get("tree")
        return tree if isinstance(tree, list) else []

    # ── Contents ──────────────────────────────────────────────────────────

    async def fetch_file_content(
        self, owner: str, repo: str, path: str, ref: str
    ) -> str:
        """Fetch and decode one file from the contents endpoint.

        Only base64 payloads are accepted; anything else raises ValueError.
        """
        resp = await self._get(
            f"/repos/{owner}/{repo}/contents/{quote(path, safe='/')}",
            params={"ref": ref},
        )
        resp.raise_for_status()
        data = resp.json()
        content = data.get("content") if isinstance(data, dict) else None
        if not content or data.get("encoding") != "base64":
            raise ValueError(f"Unsupported content encoding for {path}")
        raw = base64.b64decode(content.replace("\n", ""))
        return raw.decode("utf-8", errors="replace")
