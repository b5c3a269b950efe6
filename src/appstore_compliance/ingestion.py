"""Repository ingestion — tree fetch, filtering and per-file content fetch.

One :meth:`RepoIngestion.run` call is a single pass from a raw URL to either
an ordered list of decoded files or an error message. There is no resume; a
retry is a fresh run.
"""

import logging
from typing import Awaitable, Callable, Optional, TypeVar

import httpx
from pydantic import BaseModel, Field

from appstore_compliance.analysis.relevance import is_ios_relevant_file
from appstore_compliance.analysis.urls import parse_github_url
from appstore_compliance.fetcher import GitHubFetcher
from appstore_compliance.models import RepoFile, RepoRef

logger = logging.getLogger(__name__)

MAX_FILES = 15
MAX_FILE_SIZE = 100_000
FALLBACK_BRANCH = "master"

UNEXPECTED_TREE_ERROR = "Unexpected response from the GitHub API. Please try again."

T = TypeVar("T")
R = TypeVar("R")


class IngestionError(Exception):
    """A run-ending ingestion failure with a user-facing message."""


class IngestionResult(BaseModel):
    """Outcome of one ingestion run."""

    ref: Optional[RepoRef] = None
    files: list[RepoFile] = Field(default_factory=list)
    relevant_count: int = 0
    dropped: int = 0
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error

    @property
    def summary(self) -> str:
        text = f"Fetched {len(self.files)} of {self.relevant_count} iOS files"
        return f"{text} ({self.dropped} skipped)" if self.dropped else text


async def fetch_many(
    items: list[T],
    fetch_one: Callable[[T], Awaitable[R]],
) -> tuple[list[R], int]:
    """Fetch items one at a time, keeping successes.

    Returns ``(successes, dropped)``. A failing item never stops the ones
    after it.
    """
    successes: list[R] = []
    dropped = 0
    for item in items:
        try:
            successes.append(await fetch_one(item))
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("Dropping %r: %s", item, e)
            dropped += 1
    return successes, dropped


def select_files(tree: list[dict], subpath: str = "") -> list[dict]:
    """Keep small, iOS-relevant blobs (under ``subpath`` if given), in tree order."""
    selected: list[dict] = []
    for entry in tree:
        if not isinstance(entry, dict) or entry.get("type") != "blob":
            continue
        path = entry.get("path")
        if not isinstance(path, str) or not is_ios_relevant_file(path):
            continue
        size = entry.get("size") or 0
        if not isinstance(size, int) or size >= MAX_FILE_SIZE:
            continue
        if subpath and not path.startswith(subpath):
            continue
        selected.append(entry)
    return selected


class RepoIngestion:
    """Pulls iOS-relevant source files out of a public GitHub repository."""

    def __init__(
        self,
        fetcher: GitHubFetcher,
        on_status: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._fetcher = fetcher
        self._on_status = on_status or (lambda _: None)

    def _status(self, msg: str) -> None:
        self._on_status(msg)

    async def run(self, url: str) -> IngestionResult:
        """Run the whole pipeline; never raises for expected failures."""
        try:
            return await self._run(url)
        except IngestionError as e:
            logger.info("Ingestion of %r failed: %s", url, e)
            return IngestionResult(error=str(e))
        except httpx.HTTPError as e:
            logger.warning("Ingestion of %r failed", url, exc_info=True)
            return IngestionResult(error=f"Failed to fetch repository: {e}")

    async def _run(self, url: str) -> IngestionResult:
        if not url.strip():
            raise IngestionError("Please enter a GitHub repository URL")
        ref = parse_github_url(url)
        if ref is None:
            raise IngestionError(
                "Invalid GitHub URL. Use format: https://github.com/owner/repo"
            )

        self._status(f"Fetching repository tree for {ref.full_name} …")
        ref, tree = await self._fetch_tree(ref)

        self._status("Filtering iOS-relevant files …")
        relevant = select_files(tree, ref.subpath)
        if not relevant:
            raise IngestionError("No iOS-relevant files found in this repository")

        to_fetch = relevant[:MAX_FILES]
        self._status(f"Fetching {len(to_fetch)} of {len(relevant)} iOS files …")

        counter = {"n": 0}

        async def _fetch_one(entry: dict) -> RepoFile:
            counter["n"] += 1
            path = entry["path"]
            self._status(f"Fetching file {counter['n']}/{len(to_fetch)}: {path}")
            content = await self._fetcher.fetch_file_content(
                ref.owner, ref.repo, path, ref.branch
            )
            return RepoFile(
                path=path,
                content=content,
                size=entry.get("size") or len(content),
            )

        files, dropped = await fetch_many(to_fetch, _fetch_one)
        if not files:
            raise IngestionError("Could not fetch any file contents from the repository")

        result = IngestionResult(
            ref=ref,
            files=files,
            relevant_count=len(relevant),
            dropped=dropped,
        )
        self._status(result.summary)
        return result

    async def _tree(self, ref: RepoRef) -> list[dict]:
        try:
            return await self._fetcher.fetch_tree(ref.owner, ref.repo, ref.branch)
        except ValueError as e:
            raise IngestionError(UNEXPECTED_TREE_ERROR) from e

    async def _fetch_tree(self, ref: RepoRef) -> tuple[RepoRef, list[dict]]:
        """Fetch the tree, retrying once against ``master`` on a 404."""
        try:
            return ref, await self._tree(ref)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status != 404:
                raise IngestionError(
                    f"GitHub API error: {status} {e.response.reason_phrase}"
                ) from e

        self._status(f"Branch '{ref.branch}' not found, trying '{FALLBACK_BRANCH}' …")
        fallback = ref.model_copy(update={"branch": FALLBACK_BRANCH})
        try:
            tree = await self._tree(fallback)
        except httpx.HTTPStatusError as e:
            raise IngestionError(
                f"Repository not found or not public. Status: {e.response.status_code}"
            ) from e
        return fallback, tree
