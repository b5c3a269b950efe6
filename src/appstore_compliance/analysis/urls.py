"""GitHub repository URL parsing."""

import re
from typing import Optional

from appstore_compliance.models import RepoRef

_GITHUB_RE = re.compile(
    r"github\.com/([^/]+)/([^/]+)(?:/tree/([^/]+)(?:/(.*))?)?"
)


def parse_github_url(url: str) -> Optional[RepoRef]:
    """Parse ``github.com/{owner}/{repo}[/tree/{branch}[/{path}]]``.

    Returns None for anything that does not look like a repository URL.
    """
    cleaned = re.sub(r"/+$", "", url.strip())
    if cleaned.endswith(".git"):
        cleaned = cleaned[: -len(".git")]
    match = _GITHUB_RE.search(cleaned)
    if not match:
        return None
    owner, repo, branch, path = match.groups()
    return RepoRef(
        owner=owner,
        repo=repo,
        branch=branch or "main",
        subpath=path or "",
    )
