"""Best-effort app name discovery for an ingested repository."""

import re
from typing import Optional

from appstore_compliance.models import RepoFile

_PRODUCT_NAME_RE = re.compile(r'PRODUCT_NAME\s*=\s*"?([^";]+)"?')


def extract_product_name(files: list[RepoFile]) -> Optional[str]:
    """Scan the first ``.pbxproj`` for a ``PRODUCT_NAME`` assignment."""
    pbxproj = next((f for f in files if f.path.endswith(".pbxproj")), None)
    if pbxproj is None:
        return None
    match = _PRODUCT_NAME_RE.search(pbxproj.content)
    if not match:
        return None
    return match.group(1).strip() or None


def derive_app_name(repo: str) -> str:
    """Turn ``my-cool_app`` into ``My Cool App``."""
    spaced = re.sub(r"[-_]", " ", repo)
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), spaced)


def resolve_app_name(files: list[RepoFile], repo: str) -> str:
    return extract_product_name(files) or derive_app_name(repo)
