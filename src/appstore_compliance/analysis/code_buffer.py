"""Labeled file blocks inside the editable code buffer."""

import re

from appstore_compliance.models import RepoFile


def file_marker(path: str) -> str:
    return f"// === {path} ==="


def render_code_block(files: list[RepoFile]) -> str:
    """Concatenate files as ``// === path ===`` blocks separated by blank lines."""
    return "\n\n".join(f"{file_marker(f.path)}\n{f.content}" for f in files)


def append_block(buffer: str, block: str) -> str:
    """Append ``block`` to ``buffer``, separated by a blank line if needed."""
    if not buffer.strip():
        return block
    return f"{buffer}\n\n{block}"


def remove_file_block(buffer: str, path: str) -> str:
    """Drop the block of ``path``, up to the next file marker."""
    marker = file_marker(path)
    kept: list[str] = []
    skipping = False
    for line in buffer.split("\n"):
        if line.startswith("// === ") and line.endswith(" ==="):
            if line == marker:
                skipping = True
                continue
            skipping = False
        if not skipping:
            kept.append(line)
    return re.sub(r"\n{3,}", "\n\n", "\n".join(kept)).strip()
