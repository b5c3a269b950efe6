"""Heuristics for picking iOS-relevant files out of a repository tree."""

IOS_EXTENSIONS = (
    ".swift", ".m", ".mm", ".h", ".plist", ".storyboard", ".xib",
    ".entitlements", ".xcconfig", ".pbxproj", ".podfile", ".podspec",
)

IOS_NAME_MARKERS = ("podfile", "cartfile", "package.swift", "info.plist")


def is_ios_relevant_file(path: str) -> bool:
    """True if the path looks like iOS source, config or build metadata."""
    lower = path.lower()
    if lower.endswith(IOS_EXTENSIONS):
        return True
    if any(marker in lower for marker in IOS_NAME_MARKERS):
        return True
    return lower.endswith(".json") and ("config" in lower or "package" in lower)
