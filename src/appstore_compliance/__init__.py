"""App Store Compliance — iOS submission review TUI.

Imports iOS sources from a GitHub repository, sends them with the app's
store metadata to an analysis agent, and shows a scored compliance report
with per-violation fix prompts and a local history of past runs.
"""

__version__ = "0.1.0"
