"""Remediation prompts tailored to the user's development environment."""

from typing import Optional

from appstore_compliance.models import (
    AnalysisResult,
    DevEnvironment,
    EnvCategory,
    SeverityLevel,
    Violation,
)

DEV_ENVIRONMENTS: tuple[DevEnvironment, ...] = (
    DevEnvironment(
        id="xcode",
        name="Xcode",
        category=EnvCategory.ide,
        prompt_prefix="You are an expert iOS engineer working in Xcode with Swift and SwiftUI/UIKit.",
        context_note="The project is a native Xcode project; edit Swift sources, Info.plist and entitlements directly.",
    ),
    DevEnvironment(
        id="cursor",
        name="Cursor",
        category=EnvCategory.ide,
        prompt_prefix="You are an AI pair programmer inside Cursor with access to the whole iOS codebase.",
        context_note="Search the workspace for the affected symbols before editing and keep changes minimal.",
    ),
    DevEnvironment(
        id="vscode-copilot",
        name="VS Code + Copilot",
        category=EnvCategory.ide,
        prompt_prefix="You are GitHub Copilot Chat assisting with an iOS project opened in VS Code.",
        context_note="Build and signing still happen in Xcode; limit edits to source and configuration files.",
    ),
    DevEnvironment(
        id="windsurf",
        name="Windsurf",
        category=EnvCategory.ide,
        prompt_prefix="You are Cascade, the Windsurf coding agent, working on an iOS app repository.",
        context_note="Apply the change across every file that references the affected code.",
    ),
    DevEnvironment(
        id="flutterflow",
        name="FlutterFlow",
        category=EnvCategory.nocode,
        prompt_prefix="I build my iOS app in FlutterFlow, a visual no-code builder.",
        context_note="Native iOS settings live under Settings & Integrations; custom logic goes in Custom Code.",
    ),
    DevEnvironment(
        id="bubble",
        name="Bubble",
        category=EnvCategory.nocode,
        prompt_prefix="I build my app in Bubble and wrap it for the App Store.",
        context_note="Workflows, privacy rules and plugins are edited in the Bubble editor, not in code.",
    ),
    DevEnvironment(
        id="adalo",
        name="Adalo",
        category=EnvCategory.nocode,
        prompt_prefix="I build my iOS app in Adalo, a no-code app builder.",
        context_note="Publishing settings and permissions text are configured in the Adalo publish panel.",
    ),
    DevEnvironment(
        id="expo",
        name="Expo / React Native",
        category=EnvCategory.lowcode,
        prompt_prefix="I build my iOS app with Expo and React Native.",
        context_note="iOS permissions and Info.plist keys are set in app.json / app.config.js under expo.ios.",
    ),
    DevEnvironment(
        id="draftbit",
        name="Draftbit",
        category=EnvCategory.lowcode,
        prompt_prefix="I build my iOS app in Draftbit, a low-code React Native builder.",
        context_note="Screens are edited visually; custom JavaScript goes in Custom Code files.",
    ),
)


def get_environment(env_id: str) -> Optional[DevEnvironment]:
    return next((e for e in DEV_ENVIRONMENTS if e.id == env_id), None)


SEVERITY_RANK = {level.value: rank for rank, level in enumerate(SeverityLevel)}


def severity_rank(severity: str) -> int:
    """high=0, medium=1, low=2, anything else=3."""
    return SEVERITY_RANK.get(severity, 3)


def _issue_details(v: Violation, category_name: str) -> str:
    return (
        f"Issue: {v.title or 'Violation'}\n"
        f"Severity: {(v.severity or 'unknown').upper()}\n"
        f"Guideline: {v.guideline_reference or 'N/A'}\n"
        f"Category: {category_name or 'N/A'}\n"
        "\n"
        f"Problem:\n{v.description}\n"
        "\n"
        f"Suggested fix:\n{v.suggested_fix}"
    )


def fix_prompt(env: DevEnvironment, violation: Violation, category_name: str) -> str:
    """Prompt asking ``env``'s assistant (or its user) to fix one violation."""
    details = _issue_details(violation, category_name)

    if env.category == EnvCategory.nocode:
        return (
            f"{env.prompt_prefix}\n\n"
            f"Walk me step by step through fixing this App Store review issue in {env.name}, "
            "without writing code unless there is no visual alternative.\n\n"
            f"{details}\n\n"
            f"Context: {env.context_note}\n\n"
            "If a step cannot be done in the visual editor, check the app settings "
            "panel or add a custom-code block and tell me exactly what to put in it."
        )

    if env.category == EnvCategory.lowcode:
        return (
            f"{env.prompt_prefix}\n\n"
            f"Help me fix this App Store review issue in {env.name}. Say which parts are "
            "configuration and which need custom code, and give the code where needed.\n\n"
            f"{details}\n\n"
            f"Context: {env.context_note}"
        )

    affected = violation.affected_code or "N/A"
    return (
        f"{env.prompt_prefix}\n\n"
        "Fix the following App Store compliance issue in this codebase.\n\n"
        f"{details}\n\n"
        f"Affected code:\n```\n{affected}\n```\n\n"
        f"Context: {env.context_note}\n\n"
        "Locate the affected code, apply the fix, and summarize every change you make."
    )


def batch_fix_prompt(env: DevEnvironment, result: AnalysisResult) -> str:
    """One document covering every violation, highest severity first."""
    items = [
        (cat.category_name, v)
        for cat in result.categories
        for v in cat.violations
    ]
    # sorted() is stable: equal severities keep their report order
    items = sorted(items, key=lambda item: severity_rank(item[1].severity))

    sections = [
        f"# App Store Compliance Fixes ({env.name})",
        "",
        env.prompt_prefix,
        "",
        f"Resolve the following {len(items)} issues in order. Context: {env.context_note}",
    ]
    for i, (category_name, v) in enumerate(items, 1):
        sections += [
            "",
            f"## {i}. [{(v.severity or 'unknown').upper()}] {v.title or 'Violation'}",
            "",
            _issue_details(v, category_name),
        ]
        if env.category == EnvCategory.ide and v.affected_code:
            sections += ["", f"Affected code:\n```\n{v.affected_code}\n```"]
    if env.category == EnvCategory.nocode:
        sections += [
            "",
            "If a step cannot be done in the visual editor, check the app settings "
            "panel or add a custom-code block.",
        ]
    return "\n".join(sections)
