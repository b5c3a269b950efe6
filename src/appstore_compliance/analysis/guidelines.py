"""App Store Review Guidelines quick reference."""

GUIDELINE_SECTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Safety (Guideline 1)", (
        "1.1 Objectionable Content",
        "1.2 User Generated Content",
        "1.3 Kids Category",
        "1.4 Physical Harm",
        "1.5 Developer Information",
        "1.6 Data Security",
    )),
    ("Performance (Guideline 2)", (
        "2.1 App Completeness",
        "2.2 Beta Testing",
        "2.3 Accurate Metadata",
        "2.4 Hardware Compatibility",
        "2.5 Software Requirements",
    )),
    ("Business (Guideline 3)", (
        "3.1 Payments - In-App Purchase",
        "3.1.1 In-App Purchase",
        "3.1.2 Subscriptions",
        "3.2 Other Business Model Issues",
    )),
    ("Design (Guideline 4)", (
        "4.0 Design - General",
        "4.1 Copycats",
        "4.2 Minimum Functionality",
        "4.3 Spam",
        "4.4 Extensions",
        "4.5 Apple Sites and Services",
    )),
    ("Legal & Privacy (Guideline 5)", (
        "5.1 Privacy - Data Collection and Storage",
        "5.1.1 Data Collection and Storage",
        "5.1.2 Data Use and Sharing",
        "5.2 Intellectual Property",
        "5.3 Gaming, Gambling, and Lotteries",
        "5.4 VPN Apps",
        "5.5 Mobile Device Management",
    )),
)


def guidelines_markdown() -> str:
    lines = ["# App Store Review Guidelines", ""]
    for title, items in GUIDELINE_SECTIONS:
        lines.append(f"## {title}")
        lines += [f"- {item}" for item in items]
        lines.append("")
    return "\n".join(lines)
