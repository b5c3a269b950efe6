"""CLI entry point for appstore-compliance."""

import logging


def configure_logging(settings) -> None:  # type: ignore[no-untyped-def]
    """Send log records to a file; the TUI owns the terminal."""
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(settings.log_path),
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Launch the App Store Compliance TUI."""
    from dotenv import load_dotenv

    load_dotenv()  # Load .env file (e.g. GITHUB_TOKEN, COMPLIANCE_AGENT_URL)

    from appstore_compliance.app import ComplianceApp
    from appstore_compliance.config import Settings

    settings = Settings.from_env()
    configure_logging(settings)

    app = ComplianceApp(settings)
    app.run()


if __name__ == "__main__":
    main()
