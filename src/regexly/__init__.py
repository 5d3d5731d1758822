"""Regexly - live regular-expression tester with in-place highlighting.

Type a pattern, toggle flags, and see every match highlighted in the test
text as you type, including while editing the highlighted text itself.
"""

import logging
import os
import subprocess
from logging.handlers import RotatingFileHandler
from pathlib import Path

__version__ = "0.1.0"


def get_git_commit() -> str:
    """Get the short git commit hash, or 'unknown' if not in a git repo."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            timeout=5,
        )
        return result.stdout.strip()
    except (
        subprocess.CalledProcessError,
        FileNotFoundError,
        subprocess.TimeoutExpired,
    ):
        return "unknown"


def get_version_string() -> str:
    """Get version string with git commit for dev builds."""
    commit = get_git_commit()
    return f"{__version__}+{commit}"


def _setup_logging(log_dir: Path) -> None:
    """Configure logging to both console and rotating file."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"regexly.{os.getpid()}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_formatter = logging.Formatter("%(levelname)s: %(message)s")
    console_handler.setFormatter(console_formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.info("Logging configured. Log file: %s", log_file.absolute())


def main() -> None:
    """Entry point for the Regexly application."""
    from nicegui import app, ui

    from regexly.config import get_settings

    settings = get_settings()
    _setup_logging(settings.app.log_dir)

    # Serve the editor script and stylesheet
    _static_dir = Path(__file__).parent / "static"
    app.add_static_files("/static", str(_static_dir))

    import regexly.pages  # noqa: F401 - registers routes

    print(f"Regexly v{get_version_string()}")
    print(f"Starting application on http://{settings.app.host}:{settings.app.port}")

    reload = os.environ.get("REGEXLY_RELOAD", "1") != "0" and settings.dev.reload
    ui.run(
        host=settings.app.host,
        port=settings.app.port,
        title=settings.app.title,
        reload=reload,
        show=settings.dev.show_browser,
        storage_secret=settings.app.storage_secret.get_secret_value(),
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
