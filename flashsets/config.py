import logging
import os
import platform
import sys
from pathlib import Path
from typing import Final


def get_app_data_dir() -> Path:
    """Get the platform-appropriate directory for application data."""

    system = platform.system()
    home = Path.home()

    if system == "Darwin":  # macOS
        app_dir = home / "Library" / "Application Support" / "flashsets"
    elif system == "Windows":
        # Use APPDATA environment variable, fallback to home
        appdata = os.environ.get("APPDATA")
        if appdata:
            app_dir = Path(appdata) / "flashsets"
        else:
            app_dir = home / "AppData" / "Roaming" / "flashsets"
    else:  # Linux and other Unix-like systems
        # Follow XDG Base Directory Specification
        xdg_data_home = os.environ.get("XDG_DATA_HOME")
        if xdg_data_home:
            app_dir = Path(xdg_data_home) / "flashsets"
        else:
            app_dir = home / ".local" / "share" / "flashsets"

    # Create directory if it doesn't exist
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


# Get the application data directory and database path
APP_DATA_DIR = get_app_data_dir()
DB_PATH = APP_DATA_DIR / "collections.db"
DB_CONNECTION_STRING = os.environ.get(
    "FLASHSETS_DATABASE_URL", f"sqlite:///{DB_PATH}"
)

# Generative naming endpoint; unset means suggestions are unavailable
NAMING_SERVICE_URL: str | None = os.environ.get("FLASHSETS_NAMING_URL") or None
NAMING_SERVICE_TIMEOUT = float(os.environ.get("FLASHSETS_NAMING_TIMEOUT", "30"))


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("flashsets")
    logger.setLevel(logging.DEBUG)  # Set this to the desired level

    # Create handlers

    c_handler = logging.StreamHandler(sys.stdout)
    log_file = APP_DATA_DIR / "flashsets.log"
    f_handler = logging.FileHandler(log_file)
    c_handler.setLevel(logging.INFO)  # Console handler level
    f_handler.setLevel(logging.DEBUG)  # File handler level

    # Create formatters and add it to handlers
    log_format = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    c_handler.setFormatter(log_format)
    f_handler.setFormatter(log_format)

    # Add handlers to the logger
    logger.addHandler(c_handler)
    logger.addHandler(f_handler)

    return logger


LOGGER: Final[logging.Logger] = setup_logger()
