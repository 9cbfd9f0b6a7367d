"""Pre-DB bootstrap configuration. Zero imports from the rest of the app.

Stores user preferences that must be known before opening the DB (e.g. db_folder).
Config lives in ~/.budget_manager/config.json to avoid a bootstrapping problem.
"""
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".budget_manager"
CONFIG_FILE = CONFIG_DIR / "config.json"
DEFAULT_DB_NAME = "budget.db"


def load_config(config_file: Path | None = None) -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    path = config_file or CONFIG_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError):
        logger.warning("Ignoring unreadable config file %s", path, exc_info=True)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict, config_file: Path | None = None) -> None:
    """Creates the config dir if needed; atomic write via .tmp + os.replace()."""
    path = config_file or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, path)
    except OSError:
        logger.error("Could not save config to %s", path, exc_info=True)
        tmp.unlink(missing_ok=True)


def get_db_folder(config_file: Path | None = None) -> str | None:
    """Return config["db_folder"] or None if not set."""
    return load_config(config_file).get("db_folder")


def set_db_folder(path: str | None, config_file: Path | None = None) -> None:
    """Update db_folder in config and save."""
    config = load_config(config_file)
    if path is None:
        config.pop("db_folder", None)
    else:
        config["db_folder"] = path
    save_config(config, config_file)


def resolve_db_path(explicit: str | None = None, config_file: Path | None = None) -> str:
    """--db wins, then the configured folder, then budget.db in the CWD."""
    if explicit:
        return explicit
    folder = get_db_folder(config_file)
    if folder:
        return os.path.join(folder, DEFAULT_DB_NAME)
    return DEFAULT_DB_NAME
