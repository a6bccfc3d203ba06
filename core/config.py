# core/config.py

"""
Application settings for the Student Records manager.

Values are read from environment variables, optionally seeded from a `.env` file
in the working directory, and cached as a single `AppConfig` instance.

Variables:
- STUDENT_RECORDS_BACKEND: "file" (default) or "memory"
- STUDENT_RECORDS_DIR: directory for the file backend, defaults to `~/Documents/StudentRecords`
- STUDENT_RECORDS_KEY: blob key holding the serialized collection, defaults to "student-records"
- LOG_LEVEL: logging level name, defaults to "WARNING"
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_STORAGE_KEY = "student-records"
DEFAULT_DATA_DIR = os.path.join(os.path.expanduser("~"), "Documents", "StudentRecords")
STORAGE_BACKENDS = ("file", "memory")

# keys double as file names for the file backend
STORAGE_KEY_PATTERN = r"[A-Za-z0-9_.-]+"


@dataclass(frozen=True)
class AppConfig:
    storage_backend: str = "file"
    data_dir: str = DEFAULT_DATA_DIR
    storage_key: str = DEFAULT_STORAGE_KEY
    log_level: str = "WARNING"


def validate_storage_key(key: str) -> str:
    """
    Raises:
        ValueError: If the key is blank, only dots, or contains anything other than letters, digits, '-', '_' or '.'.
    """
    if not re.fullmatch(STORAGE_KEY_PATTERN, key) or key.strip(".") == "":
        raise ValueError(f"Invalid storage key: {key!r}")

    return key


_config_instance: AppConfig | None = None


def load_config() -> AppConfig:
    """
    Builds an `AppConfig` from the current environment.

    Raises:
        ValueError:
            - If STUDENT_RECORDS_BACKEND names an unknown backend.
            - If STUDENT_RECORDS_KEY is not a valid storage key.
    """
    load_dotenv()

    backend = os.getenv("STUDENT_RECORDS_BACKEND", "file").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"Unknown storage backend '{backend}'. Expected one of: {', '.join(STORAGE_BACKENDS)}."
        )

    data_dir = os.getenv("STUDENT_RECORDS_DIR") or DEFAULT_DATA_DIR

    return AppConfig(
        storage_backend=backend,
        data_dir=os.path.abspath(os.path.expanduser(data_dir)),
        storage_key=validate_storage_key(
            os.getenv("STUDENT_RECORDS_KEY") or DEFAULT_STORAGE_KEY
        ),
        log_level=(os.getenv("LOG_LEVEL") or "WARNING").upper(),
    )


def get_config() -> AppConfig:
    global _config_instance

    if _config_instance is None:
        _config_instance = load_config()

    return _config_instance


def reset_config() -> None:
    global _config_instance
    _config_instance = None
