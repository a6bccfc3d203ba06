# cli/main.py

"""
Entry point for the Student Records CLI.

Loads configuration, sets up logging, opens the configured blob store, loads the
record collection once, and hands control to the Manage Students menu.
"""

import logging

import core.formatters as formatters
from cli.menus import students_menu
from core.config import AppConfig, get_config
from models.record_store import RecordStore
from storage.blob_store import create_blob_store

logger = logging.getLogger(__name__)


def configure_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def open_record_store(config: AppConfig) -> RecordStore:
    """
    Builds a `RecordStore` over the configured blob store and loads its collection.

    Notes:
        - Loading never fails; unreadable storage falls back to the seed dataset.
    """
    blob_store = create_blob_store(config)
    store = RecordStore(blob_store, config.storage_key)
    store.load()

    logger.info(
        "Opened %s store '%s' with %d students.",
        config.storage_backend,
        config.storage_key,
        len(store),
    )

    return store


def run_cli() -> None:
    try:
        config = get_config()
    except ValueError as e:
        print(f"\n[ERROR] Invalid configuration: {e}")
        raise SystemExit(1)

    configure_logging(config)

    store = open_record_store(config)

    title = formatters.format_banner_text("STUDENT RECORDS MANAGER")
    print(f"\n{title}")
    print("Create, update, and delete student details.")

    try:
        students_menu.run(store)
    except (KeyboardInterrupt, EOFError):
        print()

    exit_program()


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.

    Notes:
        - Every mutation is already persisted, so nothing needs saving here.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
