"""Pytest configuration."""

import shutil
from datetime import datetime, timezone
from pathlib import Path

import pytest

from lobsters_gopher.utils.config import reset_settings
from lobsters_gopher.utils.logging_config import reset_logging


@pytest.fixture(scope="session", autouse=True)
def backup_env_file():
    """Backup .env file during test session to prevent pollution."""
    env_file = Path(".env")
    backup_file = Path(".env.test_backup")

    # Backup if exists
    if env_file.exists():
        shutil.copy(env_file, backup_file)
        env_file.unlink()

    yield

    # Restore
    if backup_file.exists():
        shutil.move(backup_file, env_file)


@pytest.fixture(autouse=True)
def clean_singletons():
    """Settings and logging are process-wide; reset them around each test."""
    reset_settings()
    yield
    reset_settings()
    reset_logging()


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 18, 9, 5, 0, tzinfo=timezone.utc)
