# SPDX-License-Identifier: GPL-3.0-or-later
"""Per-user locations for the settings file and logs."""

from pathlib import Path

from gi.repository import GLib

from stickynote.config import data_dir_override
from stickynote.constants import APP_NAMESPACE, SETTINGS_FILE_NAME


def user_data_dir() -> Path:
    override = data_dir_override()
    if override:
        return Path(override)
    return Path(GLib.get_user_data_dir()) / APP_NAMESPACE


def settings_path() -> Path:
    return user_data_dir() / SETTINGS_FILE_NAME


def log_dir() -> Path:
    path = user_data_dir() / 'logs'
    path.mkdir(parents=True, exist_ok=True)
    return path
