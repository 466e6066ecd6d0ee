# SPDX-License-Identifier: GPL-3.0-or-later
"""Runtime configuration read from the environment.

``STICKYNOTE_DATA_DIR`` relocates the settings file and logs, which is
mostly useful for running a throwaway instance from a source checkout.
``STICKYNOTE_DEBUG`` turns on debug logging.
"""

import os

from stickynote import __version__


def _truthy_env(name, default='0') -> bool:
    value = os.getenv(name, default)
    return value not in {'', '0', 'false', 'False'}


APP_ID = 'org.example.StickyNote'
APP_NAME = 'StickyNote'
APP_VERSION = __version__

DEBUG: bool = _truthy_env('STICKYNOTE_DEBUG')


def data_dir_override():
    """Return the data directory set in the environment, if any."""
    return os.getenv('STICKYNOTE_DATA_DIR') or None
