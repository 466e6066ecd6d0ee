# SPDX-License-Identifier: GPL-3.0-or-later

APP_NAMESPACE = 'stickynote'
SETTINGS_FILE_NAME = 'settings.json'
LOG_FILE_NAME = 'stickynote.log'

# Note geometry, in device-independent pixels
DEFAULT_X = 100.0
DEFAULT_Y = 100.0
DEFAULT_WIDTH = 228.0
DEFAULT_HEIGHT = 173.0
MIN_WIDTH = 150.0
MIN_HEIGHT = 100.0

DEFAULT_FONT_FAMILY = 'Sans'
DEFAULT_FONT_SIZE = 14.0
DEFAULT_FONT_COLOR = '#333333'

LIST_INDENT = '\u3000'  # ideographic space
BULLET_PREFIX = '・ '

AUTOSAVE_DELAY_MS = 1000
