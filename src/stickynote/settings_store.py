# SPDX-License-Identifier: GPL-3.0-or-later

import enum
import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from stickynote.note_settings import NoteSettings

_LOG = logging.getLogger(__name__)

# Errors that mean "the file is unusable", as opposed to programming errors.
# RecursionError comes from pathologically nested JSON.
_LOAD_ERRORS = (OSError, ValueError, TypeError, RecursionError)


class LoadStatus(enum.Enum):
    LOADED = 'loaded'
    MISSING = 'missing'
    FALLBACK = 'fallback'


@dataclass
class LoadResult:
    settings: NoteSettings
    status: LoadStatus
    error: Optional[str] = None

    @property
    def used_defaults(self) -> bool:
        return self.status is not LoadStatus.LOADED


class SettingsStore:
    """Reads and writes the single settings file.

    Nothing here raises to the caller: a missing or broken file loads as
    default settings and a failed write is only logged.
    """

    def __init__(self, path=None):
        if path is None:
            from stickynote.data_paths import settings_path
            path = settings_path()
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # --- Loading ---

    def load(self) -> NoteSettings:
        return self.load_result().settings

    def load_result(self) -> LoadResult:
        try:
            self._ensure_dir()
            if not self._path.exists():
                _LOG.info('No settings file at %s, using defaults', self._path)
                result = LoadResult(NoteSettings(), LoadStatus.MISSING)
            else:
                text = self._path.read_text(encoding='utf-8')
                result = LoadResult(self._decode(text), LoadStatus.LOADED)
        except _LOAD_ERRORS as e:
            _LOG.warning('Settings load from %s failed: %s', self._path, e)
            result = LoadResult(NoteSettings(), LoadStatus.FALLBACK, error=str(e))

        result.settings.validate_and_fix()
        return result

    @staticmethod
    def _decode(text) -> NoteSettings:
        data = json.loads(text)
        if data is None:
            return NoteSettings()
        return NoteSettings.from_dict(data)

    # --- Saving ---

    def save(self, settings: NoteSettings):
        payload = self._encode(settings)
        if payload is not None:
            self._write(payload)

    def save_async(self, settings: NoteSettings) -> Optional[threading.Thread]:
        """Save on a background thread and return it.

        The model is serialized before this returns, so later edits on the
        calling thread do not leak into this write. Returns None when the
        model could not be serialized.
        """
        payload = self._encode(settings)
        if payload is None:
            return None
        worker = threading.Thread(
            target=self._write, args=(payload,),
            name='stickynote-save', daemon=True,
        )
        worker.start()
        return worker

    @staticmethod
    def _encode(settings) -> Optional[bytes]:
        # Encoding here keeps an unencodable model from truncating the file.
        try:
            text = json.dumps(
                settings.to_dict(), indent=2, ensure_ascii=False, allow_nan=False,
            )
            return (text + '\n').encode('utf-8')
        except (TypeError, ValueError):
            _LOG.exception('Settings could not be serialized')
            return None

    def _write(self, payload):
        try:
            self._ensure_dir()
            self._path.write_bytes(payload)
        except OSError:
            _LOG.exception('Settings save to %s failed', self._path)
            return
        _LOG.debug('Saved settings to %s', self._path)

    def _ensure_dir(self):
        self._path.parent.mkdir(parents=True, exist_ok=True)
