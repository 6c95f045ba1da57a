"""
String-keyed, string-valued stores for persisted filter state.

Any object with get/set/remove works as a store; these two cover the
in-memory and file-backed cases.
"""

import json
import os
import tempfile
from typing import Dict, Optional, Protocol


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store. Handy for tests and single-process apps."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str):
        self._data[key] = value

    def remove(self, key: str):
        self._data.pop(key, None)

    def keys(self):
        return list(self._data)


class JsonFileStore:
    """
    Store backed by a single JSON object file mapping key -> string.

    The whole file is read on every access and rewritten atomically
    (temp file + rename) on every change, so other keys are preserved.
    A missing file reads as empty. I/O and decode errors propagate;
    the engine decides how to degrade.
    """

    def __init__(self, path: str):
        self.path = path

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, str]):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str):
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str):
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
