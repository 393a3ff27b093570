"""
デモ認証用の Key-Value ストレージ。

ブラウザの localStorage 相当を get / set / delete / keys の 4 操作に絞ったもの。
値は JSON に変換できるものだけを扱う。
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """文字列キー → JSON 値 のストレージ。"""

    def get(self, key: str) -> Optional[Any]:  # pragma: no cover - Protocol
        ...

    def set(self, key: str, value: Any) -> None:  # pragma: no cover - Protocol
        ...

    def delete(self, key: str) -> None:  # pragma: no cover - Protocol
        ...

    def keys(self) -> List[str]:  # pragma: no cover - Protocol
        ...


class InMemoryStorage:
    """プロセス内 dict に保持するストレージ（テスト / 一時利用向け）。"""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._data)


class JsonFileStorage:
    """
    1 つの JSON ファイルに全キーを保存するストレージ。

    書き込みのたびにファイル全体を書き直す（一時ファイル → rename）。
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except ValueError:
            logger.error("Storage file %s is not valid JSON; starting empty.", self._path)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self._path)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._save(data)

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._load())
