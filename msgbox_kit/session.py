"""Persisted session state: window geometry, tabs, recent items and key-value data."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import platformdirs

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class WindowGeometry:
    """Window size and position in logical pixels."""

    width: float = 1024.0
    height: float = 768.0
    x: int = 100
    y: int = 100
    maximized: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready mapping of the geometry."""
        return {
            "width": self.width,
            "height": self.height,
            "x": self.x,
            "y": self.y,
            "maximized": self.maximized,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> WindowGeometry:
        """Build geometry from a mapping; every field must be present."""
        return cls(
            width=float(data["width"]),
            height=float(data["height"]),
            x=int(data["x"]),
            y=int(data["y"]),
            maximized=bool(data["maximized"]),
        )


@dataclass
class SessionData:
    """Everything stored in a session file."""

    windows: Dict[str, WindowGeometry] = field(default_factory=dict)
    active_tabs: Dict[str, str] = field(default_factory=dict)
    recent_items: Dict[str, List[str]] = field(default_factory=dict)
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready mapping of the session."""
        return {
            "windows": {label: geo.to_dict() for label, geo in self.windows.items()},
            "active_tabs": dict(self.active_tabs),
            "recent_items": {name: list(items) for name, items in self.recent_items.items()},
            "data": dict(self.data),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SessionData:
        """Build session data from a mapping; every section must be present."""
        if not isinstance(data, dict):
            raise TypeError("session data must be a JSON object")
        return cls(
            windows={
                str(label): WindowGeometry.from_dict(geo)
                for label, geo in data["windows"].items()
            },
            active_tabs={str(k): str(v) for k, v in data["active_tabs"].items()},
            recent_items={
                str(name): [str(item) for item in items]
                for name, items in data["recent_items"].items()
            },
            data=dict(data["data"]),
        )


class SessionManager:
    """Thread-safe session store backed by a JSON file."""

    def __init__(self, file_path: PathLike, data: Optional[SessionData] = None) -> None:
        self.file_path = Path(file_path)
        self._data = data if data is not None else SessionData()
        self._lock = threading.RLock()

    @classmethod
    def _load(cls, session_file: PathLike) -> SessionManager:
        path = Path(session_file)
        if path.exists():
            text = path.read_text(encoding="utf-8")
            try:
                data = SessionData.from_dict(json.loads(text))
            except (ValueError, KeyError, TypeError, AttributeError) as exc:
                logger.warning("Ignoring unreadable session file %s: %s", path, exc)
                data = SessionData()
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            data = SessionData()
        return cls(path, data)

    def save(self) -> None:
        """Write the session to its file as indented JSON."""
        with self._lock:
            text = json.dumps(self._data.to_dict(), indent=2, ensure_ascii=False)
        self.file_path.write_text(text, encoding="utf-8")

    def save_window_state(self, label: str, geometry: WindowGeometry) -> None:
        """Remember the geometry of the window called ``label``."""
        with self._lock:
            self._data.windows[label] = geometry

    def window_state(self, label: str) -> Optional[WindowGeometry]:
        """The stored geometry for ``label``, if any."""
        with self._lock:
            return self._data.windows.get(label)

    def save_active_tab(self, section: str, tab: str) -> None:
        """Remember the active tab of ``section``."""
        with self._lock:
            self._data.active_tabs[section] = tab

    def active_tab(self, section: str) -> Optional[str]:
        """The stored active tab of ``section``, if any."""
        with self._lock:
            return self._data.active_tabs.get(section)

    def add_recent_item(self, list_name: str, item: str, max_items: int = 10) -> None:
        """Move ``item`` to the front of a recent list, keeping at most ``max_items``."""
        with self._lock:
            items = [i for i in self._data.recent_items.get(list_name, []) if i != item]
            items.insert(0, item)
            self._data.recent_items[list_name] = items[:max_items]

    def recent_items(self, list_name: str, limit: int = 10) -> List[str]:
        """Up to ``limit`` most recent items of a list."""
        with self._lock:
            return list(self._data.recent_items.get(list_name, [])[:limit])

    def clear_recent_items(self, list_name: str) -> None:
        """Forget a recent list."""
        with self._lock:
            self._data.recent_items.pop(list_name, None)

    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serialisable value; other values are ignored."""
        try:
            stored = json.loads(json.dumps(value))
        except (TypeError, ValueError) as exc:
            logger.warning("Value for %r is not JSON-serialisable: %s", key, exc)
            return
        with self._lock:
            self._data.data[key] = stored

    def get(self, key: str, default: Any = None) -> Any:
        """The value stored under ``key``, or ``default``."""
        with self._lock:
            return self._data.data.get(key, default)

    def delete(self, key: str) -> None:
        """Remove the value stored under ``key``."""
        with self._lock:
            self._data.data.pop(key, None)

    def clear(self) -> None:
        """Drop all session data."""
        with self._lock:
            self._data = SessionData()


_manager: Optional[SessionManager] = None
_manager_lock = threading.Lock()


def default_session_file(app_name: str = "msgbox_kit") -> Path:
    """Default session file in the platform's per-user data directory."""
    return Path(platformdirs.user_data_dir(app_name, appauthor=False)) / "session.json"


def initialize(session_file: PathLike) -> SessionManager:
    """Load ``session_file`` (or start empty) and make it the shared session."""
    global _manager
    manager = SessionManager._load(session_file)
    with _manager_lock:
        _manager = manager
    return manager


def instance() -> SessionManager:
    """The shared session; raises RuntimeError before ``initialize``."""
    with _manager_lock:
        if _manager is None:
            raise RuntimeError("SessionManager not initialized")
        return _manager