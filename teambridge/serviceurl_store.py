"""File-backed cache of the service URL last seen for each conversation."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import threading
import time
from pathlib import Path
from typing import Optional, Union

log = logging.getLogger(__name__)

STORE_VERSION = 1


def _parse(raw: bytes) -> dict:
    document = json.loads(raw)
    if not isinstance(document, dict):
        raise ValueError("store document is not an object")
    urls = document.get("urls")
    if urls is None:
        return {}
    if not isinstance(urls, dict) or not all(
        isinstance(value, str) for value in urls.values()
    ):
        raise ValueError("store urls must map strings to strings")
    return {key: value for key, value in urls.items() if key and value}


class ServiceURLStore:
    """Thread-safe map of conversation id to service URL, persisted as JSON.

    With no path the store lives in memory only.
    """

    def __init__(self, path: Union[str, os.PathLike, None] = None) -> None:
        self.path = os.fspath(path) if path else ""
        self._urls: dict = {}
        self._lock = threading.Lock()

    @classmethod
    def open(cls, path: Union[str, os.PathLike, None]) -> "ServiceURLStore":
        """Load a store; a missing file gives an empty store, a corrupt one is moved aside."""
        store = cls(path)
        if not store.path:
            return store
        try:
            raw = Path(store.path).read_bytes()
        except FileNotFoundError:
            return store
        try:
            store._urls.update(_parse(raw))
        except ValueError:
            broken = f"{store.path}.broken-{int(time.time())}"
            try:
                os.replace(store.path, broken)
            except OSError as exc:
                log.warning("failed to move aside corrupt serviceURL store %s: %s", store.path, exc)
            else:
                log.warning(
                    "serviceURL store corrupt, moved aside to %s and starting fresh", broken
                )
        return store

    def get(self, conversation_id: str) -> str:
        """Return the cached URL for a conversation, or "" if unknown."""
        with self._lock:
            return self._urls.get(conversation_id, "")

    def set(self, conversation_id: str, service_url: str) -> None:
        """Cache a URL; empty inputs are ignored and unchanged values are not rewritten."""
        if not conversation_id or not service_url:
            return
        with self._lock:
            if self._urls.get(conversation_id) == service_url:
                return
            self._urls[conversation_id] = service_url
            if self.path:
                self._save()

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def _save(self) -> None:
        document = {"version": STORE_VERSION, "urls": dict(sorted(self._urls.items()))}
        target = Path(self.path)
        target.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        tmp = target.with_name(target.name + ".tmp")
        try:
            fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(json.dumps(document, indent=2))
            os.replace(tmp, target)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise


def open_store(path: Optional[str]) -> ServiceURLStore:
    """Shorthand for :meth:`ServiceURLStore.open`."""
    return ServiceURLStore.open(path)