"""In-memory cache of fetched update information with change notification."""

import threading
import weakref
from typing import Iterable, Optional, TYPE_CHECKING

from .errors import MalformedVersion
from .logging_config import get_logger
from .models import ComponentId, Metadata

if TYPE_CHECKING:
    from .sources import SourceRegistry

logger = get_logger(__name__)


class UpdateListener:
    """Receives cache notifications. Override the hooks you need.

    Hooks run synchronously on the thread that triggered them and must not
    block.
    """

    def on_info_changed(self, source_id: ComponentId, info: Metadata) -> None:
        pass

    def on_updates_available(self, source_ids: list[ComponentId]) -> None:
        pass


class UpdateCache:
    """Last known update information per component.

    All operations share one lock. Listeners are held weakly; registering
    and unregistering is only allowed from the coordination thread.
    """

    def __init__(self, coordination_thread: Optional[threading.Thread] = None) -> None:
        self._lock = threading.RLock()
        self._entries: dict[ComponentId, Metadata] = {}
        self._pending: dict[ComponentId, None] = {}
        # id(listener) -> (registration order, weak reference)
        self._listeners: dict[int, tuple[int, "weakref.ref[UpdateListener]"]] = {}
        self._next_order = 0
        self._coordination_thread = coordination_thread or threading.current_thread()

    def _ensure_coordination_thread(self) -> None:
        if threading.current_thread() is not self._coordination_thread:
            raise RuntimeError(
                "listeners must be (un)registered from the "
                f"{self._coordination_thread.name!r} thread"
            )

    def _forget(self, key: int, ref: "weakref.ref[UpdateListener]") -> None:
        entry = self._listeners.get(key)
        if entry is not None and entry[1] is ref:
            del self._listeners[key]

    def _is_registered(self, listener: UpdateListener) -> bool:
        entry = self._listeners.get(id(listener))
        return entry is not None and entry[1]() is listener

    def _snapshot_listeners(self) -> list[UpdateListener]:
        ordered = sorted(self._listeners.copy().values(), key=lambda entry: entry[0])
        listeners = []
        for _, ref in ordered:
            listener = ref()
            if listener is not None:
                listeners.append(listener)
        return listeners

    def register_listener(self, listener: UpdateListener) -> None:
        """Register a listener.

        If some components were announced via notify_updates_available()
        and not refreshed since, the listener is told about them right away.

        Raises:
            RuntimeError: If called outside the coordination thread.
        """
        self._ensure_coordination_thread()
        with self._lock:
            if self._is_registered(listener):
                return
            key = id(listener)
            ref = weakref.ref(listener, lambda r: self._forget(key, r))
            self._listeners[key] = (self._next_order, ref)
            self._next_order += 1
            pending = list(self._pending)

        if pending:
            self._call(listener, "on_updates_available", pending)

    def unregister_listener(self, listener: UpdateListener) -> None:
        """Unregister a listener. Unknown listeners are ignored.

        Raises:
            RuntimeError: If called outside the coordination thread.
        """
        self._ensure_coordination_thread()
        with self._lock:
            if self._is_registered(listener):
                del self._listeners[id(listener)]

    def get_info(self, source_id: ComponentId) -> Optional[Metadata]:
        """Get the cached information for a component, or None."""
        with self._lock:
            info = self._entries.get(source_id)
            return info.copy() if info is not None else None

    def set_info(self, source_id: ComponentId, info: Metadata) -> None:
        """Replace the cached information and notify listeners."""
        with self._lock:
            self._entries[source_id] = Metadata(info)
            self._pending.pop(source_id, None)
            for listener in self._snapshot_listeners():
                # Unregistered earlier in this sweep by another listener.
                if not self._is_registered(listener):
                    continue
                self._call(listener, "on_info_changed", source_id, Metadata(info))

    def notify_updates_available(self, source_ids: Iterable[ComponentId]) -> None:
        """Announce that fresh data for ``source_ids`` is ready to be fetched.

        Listeners are expected to re-run the checks; nothing is cached.
        """
        ids = list(dict.fromkeys(source_ids))
        if not ids:
            return

        with self._lock:
            for source_id in ids:
                self._pending[source_id] = None
            for listener in self._snapshot_listeners():
                if not self._is_registered(listener):
                    continue
                self._call(listener, "on_updates_available", list(ids))

    def pending(self) -> list[ComponentId]:
        """Components announced as updated but not re-fetched yet."""
        with self._lock:
            return list(self._pending)

    def items(self) -> list[tuple[ComponentId, Metadata]]:
        with self._lock:
            return [(source_id, info.copy()) for source_id, info in self._entries.items()]

    def updates_available(self, registry: "SourceRegistry") -> list[ComponentId]:
        """List components whose cached information is newer than the local one.

        Components without a registered source or with unparsable versions
        are skipped.
        """
        result = []
        for source_id, info in self.items():
            source = registry.find(source_id)
            if source is None:
                continue
            try:
                if source.is_newer(info):
                    result.append(source_id)
            except MalformedVersion as e:
                logger.warning("Cannot compare versions for %s: %s", source_id, e)
        return result

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _call(self, listener: UpdateListener, hook: str, *args: object) -> None:
        try:
            getattr(listener, hook)(*args)
        except Exception:
            logger.exception("Listener %r failed in %s", listener, hook)
