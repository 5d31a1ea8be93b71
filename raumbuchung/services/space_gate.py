import threading
from contextlib import contextmanager
from uuid import UUID


class _GateEntry:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        # Threads, die den Lock halten oder darauf warten
        self.users = 0


class SpaceGate:
    """
    Ein Lock pro Raum: pro Raum läuft immer nur ein Prüfen-und-Speichern.
    Verschiedene Räume blockieren sich nie gegenseitig.
    Einträge werden angelegt, sobald sie gebraucht werden, und entfernt,
    sobald niemand mehr darauf wartet.
    """

    def __init__(self):
        self._registry_lock = threading.Lock()
        self._entries: dict[UUID, _GateEntry] = {}

    @contextmanager
    def hold(self, space_id: UUID):
        with self._registry_lock:
            entry = self._entries.get(space_id)
            if entry is None:
                entry = _GateEntry()
                self._entries[space_id] = entry
            entry.users += 1

        entry.lock.acquire()
        try:
            yield
        finally:
            entry.lock.release()
            with self._registry_lock:
                entry.users -= 1
                if entry.users == 0 and self._entries.get(space_id) is entry:
                    del self._entries[space_id]

    def active_spaces(self) -> set[UUID]:
        with self._registry_lock:
            return set(self._entries)


space_gate = SpaceGate()
