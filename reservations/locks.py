import threading
from contextlib import contextmanager


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class ShowtimeLocks:
    """
    One exclusive section per showtime id.

    Reservations and cancellations for the same showtime run one at a time;
    different showtimes never wait on each other. Entries are dropped once
    nobody holds or waits on them.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._entries: dict = {}

    @contextmanager
    def hold(self, showtime_id):
        with self._guard:
            entry = self._entries.get(showtime_id)
            if entry is None:
                entry = self._entries[showtime_id] = _Entry()
            entry.users += 1

        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[showtime_id]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
