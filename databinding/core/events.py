from loguru import logger
from typing import Callable, List


class Signal:
    """
    A simple observer pattern implementation (Synchronous).
    Allows subscribers to connect to this signal and receive notifications.
    Equivalent to Qt's Signal or C#'s event.

    Subscribers run in connection order on the emitting thread. An exception
    raised by a subscriber propagates to the caller of emit().
    """
    def __init__(self, name: str = "Signal"):
        self.name = name
        self._subscribers: List[Callable] = []
        # Outstanding connect() handles per subscriber, aligned with _subscribers
        self._refs: List[int] = []

    def connect(self, callback: Callable) -> Callable[[], None]:
        """
        Connect a callback function to this signal.

        A callback connected several times is still called once per emit.
        Each connect() returns its own handle, and the callback stays
        connected until every handle has been released (or until
        disconnect() removes it outright).

        Returns:
            A zero-argument function that releases this connection.
        """
        if callback in self._subscribers:
            self._refs[self._subscribers.index(callback)] += 1
        else:
            self._subscribers.append(callback)
            self._refs.append(1)

        released = False

        def release():
            nonlocal released
            if released:
                return
            released = True
            self._release(callback)

        return release

    def _release(self, callback: Callable):
        if callback not in self._subscribers:
            return
        i = self._subscribers.index(callback)
        self._refs[i] -= 1
        if self._refs[i] <= 0:
            del self._subscribers[i]
            del self._refs[i]

    def disconnect(self, callback: Callable):
        """Disconnect a callback function from this signal, whatever its handle count."""
        if callback in self._subscribers:
            i = self._subscribers.index(callback)
            del self._subscribers[i]
            del self._refs[i]

    def emit(self, *args, **kwargs):
        """Broadcast arguments to all subscribers synchronously."""
        # Snapshot: subscribers may disconnect themselves while being notified
        for sub in list(self._subscribers):
            try:
                sub(*args, **kwargs)
            except Exception as e:
                logger.debug(f"Signal '{self.name}' subscriber '{sub}' raised: {e}")
                raise

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"<Signal {self.name!r} subscribers={len(self._subscribers)}>"
