"""Named in-process broadcast channels."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable

# The requested buffer size is rounded up to the next power of two.
_REQUESTED_CAPACITY = 100
_BUFFER = 1 << (_REQUESTED_CAPACITY - 1).bit_length()


class ChannelError(Exception):
    """A channel operation failed."""


class Lagged(Exception):
    """The receiver fell behind and ``skipped`` messages were dropped."""

    def __init__(self, skipped: int) -> None:
        super().__init__(f"receiver lagged by {skipped} messages")
        self.skipped = skipped


class _Channel:
    def __init__(self) -> None:
        self.cond = threading.Condition()
        self.buffer: deque[tuple[int, str]] = deque(maxlen=_BUFFER)
        self.next_seq = 0
        self.receivers = 0

    def subscribe(self) -> Receiver:
        with self.cond:
            self.receivers += 1
            return Receiver(self, self.next_seq)

    def send(self, msg: str) -> None:
        with self.cond:
            if self.receivers == 0:
                raise ChannelError("channel closed")
            self.buffer.append((self.next_seq, msg))
            self.next_seq += 1
            self.cond.notify_all()


class Receiver:
    """One subscriber's view of a channel; sees messages sent after it subscribed."""

    def __init__(self, channel: _Channel, position: int) -> None:
        self._channel = channel
        self._position = position
        self._closed = False

    def recv(self, timeout: float | None = None) -> str:
        """Wait for the next message.

        Raises Lagged when messages were dropped before they could be read,
        and TimeoutError when nothing arrives within ``timeout`` seconds.
        """
        chan = self._channel
        with chan.cond:
            if not chan.cond.wait_for(lambda: chan.next_seq > self._position, timeout):
                raise TimeoutError("no message received")
            oldest = chan.buffer[0][0]
            if self._position < oldest:
                skipped = oldest - self._position
                self._position = oldest
                raise Lagged(skipped)
            msg = chan.buffer[self._position - oldest][1]
            self._position += 1
            return msg

    def close(self) -> None:
        """Unsubscribe from the channel."""
        with self._channel.cond:
            if not self._closed:
                self._closed = True
                self._channel.receivers -= 1


_CHANNELS: dict[str, _Channel] = {}
_LOCK = threading.Lock()


def create(name: str) -> Receiver:
    """Create a named channel and return its first receiver."""
    with _LOCK:
        if name in _CHANNELS:
            raise ChannelError(f"Channel '{name}' already exists")
        channel = _Channel()
        _CHANNELS[name] = channel
        return channel.subscribe()


def listen(name: str) -> Receiver:
    """Subscribe to an existing named channel."""
    with _LOCK:
        channel = _CHANNELS.get(name)
        if channel is None:
            raise ChannelError(f"Channel '{name}' not found")
        return channel.subscribe()


def listen_spawn(name: str, callback: Callable[[str], None]) -> threading.Thread:
    """Call ``callback`` with every message on ``name`` from a background thread."""
    receiver = listen(name)

    def run() -> None:
        while True:
            try:
                callback(receiver.recv())
            except Lagged:
                continue

    thread = threading.Thread(target=run, name=f"nyannel-{name}", daemon=True)
    thread.start()
    return thread


def send(name: str, msg: str) -> None:
    """Broadcast ``msg`` to every receiver of ``name``."""
    with _LOCK:
        channel = _CHANNELS.get(name)
    if channel is None:
        raise ChannelError(f"Channel '{name}' not found")
    channel.send(msg)