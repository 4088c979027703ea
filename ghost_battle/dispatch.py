from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

logger = logging.getLogger(__name__)


KeyHandler = Callable[[str], None]


class KeyDispatcher:
    """Deliver each distinct key token to a handler exactly once.

    Hosts that re-render every cycle pass the same token repeatedly; only a
    change of value (or a clear to ``None`` and back) is treated as a new press.
    The handler may be a fresh closure on every call. Replay is keyed on the
    token value alone.
    """

    def __init__(self) -> None:
        self._last: str | None = None

    @property
    def last_token(self) -> str | None:
        return self._last

    def feed(self, token: str | None, handler: KeyHandler) -> bool:
        """Returns True if ``handler`` was invoked."""

        if token == "":
            token = None
        if token == self._last:
            return False
        self._last = token
        if token is None:
            return False
        handler(token)
        return True

    def reset(self) -> None:
        self._last = None


class InputChannel:
    """FIFO of discrete key tokens delivered one per cycle.

    ``pump`` hands the next token to the sink followed by a clearing ``None``,
    so two presses of the same key reach a ``KeyDispatcher`` as two distinct
    values. Once ``max_pending`` presses are queued, further posts are dropped.
    """

    def __init__(self, *, max_pending: int = 32) -> None:
        if max_pending < 1:
            raise ValueError("max_pending must be >= 1")
        self._pending: deque[str] = deque()
        self._max_pending = int(max_pending)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def post(self, token: str) -> None:
        if token == "":
            return
        if len(self._pending) >= self._max_pending:
            # Earlier presses keep their order; the overflow press is lost.
            logger.debug("input channel full, dropped %r", token)
            return
        self._pending.append(token)

    def pump(self, sink: Callable[[str | None], None]) -> str | None:
        """Deliver one queued token. Returns the token delivered, if any."""

        if not self._pending:
            return None
        token = self._pending.popleft()
        sink(token)
        sink(None)
        return token

    def clear(self) -> None:
        self._pending.clear()
