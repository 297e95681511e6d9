from __future__ import annotations
import asyncio
import logging
from typing import Any, Optional, Set, Tuple

from .session import GameSession
from .models import IntentResult
from ..dictionary import DictionaryLookup, DictionaryResult, LOOKUP_ERROR_MESSAGE


logger = logging.getLogger(__name__)

TICK_INTERVAL = 1.0  # seconds

_TICK = "__tick__"
_LOOKUP = "__lookup__"


class SessionRunner:
    """Drives a GameSession from a wall clock and a dictionary service.

    Intents, timer ticks and dictionary results all go through one queue
    and are applied one at a time by a single consumer task, so the
    session only ever has one writer. Each timer instance gets its own
    ticker, started when the timer is armed, so the first tick lands one
    full interval after arming. Ticks carry the generation they were
    scheduled for; the session drops them if the phase was reset in the
    meantime.
    """

    def __init__(
        self,
        session: GameSession,
        lookup: Optional[DictionaryLookup] = None,
        tick_interval: float = TICK_INTERVAL,
    ):
        self.session = session
        self.lookup = lookup
        self.tick_interval = tick_interval
        self._queue: asyncio.Queue = asyncio.Queue()
        self._consumer: Optional[asyncio.Task] = None
        self._ticker: Optional[asyncio.Task] = None
        self._ticker_token: Optional[int] = None
        self._lookups: Set[asyncio.Task] = set()
        self._running = False

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._consumer = asyncio.create_task(self._consume())
        self._sync_ticker()

    async def stop(self) -> None:
        self._running = False
        tasks = [t for t in (self._consumer, self._ticker) if t is not None]
        tasks += list(self._lookups)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._consumer = None
        self._ticker = None
        self._ticker_token = None
        self._lookups.clear()

    async def __aenter__(self) -> "SessionRunner":
        await self.start()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.stop()

    async def submit(self, intent: str, *args: Any) -> IntentResult:
        """Queue an intent (a GameSession method name) and wait for its result."""
        if not hasattr(self.session, intent) or intent.startswith("_"):
            raise ValueError(f"Unknown intent '{intent}'")
        future = asyncio.get_running_loop().create_future()
        await self._queue.put((intent, args, future))
        return await future

    def _sync_ticker(self) -> None:
        """Give the current timer instance its own ticker, dropping the old one."""
        timer = self.session.timer
        token = timer.token if timer.is_active else None
        if token == self._ticker_token:
            return
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        self._ticker_token = token
        if token is not None:
            self._ticker = asyncio.create_task(self._tick(token))

    async def _tick(self, token: int) -> None:
        try:
            while True:
                await asyncio.sleep(self.tick_interval)
                await self._queue.put((_TICK, (token,), None))
        except asyncio.CancelledError:
            return

    async def _consume(self) -> None:
        try:
            while True:
                intent, args, future = await self._queue.get()
                try:
                    result = self._apply(intent, args)
                except Exception as exc:
                    if future is None:
                        logger.exception("Applying %s failed", intent)
                    elif not future.cancelled():
                        future.set_exception(exc)
                else:
                    if future is not None and not future.cancelled():
                        future.set_result(result)
                self._sync_ticker()
                self._dispatch_lookups()
        except asyncio.CancelledError:
            return

    def _apply(self, intent: str, args: Tuple[Any, ...]) -> Any:
        if intent == _TICK:
            return self.session.on_tick(*args)
        if intent == _LOOKUP:
            return self.session.dictionary_result_arrived(*args)
        return getattr(self.session, intent)(*args)

    def _dispatch_lookups(self) -> None:
        words = self.session.take_lookup_requests()
        if self.lookup is None:
            return
        for word in words:
            task = asyncio.create_task(self._check(word))
            self._lookups.add(task)
            task.add_done_callback(self._lookups.discard)

    async def _check(self, word: str) -> None:
        try:
            result = await asyncio.to_thread(self.lookup.check_word, word)
        except Exception as exc:
            # Lookups only feed the display
            logger.warning("Dictionary lookup for '%s' raised: %s", word, exc)
            result = DictionaryResult(word=word, error=LOOKUP_ERROR_MESSAGE)
        await self._queue.put((_LOOKUP, (word, result), None))
