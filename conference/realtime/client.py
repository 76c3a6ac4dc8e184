"""Realtime programme client for kiosks, dashboards and scripts.

:class:`ScheduleStatusTracker` keeps a local copy of the sessions and derives
each one's status from the current time, exactly as the web client does:

- a coarse tick refreshes ``current_time`` every few seconds;
- a precise one-shot timer fires at the next start/end boundary so the
  displayed status flips on time (only armed for delays under 24 hours);
- ``resume()`` refreshes and re-arms after the display was asleep.

:class:`LiveProgrammeClient` feeds the tracker from the Socket.IO feed and
resynchronises over REST whenever the socket (re)connects.

Nothing in here needs Django; it can run in any asyncio process.
"""

from __future__ import annotations

import asyncio
import json
import logging
import urllib.request
from collections.abc import Callable
from collections.abc import Iterable
from datetime import UTC
from datetime import datetime
from datetime import timedelta
from typing import Any

import socketio

from conference.schedules.status import next_transition
from conference.schedules.status import session_bounds
from conference.schedules.status import session_value
from conference.schedules.status import status_of

logger = logging.getLogger(__name__)

TICK_SECONDS = 5.0
MAX_ARM_SECONDS = 24 * 60 * 60
# End times are inclusive, so a session only reads as completed just after them.
BOUNDARY_SLACK = timedelta(microseconds=1)
SCHEDULES_PATH = "/api/v1/schedules/"
SOCKETIO_PATH = "api/socket"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _key(session: Any) -> str:
    return str(session_value(session, "id"))


class ScheduleStatusTracker:
    """Local session list plus the two timers that keep statuses fresh.

    ``clock`` returns an aware datetime; ``loop`` only needs ``call_later``.
    Both are injectable so the scheduling can be driven deterministically.
    """

    def __init__(
        self,
        sessions: Iterable[dict[str, Any]] = (),
        *,
        clock: Callable[[], datetime] = _utcnow,
        loop: Any | None = None,
        on_change: Callable[[ScheduleStatusTracker], None] | None = None,
        tick_seconds: float = TICK_SECONDS,
    ):
        self._clock = clock
        self._loop = loop
        self._on_change = on_change
        self._tick_seconds = tick_seconds
        self._sessions: dict[str, dict[str, Any]] = {}
        self._tick_handle: Any | None = None
        self._transition_handle: Any | None = None
        self._running = False
        self.current_time = clock()
        for session in sessions:
            self._sessions[_key(session)] = session

    # Reading ---------------------------------------------------------------
    @property
    def sessions(self) -> list[dict[str, Any]]:
        return sorted(self._sessions.values(), key=lambda s: session_bounds(s)[0])

    def get(self, session_id: Any) -> dict[str, Any] | None:
        return self._sessions.get(str(session_id))

    def status_of(self, session: Any) -> str:
        return status_of(session, self.current_time)

    def statuses(self) -> dict[str, str]:
        return {key: self.status_of(s) for key, s in self._sessions.items()}

    @property
    def running(self) -> bool:
        return self._running

    @property
    def transition_armed(self) -> bool:
        return self._transition_handle is not None

    # Lifecycle -------------------------------------------------------------
    def start(self) -> None:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._running = True
        self._restart_timers()

    def resume(self) -> None:
        """Display came back to the foreground: refresh now and re-arm."""

        if self._running:
            self._restart_timers()
        else:
            self.refresh()

    def close(self) -> None:
        self._running = False
        self._cancel_timers()

    def refresh(self) -> None:
        self.current_time = self._clock()
        if self._on_change is not None:
            self._on_change(self)

    # Socket handlers -------------------------------------------------------
    def upsert(self, session: dict[str, Any]) -> None:
        self._sessions[_key(session)] = session
        self._changed()

    def replace(self, session: dict[str, Any]) -> None:
        # An update for an entry we never saw is kept rather than dropped.
        self._sessions[_key(session)] = session
        self._changed()

    def remove(self, payload: dict[str, Any]) -> None:
        if self._sessions.pop(_key(payload), None) is not None:
            self._changed()

    def replace_all(self, sessions: Iterable[dict[str, Any]]) -> None:
        self._sessions = {_key(s): s for s in sessions}
        self._changed()

    # Timers ----------------------------------------------------------------
    def _changed(self) -> None:
        if self._running:
            self._restart_timers()
        else:
            self.refresh()

    def _cancel_timers(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
        if self._transition_handle is not None:
            self._transition_handle.cancel()
            self._transition_handle = None

    def _restart_timers(self) -> None:
        self._cancel_timers()
        self.refresh()
        self._schedule_tick()
        self._arm_transition()

    def _schedule_tick(self) -> None:
        self._tick_handle = self._loop.call_later(self._tick_seconds, self._on_tick)

    def _on_tick(self) -> None:
        self._tick_handle = None
        if not self._running:
            return
        self.refresh()
        self._schedule_tick()

    def _arm_transition(self) -> None:
        if self._transition_handle is not None:
            self._transition_handle.cancel()
            self._transition_handle = None
        target = next_transition(self._sessions.values(), self.current_time)
        if target is None:
            return
        delay = (target + BOUNDARY_SLACK - self._clock()).total_seconds()
        if 0 < delay < MAX_ARM_SECONDS:
            self._transition_handle = self._loop.call_later(
                delay,
                self._on_transition,
            )

    def _on_transition(self) -> None:
        self._transition_handle = None
        if not self._running:
            return
        self.refresh()
        self._arm_transition()


class LiveProgrammeClient:
    """Socket.IO subscriber that mirrors the programme into a tracker."""

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        tracker: ScheduleStatusTracker | None = None,
        sio_client: socketio.AsyncClient | None = None,
        socketio_path: str = SOCKETIO_PATH,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.tracker = tracker or ScheduleStatusTracker()
        self.socketio_path = socketio_path
        self.timeout = timeout
        self.sio = sio_client or socketio.AsyncClient(reconnection=True)
        self.sio.on("connect", self.on_connect)
        self.sio.on("disconnect", self.on_disconnect)
        self.sio.on("schedule:new", self.on_schedule_new)
        self.sio.on("schedule:update", self.on_schedule_update)
        self.sio.on("schedule:delete", self.on_schedule_delete)

    def _get_json(self, path: str) -> Any:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        req = urllib.request.Request(  # noqa: S310 - server URL by config
            f"{self.base_url}{path}",
            headers=headers,
            method="GET",
        )
        with urllib.request.urlopen(req, timeout=self.timeout) as resp:  # noqa: S310 - server URL by config
            return json.loads(resp.read().decode("utf-8"))

    async def fetch_sessions(self) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._get_json, SCHEDULES_PATH)

    async def resync(self) -> None:
        try:
            sessions = await self.fetch_sessions()
        except Exception as e:  # noqa: BLE001 - keep showing the last known list
            logger.warning("Programme resync failed: %s", e)
            return
        self.tracker.replace_all(sessions)
        logger.info("Programme resynced: %d session(s)", len(sessions))

    async def on_connect(self) -> None:
        await self.resync()

    def on_disconnect(self, *args) -> None:
        logger.info("Programme socket disconnected")

    def on_schedule_new(self, data: dict[str, Any]) -> None:
        self.tracker.upsert(data)

    def on_schedule_update(self, data: dict[str, Any]) -> None:
        self.tracker.replace(data)

    def on_schedule_delete(self, data: dict[str, Any]) -> None:
        self.tracker.remove(data)

    async def start(self) -> None:
        self.tracker.start()
        await self.sio.connect(
            self.base_url,
            socketio_path=self.socketio_path,
            auth={"token": self.token} if self.token else None,
        )

    async def close(self) -> None:
        self.tracker.close()
        if self.sio.connected:
            await self.sio.disconnect()

    async def wait(self) -> None:
        await self.sio.wait()
