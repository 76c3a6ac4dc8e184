"""Realtime fan-out of schedule, announcement, event, menu and complaint changes.

Django views publish through a :class:`~conference.realtime.broadcasters.Broadcaster`
after their transaction commits. The Socket.IO server itself lives in
:mod:`conference.realtime.socketio` and is mounted by ``config.asgi``.
"""
