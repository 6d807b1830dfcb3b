from __future__ import annotations

import asyncio
import logging

from dbus_next import BusType
from dbus_next.aio import MessageBus

from backlight_ctl.errors import WriteRejected

log = logging.getLogger("backlight_ctl.logind")

BUS = "org.freedesktop.login1"
SESSION_OBJ = "/org/freedesktop/login1/session/auto"
SESSION_IFACE = "org.freedesktop.login1.Session"


async def _set_brightness(subsystem: str, name: str, value: int) -> None:
    bus = await MessageBus(bus_type=BusType.SYSTEM).connect()
    try:
        introspection = await bus.introspect(BUS, SESSION_OBJ)
        obj = bus.get_proxy_object(BUS, SESSION_OBJ, introspection)
        session = obj.get_interface(SESSION_IFACE)
        await session.call_set_brightness(subsystem, name, value)
    finally:
        bus.disconnect()


def set_brightness(subsystem: str, name: str, value: int) -> None:
    """Ask logind to write a backlight value on behalf of the session user."""

    log.debug("logind SetBrightness(%s, %s, %d)", subsystem, name, value)
    try:
        asyncio.run(_set_brightness(subsystem, name, value))
    except Exception as e:
        raise WriteRejected(f"logind: {e}") from e
