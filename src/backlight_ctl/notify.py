from __future__ import annotations

import asyncio
import logging

from dbus_next import Variant
from dbus_next.aio import MessageBus

log = logging.getLogger("backlight_ctl.notify")

BUS = "org.freedesktop.Notifications"
OBJ = "/org/freedesktop/Notifications"

APP_NAME = "backlight-ctl"
EXPIRE_MS = 2000


def notification_args(percentage: int, icon_class: str, title: str) -> list:
    """Positional arguments of org.freedesktop.Notifications.Notify."""

    hints = {
        "value": Variant("i", int(percentage)),
        # Lets daemons that support it replace the previous bubble.
        "x-canonical-private-synchronous": Variant("s", APP_NAME),
        "x-dunst-stack-tag": Variant("s", APP_NAME),
    }
    return [
        APP_NAME,
        0,
        f"display-brightness-{icon_class}",
        title,
        f"{int(percentage)}%",
        [],
        hints,
        EXPIRE_MS,
    ]


async def _send(args: list) -> int:
    bus = await MessageBus().connect()
    try:
        introspection = await bus.introspect(BUS, OBJ)
        obj = bus.get_proxy_object(BUS, OBJ, introspection)
        iface = obj.get_interface(BUS)
        return int(await iface.call_notify(*args))
    finally:
        bus.disconnect()


def notify(percentage: int, icon_class: str, title: str) -> bool:
    """Show the new brightness as a desktop notification.

    Best effort: returns False instead of raising when no notification
    service is reachable.
    """

    try:
        nid = asyncio.run(_send(notification_args(percentage, icon_class, title)))
    except Exception as e:
        log.warning("could not send notification: %s", e)
        return False
    log.debug("notification %d sent (%d%%, %s)", nid, percentage, icon_class)
    return True
