"""Desktop notifications for phase changes."""

from __future__ import annotations

from plyer import notification

from pomotask_cli.utils.logger import get_logger


class DesktopNotifier:
    """Shows a native desktop notification through plyer.

    Failures propagate to the caller; the cycle engine logs and drops them.
    """

    def __init__(self, app_name: str = "pomotask", timeout: int = 10, enabled: bool = True):
        self.app_name = app_name
        self.timeout = timeout
        self.enabled = enabled

    def notify(self, message: str) -> None:
        if not self.enabled:
            get_logger().debug("notification suppressed: %s", message)
            return
        notification.notify(
            title=self.app_name,
            message=message,
            app_name=self.app_name,
            timeout=self.timeout,
        )
