"""Shared setup for commands that open the interactive session."""

from __future__ import annotations

from pomotask_cli.config import get_config_manager
from pomotask_cli.models import DurationDefaults
from pomotask_cli.models.focus.state import SessionContext, SessionState
from pomotask_cli.models.focus.ui import SessionDisplay
from pomotask_cli.services.notification_service import DesktopNotifier
from pomotask_cli.services.task_service import get_task_service
from pomotask_cli.utils.ui.console import get_console


def build_session_context(defaults: DurationDefaults | None = None) -> SessionContext:
    """Wire the task store, notifier and settings from the active config."""
    config = get_config_manager().config
    return SessionContext(
        task_service=get_task_service(config.storage.db_path),
        notifier=DesktopNotifier(
            app_name=config.notifications.app_name,
            timeout=config.notifications.timeout,
            enabled=config.notifications.enabled,
        ),
        defaults=defaults or config.durations.to_defaults(),
        cycles_before_long_break=config.timer.cycles_before_long_break,
    )


async def run_session(state: SessionState, context: SessionContext) -> SessionState:
    """Run the full-screen session until the user quits."""
    config = get_config_manager().config
    display = SessionDisplay(get_console())
    return await display.run(
        state, context, tick_interval=config.timer.tick_interval_ms / 1000
    )
