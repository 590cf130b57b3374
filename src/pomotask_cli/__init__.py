"""Pomotask CLI - a terminal task list with a pomodoro timer."""

__version__ = "0.3.0"
