"""
User-facing notifications.

Mutations report their outcome through a Notifier, the SDK's stand-in
for UI toasts.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, runtime_checkable

from rich.console import Console

logger = logging.getLogger(__name__)


class ToastVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Toast:
    title: str
    description: str = ""
    variant: ToastVariant = ToastVariant.DEFAULT


@runtime_checkable
class Notifier(Protocol):
    def notify(self, toast: Toast) -> None:
        ...


class RecordingNotifier(Notifier):
    """Keeps every toast in order."""

    def __init__(self) -> None:
        self.toasts: list[Toast] = []

    def notify(self, toast: Toast) -> None:
        self.toasts.append(toast)


class LoggingNotifier(Notifier):
    def notify(self, toast: Toast) -> None:
        if toast.variant is ToastVariant.DESTRUCTIVE:
            logger.warning(f"{toast.title}: {toast.description}")
        else:
            logger.info(f"{toast.title}: {toast.description}")


class ConsoleNotifier(Notifier):
    """Prints toasts to a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    def notify(self, toast: Toast) -> None:
        style = "bold red" if toast.variant is ToastVariant.DESTRUCTIVE else "bold green"
        self._console.print(f"[{style}]{toast.title}[/{style}] {toast.description}")
