"""
Status notifications for bkmerge.

The merge core never reports progress itself; the session emits a
notification per file parsed or rejected and per merge written, and a
Notifier decides where those go (a log, the console, a test).
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class NotificationKind(Enum):
    """Kinds of status signal raised during a merge session."""
    PARSE_SUCCESS = "parse-success"
    PARSE_FAILURE = "parse-failure"
    INVALID_FILE_TYPE = "invalid-type"
    MERGE_SUCCESS = "merge-success"


DESTRUCTIVE_KINDS = (NotificationKind.PARSE_FAILURE, NotificationKind.INVALID_FILE_TYPE)


@dataclass
class Notification:
    """A single status signal."""
    kind: NotificationKind
    title: str
    description: str
    source: Optional[str] = None

    @property
    def destructive(self) -> bool:
        return self.kind in DESTRUCTIVE_KINDS

    def to_dict(self) -> dict:
        return {
            'kind': self.kind.value,
            'title': self.title,
            'description': self.description,
            'source': self.source,
        }


def parse_success(source: str = None) -> Notification:
    return Notification(NotificationKind.PARSE_SUCCESS, "Success",
                        "Bookmarks parsed successfully", source)


def parse_failure(reason: str, source: str = None) -> Notification:
    return Notification(NotificationKind.PARSE_FAILURE, "Parse failed", reason, source)


def invalid_file_type(source: str = None) -> Notification:
    return Notification(NotificationKind.INVALID_FILE_TYPE, "Invalid file type",
                        "Please only upload HTML files", source)


def merge_success(source: str = None) -> Notification:
    return Notification(NotificationKind.MERGE_SUCCESS, "Success",
                        "Bookmarks merged and downloaded successfully", source)


class Notifier:
    """Records notifications and logs them."""

    def __init__(self):
        self.history: List[Notification] = []

    def notify(self, notification: Notification):
        self.history.append(notification)
        level = logging.WARNING if notification.destructive else logging.INFO
        where = f" [{notification.source}]" if notification.source else ""
        logger.log(level, f"{notification.title}: {notification.description}{where}")

    def of_kind(self, kind: NotificationKind) -> List[Notification]:
        return [n for n in self.history if n.kind == kind]


class ConsoleNotifier(Notifier):
    """Notifier that also prints each notification with rich."""

    def __init__(self, console: Console = None, quiet: bool = False):
        super().__init__()
        self.console = console or Console()
        self.quiet = quiet

    def notify(self, notification: Notification):
        super().notify(notification)
        if self.quiet and not notification.destructive:
            return

        style = "red" if notification.destructive else "green"
        where = f" ({escape(notification.source)})" if notification.source else ""
        self.console.print(
            f"[{style}]{notification.title}:[/{style}] {escape(notification.description)}{where}",
            highlight=False,
        )
