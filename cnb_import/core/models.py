"""Domain types shared by the importer, storage and CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

# {"CZK": {"EUR": 0.0395, ...}}
RateTable = Dict[str, Dict[str, float]]

BASE_CURRENCY = "CZK"


class MessageKind(str, Enum):
    """Tag of a message log entry."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"

    @property
    def log_level(self) -> int:
        return {
            MessageKind.SUCCESS: logging.INFO,
            MessageKind.WARNING: logging.WARNING,
            MessageKind.ERROR: logging.ERROR,
        }[self]


@dataclass(frozen=True)
class ImportMessage:
    kind: MessageKind
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass
class MessageLog:
    """Ordered, append-only log of one import run."""

    entries: list[ImportMessage] = field(default_factory=list)

    def add(self, kind: MessageKind, text: str) -> ImportMessage:
        msg = ImportMessage(kind=kind, text=text)
        self.entries.append(msg)
        return msg

    def texts(self) -> list[str]:
        return [m.text for m in self.entries]


@dataclass(frozen=True)
class FeedHeader:
    """Issue date and sequence number from the first line of the feed."""

    issued: str
    sequence: int | None
