"""Command envelope shared across connectors and the dispatcher."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class OnOffType(str, enum.Enum):
    ON = "ON"
    OFF = "OFF"


class UpDownType(str, enum.Enum):
    UP = "UP"
    DOWN = "DOWN"


class IncreaseDecreaseType(str, enum.Enum):
    INCREASE = "INCREASE"
    DECREASE = "DECREASE"


class StopMoveType(str, enum.Enum):
    STOP = "STOP"
    MOVE = "MOVE"


def command_repr(command: Any) -> str:
    """Canonical string form of a command, used as the mapping lookup key.

    Enum members render as their value (``OnOffType.ON`` -> ``"ON"``), bytes
    are decoded as UTF-8 and everything else goes through ``str``.
    """
    if isinstance(command, enum.Enum):
        value = command.value
        return value if isinstance(value, str) else command.name
    if isinstance(command, (bytes, bytearray)):
        return bytes(command).decode("utf-8")
    return str(command)


@dataclass(frozen=True, slots=True)
class CommandEvent:
    """A command addressed to a named item."""

    entity_name: str
    command: Any

    @property
    def command_key(self) -> str:
        return command_repr(self.command)
