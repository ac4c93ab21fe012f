"""
The fixed command vocabulary.

``PHRASE_TABLE`` maps normalized English phrases (lowercase letters and
spaces) to :class:`Command` values.  Several phrases can name the same
command.  The table is read-only and its declaration order is the order in
which the matcher tries substring matches.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

WAKE_PHRASE = "synapse"


class Command(str, Enum):
    SCAN = "scan"
    METRICS = "metrics"
    GEO = "geo"
    INDOOR = "indoor"
    THREATS = "threats"
    DEVICES = "devices"
    SECURITY = "security"
    STOP = "stop"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CommandEvent:
    """A decoded command together with the utterance it came from."""

    command: Command
    raw: str


PhraseTable = Mapping[str, Command]

PHRASE_TABLE: PhraseTable = MappingProxyType(
    {
        "scan": Command.SCAN,
        "run scan": Command.SCAN,
        "start scan": Command.SCAN,
        "metrics": Command.METRICS,
        "show metrics": Command.METRICS,
        "system metrics": Command.METRICS,
        "geo": Command.GEO,
        "geo view": Command.GEO,
        "outdoor": Command.GEO,
        "outdoor map": Command.GEO,
        "indoor": Command.INDOOR,
        "indoor mode": Command.INDOOR,
        "indoor map": Command.INDOOR,
        "threat": Command.THREATS,
        "threats": Command.THREATS,
        "threat feed": Command.THREATS,
        "threat intel": Command.THREATS,
        "devices": Command.DEVICES,
        "device manager": Command.DEVICES,
        "manage devices": Command.DEVICES,
        "security": Command.SECURITY,
        "security monitor": Command.SECURITY,
        "stop": Command.STOP,
        "stop listening": Command.STOP,
    }
)


def phrases_for(command: Command, table: PhraseTable = PHRASE_TABLE) -> list[str]:
    """Return every phrase in ``table`` that maps to ``command``, in table order."""
    return [phrase for phrase, cmd in table.items() if cmd is command]
