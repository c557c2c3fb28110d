"""
slashargs message sinks.

Every usage line and every failure message goes through a single-method
sink, one write() call per line, in emission order.

- Messenger: the protocol (anything with write(line)).
- ConsoleMessenger: default sink, prints through a rich Console on stdout.
  Lines are printed as plain Text: usage tokens like "[/os:value]" must not
  be read as console markup.
- RecordingMessenger: keeps the lines in memory (embedding and tests).
"""
from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.text import Text

from .utils import *


@runtime_checkable
class Messenger(Protocol):
    def write(self, line, /): ...


class ConsoleMessenger:
    """
    Write each line to a rich Console (stdout unless a console is given).
    """

    def __init__(self, console=Unset, /):
        if not isinstance(console, Console | Unset):
            raise TypeError("ConsoleMessenger() argument must be a rich console")
        self._console = Console(highlight=False) if console is Unset else console

    @property
    def console(self):
        return self._console

    def write(self, line, /):
        self._console.print(Text(line), soft_wrap=True)


class RecordingMessenger:
    """
    Keep every written line, in order.
    """

    def __init__(self):
        self._lines = []

    lines = mirror("lines")

    def write(self, line, /):
        if not isinstance(line, str):
            raise TypeError("write() argument must be a string")
        self._lines.append(line)

    def __str__(self):
        return "\n".join(self._lines)


__all__ = (
    "Messenger",
    "ConsoleMessenger",
    "RecordingMessenger",
)
