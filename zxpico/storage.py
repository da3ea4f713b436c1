"""Kiosk detection, snapshot file lists and snapshot stepping."""

from __future__ import annotations

import os
from typing import Optional


class FileExists:
    """Checks whether a named file is present in a folder."""

    def __init__(self, folder, name):
        self.folder = os.fspath(folder)
        self.name = name

    def exists(self) -> bool:
        return os.path.exists(os.path.join(self.folder, self.name))


class Kiosk:
    """Kiosk mode disables saving and the menu; off by default."""

    def is_kiosk(self) -> bool:
        return False


class FileKiosk(Kiosk):
    """Kiosk mode is on when the folder holds a file named kiosk.txt."""

    def __init__(self, folder):
        self._exists = FileExists(folder, "kiosk.txt")

    def is_kiosk(self) -> bool:
        return self._exists.exists()


class SpectrumFile:
    """A file name in a circular doubly linked list."""

    def __init__(self, name: str):
        self.name = str(name)
        self._prev: SpectrumFile = self
        self._next: SpectrumFile = self

    @property
    def prev(self) -> "SpectrumFile":
        return self._prev

    @property
    def next(self) -> "SpectrumFile":
        return self._next

    def link(self, other: "SpectrumFile") -> None:
        """Insert this file after another."""
        self._next = other._next
        self._next._prev = self
        other._next = self
        self._prev = other


class FileLoop:
    """Steps through snapshots by asking the menu to load the next one."""

    def __init__(self):
        self.menu: Optional[object] = None

    def next(self, spectrum) -> None:
        if self.menu is not None:
            self.menu.next_snap(1)

    def prev(self, spectrum) -> None:
        if self.menu is not None:
            self.menu.next_snap(-1)

    def curr(self, spectrum) -> None:
        if self.menu is not None:
            self.menu.next_snap(0)

    def reload(self) -> bool:
        """Report whether a menu is attached to step through.

        Nothing is cached here; the menu lists the snapshots itself.
        """
        return self.menu is not None