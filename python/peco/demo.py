"""Demonstration class used by the ``peco`` command when no target is given."""

from __future__ import annotations

from .accessor import PecoBase


class Cls(PecoBase):
    Id: int = 0
    Name: str = ""
