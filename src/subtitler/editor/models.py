"""Caption side map entries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Caption:
    uuid: str
    text: str = ""
