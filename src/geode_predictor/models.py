from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


class PredictionDirection(str, Enum):
    """Which way along the geode history to look."""

    FORWARDS = "forwards"
    BACKWARDS = "backwards"


@dataclass(frozen=True, slots=True)
class GameObject:
    """An item identity, used both for geode kinds and the treasure they yield."""

    item_id: int
    name: str
    stack: int = 1

    def __str__(self) -> str:
        if self.stack > 1:
            return f"{self.name} x{self.stack}"
        return self.name


Prediction = Mapping[GameObject, GameObject]
