"""Boundaries for the game collaborators the predictor consumes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from contextlib import AbstractContextManager
from typing import Protocol

from geode_predictor.models import GameObject


class ObjectProvider(Protocol):
    """Resolves item ids into game objects."""

    def get_object(self, item_id: int, stack: int = 1) -> GameObject:
        """Return the object for ``item_id``."""


class GeodeService(Protocol):
    """Lists the kinds of geode that can be opened."""

    def retrieve_geodes(self, provider: ObjectProvider) -> Iterable[GameObject]:
        """Return geode kinds in display order."""


class TreasureCalculator(Protocol):
    """Computes what a geode yields at the game's current geode count."""

    def get_treasure_from_geode(self, geode: GameObject) -> GameObject:
        """Return the treasure for ``geode``."""


class StardewGame(Protocol):
    """Game state handle exposing the geode counter."""

    geode_count: int

    def with_temporary_changes(
        self, logger: logging.Logger | None = None
    ) -> AbstractContextManager[StardewGame]:
        """Return a scope that restores the game state on exit."""
