"""Memoized geode predictions keyed by geode count."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from types import MappingProxyType

from geode_predictor.adapters.game import StardewGame, TreasureCalculator
from geode_predictor.models import GameObject, Prediction


class PredictionCache:
    """Maps a geode count to the treasure every catalog geode yields at that count.

    An entry always covers the whole catalog. Entries are only ever dropped
    all at once through :meth:`reset`.
    """

    def __init__(
        self,
        catalog_loader: Callable[[], Iterable[GameObject]],
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._catalog_loader = catalog_loader
        self._logger = logger or logging.getLogger("geode_predictor.cache")
        self._catalog: list[GameObject] | None = None
        self._predictions: dict[int, Prediction] = {}

    @property
    def catalog(self) -> list[GameObject]:
        """Geode kinds, loaded on first access after a reset."""
        if self._catalog is None:
            self._catalog = list(dict.fromkeys(self._catalog_loader()))
            self._logger.info("geode_catalog_loaded", extra={"geode_kinds": len(self._catalog)})
        return self._catalog

    def reset(self, catalog_loader: Callable[[], Iterable[GameObject]] | None = None) -> None:
        if catalog_loader is not None:
            self._catalog_loader = catalog_loader
        dropped = len(self._predictions)
        self._predictions = {}
        self._catalog = None
        self._logger.info("prediction_cache_reset", extra={"dropped_positions": dropped})

    def get_or_compute(
        self,
        position: int,
        *,
        game: StardewGame,
        calculator: TreasureCalculator,
    ) -> Prediction:
        """Return the prediction for ``position``, asking ``calculator`` only on a miss.

        On a miss ``game.geode_count`` is left at ``position``; callers hold
        the game's temporary-changes scope around this call.
        """
        cached = self._predictions.get(position)
        if cached is not None:
            return cached

        self._logger.debug("prediction_cache_miss", extra={"position": position})
        game.geode_count = position
        prediction = MappingProxyType(
            {geode: calculator.get_treasure_from_geode(geode) for geode in self.catalog}
        )
        self._predictions[position] = prediction
        return prediction

    def positions(self) -> list[int]:
        return sorted(self._predictions)

    def __contains__(self, position: object) -> bool:
        return position in self._predictions

    def __len__(self) -> int:
        return len(self._predictions)
