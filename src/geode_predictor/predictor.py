"""Predicts what cracking a geode will yield at any point in the geode history."""

from __future__ import annotations

import logging

from geode_predictor.adapters.game import GeodeService, ObjectProvider, StardewGame, TreasureCalculator
from geode_predictor.cache import PredictionCache
from geode_predictor.errors import PredictionRangeError
from geode_predictor.models import GameObject, Prediction, PredictionDirection


def _require_non_negative(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PredictionRangeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise PredictionRangeError(f"{name} must not be negative, got {value}")


class GeodePredictor:
    """Memoizing forecaster over the game's geode counter.

    Every uncached position is evaluated by moving ``game.geode_count`` inside
    ``game.with_temporary_changes`` and asking the calculator about each
    geode kind. Swapping the geode service or object provider through
    :meth:`reconfigure` throws away every prediction and the geode catalog.
    """

    def __init__(
        self,
        service: GeodeService,
        provider: ObjectProvider,
        game: StardewGame,
        calculator: TreasureCalculator,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._service = service
        self._provider = provider
        self.game = game
        self.calculator = calculator
        self.logger = logger or logging.getLogger("geode_predictor.predictor")
        self._cache = PredictionCache(self._load_catalog, logger=self.logger)

    @property
    def geode_service(self) -> GeodeService:
        return self._service

    @property
    def object_provider(self) -> ObjectProvider:
        return self._provider

    @property
    def geode_list(self) -> list[GameObject]:
        """Geode kinds this predictor reports on."""
        return self._cache.catalog

    @property
    def cache(self) -> PredictionCache:
        return self._cache

    def reconfigure(
        self,
        service: GeodeService | None = None,
        provider: ObjectProvider | None = None,
    ) -> None:
        """Swap the geode service and/or object provider and drop all cached work."""
        if service is not None:
            self._service = service
        if provider is not None:
            self._provider = provider
        self._cache.reset()

    def predict_at_distance(
        self,
        distance: int = 1,
        direction: PredictionDirection = PredictionDirection.FORWARDS,
    ) -> Prediction:
        """Predict the treasures of the geode ``distance`` cracks away.

        Looking backwards past the first geode clamps to the current count.
        """
        _require_non_negative("distance", distance)
        current = self.game.geode_count
        direction = PredictionDirection(direction)
        if direction is PredictionDirection.BACKWARDS:
            target = current if distance > current else current - distance
        else:
            target = current + distance
        return self.predict_at_position(target)

    def predict_over_range(self, distance_ahead: int, distance_behind: int) -> list[Prediction]:
        """Predict each geode from ``distance_behind`` cracks ago up to ``distance_ahead`` cracks on (exclusive)."""
        start, end = self.range_bounds(distance_ahead, distance_behind)
        return self.predict_positions(start, end)

    def range_bounds(self, distance_ahead: int, distance_behind: int) -> tuple[int, int]:
        """Return the half-open ``(start, end)`` positions a range query covers."""
        _require_non_negative("distance_ahead", distance_ahead)
        _require_non_negative("distance_behind", distance_behind)
        current = self.game.geode_count
        start = current if distance_behind > current else current - distance_behind
        return start, current + distance_ahead

    def predict_at_position(self, position: int) -> Prediction:
        return self.predict_positions(position, position + 1)[0]

    def predict_positions(self, first: int, last: int) -> list[Prediction]:
        """Predict every position in ``[first, last)``, in increasing order."""
        _require_non_negative("first", first)
        _require_non_negative("last", last)
        if first > last:
            raise PredictionRangeError(f"The first count ({first}) must not be greater than the last count ({last})")

        self.logger.debug("prediction_range_requested", extra={"first": first, "last": last})
        results: list[Prediction] = []
        # Collected eagerly: the scope must be closed before returning.
        with self.game.with_temporary_changes(self.logger):
            for position in range(first, last):
                results.append(self._cache.get_or_compute(position, game=self.game, calculator=self.calculator))
        return results

    def _load_catalog(self) -> list[GameObject]:
        return list(self._service.retrieve_geodes(self._provider))
