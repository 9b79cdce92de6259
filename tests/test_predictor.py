from __future__ import annotations

import pytest

from geode_predictor.errors import PredictionRangeError
from geode_predictor.models import GameObject, PredictionDirection
from geode_predictor.predictor import GeodePredictor
from geode_predictor.simulation import SimulationContext

GEODE = GameObject(535, "Geode")
FROZEN = GameObject(536, "Frozen Geode")
MAGMA = GameObject(537, "Magma Geode")


class StubProvider:
    def __init__(self, name: str = "default") -> None:
        self.name = name

    def get_object(self, item_id: int, stack: int = 1) -> GameObject:
        return GameObject(item_id, f"item-{item_id}", stack)


class StubService:
    def __init__(self, geodes: list[GameObject] | None = None) -> None:
        self.geodes = geodes if geodes is not None else [GEODE, FROZEN, MAGMA]
        self.calls = 0

    def retrieve_geodes(self, provider: StubProvider) -> list[GameObject]:
        self.calls += 1
        return list(self.geodes)


class CountingCalculator:
    """Treasure encodes the geode count it was computed at."""

    def __init__(self, game: SimulationContext) -> None:
        self.game = game
        self.calls = 0

    def get_treasure_from_geode(self, geode: GameObject) -> GameObject:
        self.calls += 1
        return GameObject(self.game.geode_count, f"{geode.name}@{self.game.geode_count}")


class FailingCalculator(CountingCalculator):
    def __init__(self, game: SimulationContext, fail_at: int) -> None:
        super().__init__(game)
        self.fail_at = fail_at

    def get_treasure_from_geode(self, geode: GameObject) -> GameObject:
        if self.game.geode_count == self.fail_at:
            raise RuntimeError("oracle exploded")
        return super().get_treasure_from_geode(geode)


class ScopeCountingContext(SimulationContext):
    def __init__(self, geode_count: int = 0) -> None:
        super().__init__(geode_count)
        self.scopes = 0

    def with_temporary_changes(self, logger=None):
        self.scopes += 1
        return super().with_temporary_changes(logger)


def _build(geode_count: int = 10, service: StubService | None = None):
    game = ScopeCountingContext(geode_count)
    calculator = CountingCalculator(game)
    predictor = GeodePredictor(
        service=service or StubService(),
        provider=StubProvider(),
        game=game,
        calculator=calculator,
    )
    return predictor, game, calculator


def _positions(predictions) -> list[int]:
    return [next(iter(prediction.values())).item_id for prediction in predictions]


def test_repeated_prediction_is_memoized() -> None:
    predictor, _, calculator = _build()

    first = predictor.predict_at_distance(2)
    calls_after_first = calculator.calls
    second = predictor.predict_at_distance(2)

    assert calls_after_first == 3
    assert calculator.calls == calls_after_first
    assert second is first
    assert first[FROZEN].name == "Frozen Geode@12"


def test_forward_and_backward_targets() -> None:
    predictor, _, _ = _build(geode_count=10)

    ahead = predictor.predict_at_distance(3, PredictionDirection.FORWARDS)
    behind = predictor.predict_at_distance(4, PredictionDirection.BACKWARDS)
    current = predictor.predict_at_distance(0)

    assert ahead[GEODE].item_id == 13
    assert behind[GEODE].item_id == 6
    assert current[GEODE].item_id == 10


def test_direction_accepts_plain_string() -> None:
    predictor, _, _ = _build(geode_count=10)

    assert predictor.predict_at_distance(2, "backwards")[GEODE].item_id == 8


def test_backward_past_first_geode_clamps_to_current() -> None:
    predictor, game, _ = _build(geode_count=3)

    clamped = predictor.predict_at_distance(5, PredictionDirection.BACKWARDS)

    assert clamped is predictor.predict_at_distance(0)
    assert clamped[GEODE].item_id == 3
    assert game.geode_count == 3


def test_backward_to_exactly_zero_is_not_clamped() -> None:
    predictor, _, _ = _build(geode_count=3)

    assert predictor.predict_at_distance(3, PredictionDirection.BACKWARDS)[GEODE].item_id == 0


def test_range_is_half_open() -> None:
    predictor, game, _ = _build(geode_count=10)

    predictions = predictor.predict_over_range(distance_ahead=2, distance_behind=0)

    assert len(predictions) == 2
    assert _positions(predictions) == [10, 11]
    assert predictor.cache.positions() == [10, 11]
    assert 12 not in predictor.cache
    assert game.geode_count == 10


def test_range_includes_history_behind() -> None:
    predictor, _, _ = _build(geode_count=10)

    assert _positions(predictor.predict_over_range(1, 3)) == [7, 8, 9, 10]


def test_range_behind_past_first_geode_clamps_to_current() -> None:
    predictor, _, _ = _build(geode_count=3)

    assert predictor.range_bounds(2, 5) == (3, 5)
    assert _positions(predictor.predict_over_range(2, 5)) == [3, 4]


def test_empty_range_returns_nothing() -> None:
    predictor, _, calculator = _build(geode_count=10)

    assert predictor.predict_over_range(0, 0) == []
    assert predictor.predict_positions(4, 4) == []
    assert calculator.calls == 0


def test_reversed_range_is_a_contract_failure() -> None:
    predictor, game, calculator = _build(geode_count=10)

    with pytest.raises(PredictionRangeError, match="must not be greater"):
        predictor.predict_positions(5, 4)

    assert calculator.calls == 0
    assert game.geode_count == 10


@pytest.mark.parametrize(
    "call",
    [
        lambda p: p.predict_at_distance(-1),
        lambda p: p.predict_over_range(-1, 0),
        lambda p: p.predict_over_range(0, -2),
        lambda p: p.predict_at_position(-1),
    ],
)
def test_negative_inputs_are_rejected(call) -> None:
    predictor, _, _ = _build()

    with pytest.raises(PredictionRangeError):
        call(predictor)


def test_single_scope_per_range_query() -> None:
    predictor, game, _ = _build(geode_count=10)

    predictor.predict_over_range(5, 5)
    predictor.predict_at_distance(1)

    assert game.scopes == 2


def test_position_restored_after_oracle_failure() -> None:
    game = SimulationContext(10)
    calculator = FailingCalculator(game, fail_at=12)
    predictor = GeodePredictor(StubService(), StubProvider(), game, calculator)

    with pytest.raises(RuntimeError, match="oracle exploded"):
        predictor.predict_over_range(5, 0)

    assert game.geode_count == 10
    assert predictor.cache.positions() == [10, 11]
    assert 12 not in predictor.cache


def test_catalog_failure_propagates_and_restores_position() -> None:
    class BrokenService:
        def retrieve_geodes(self, provider):
            raise ConnectionError("content unavailable")

    game = SimulationContext(4)
    predictor = GeodePredictor(BrokenService(), StubProvider(), game, CountingCalculator(game))

    with pytest.raises(ConnectionError):
        predictor.predict_at_distance(1)

    assert game.geode_count == 4
    assert len(predictor.cache) == 0


def test_every_prediction_covers_the_whole_catalog() -> None:
    predictor, _, _ = _build(geode_count=2)

    predictions = predictor.predict_over_range(3, 2) + [predictor.predict_at_distance(1)]

    for prediction in predictions:
        assert list(prediction) == predictor.geode_list
        assert len(prediction) == 3


def test_catalog_is_loaded_lazily_once() -> None:
    service = StubService()
    predictor, _, _ = _build(service=service)

    assert service.calls == 0
    predictor.predict_over_range(3, 3)
    predictor.predict_at_distance(7)
    assert predictor.geode_list == [GEODE, FROZEN, MAGMA]
    assert service.calls == 1


def test_reconfigure_provider_invalidates_cache_and_catalog() -> None:
    service = StubService()
    predictor, _, calculator = _build(service=service)
    predictor.predict_at_distance(1)
    calls_before = calculator.calls

    new_provider = StubProvider("modded")
    predictor.reconfigure(provider=new_provider)
    predictor.predict_at_distance(1)

    assert predictor.object_provider is new_provider
    assert calculator.calls == calls_before * 2
    assert service.calls == 2


def test_reconfigure_service_swaps_catalog() -> None:
    predictor, _, _ = _build()
    predictor.predict_at_distance(0)

    new_service = StubService([MAGMA])
    predictor.reconfigure(service=new_service)

    assert predictor.geode_service is new_service
    assert len(predictor.cache) == 0
    assert list(predictor.predict_at_distance(0)) == [MAGMA]


def test_reassigning_calculator_keeps_cached_predictions() -> None:
    predictor, game, calculator = _build()
    predictor.predict_at_distance(1)

    replacement = CountingCalculator(game)
    predictor.calculator = replacement
    predictor.predict_at_distance(1)

    assert replacement.calls == 0
    assert calculator.calls == 3


@pytest.mark.parametrize(
    "call",
    [
        lambda p: p.predict_at_distance(True),
        lambda p: p.predict_at_distance(1.5),
        lambda p: p.predict_over_range(2.0, 0),
        lambda p: p.predict_over_range(0, False),
        lambda p: p.predict_positions(1, 2.5),
    ],
)
def test_non_integer_inputs_are_rejected(call) -> None:
    predictor, game, calculator = _build(geode_count=10)

    with pytest.raises(PredictionRangeError, match="must be an int"):
        call(predictor)

    assert calculator.calls == 0
    assert game.scopes == 0
