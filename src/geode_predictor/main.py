"""CLI startup entrypoint for Geode Predictor."""

from __future__ import annotations

import typer
from rich import print
from rich.table import Table

from geode_predictor.config import settings
from geode_predictor.demo import DemoGeodeService, DemoObjectProvider, SeededTreasureCalculator
from geode_predictor.errors import PredictionRangeError
from geode_predictor.models import Prediction, PredictionDirection
from geode_predictor.predictor import GeodePredictor
from geode_predictor.simulation import SimulationContext
from geode_predictor.telemetry import configure_logging

app = typer.Typer(help="Geode Predictor entrypoint")


def _build_predictor(geodes_cracked: int | None = None, seed: int | None = None) -> GeodePredictor:
    configure_logging(settings.log_level)
    game = SimulationContext(
        geodes_cracked if geodes_cracked is not None else settings.geodes_cracked,
        unique_id=seed if seed is not None else settings.game_unique_id,
    )
    provider = DemoObjectProvider()
    return GeodePredictor(
        service=DemoGeodeService(),
        provider=provider,
        game=game,
        calculator=SeededTreasureCalculator(game, provider),
    )


def _format_prediction(prediction: Prediction) -> dict[str, str]:
    return {geode.name: str(treasure) for geode, treasure in prediction.items()}


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(settings.model_dump())


@app.command()
def catalog() -> None:
    """List the geode kinds predictions are made for."""
    predictor = _build_predictor()
    print({"geodes": [f"{geode.item_id}: {geode.name}" for geode in predictor.geode_list]})


@app.command()
def predict(
    distance: int = typer.Option(None, min=0, help="How many geodes away to look"),
    direction: PredictionDirection = typer.Option(PredictionDirection.FORWARDS, help="forwards/backwards"),
    geodes_cracked: int = typer.Option(None, min=0, help="Geodes cracked so far"),
    seed: int = typer.Option(None, min=0, help="Unique id of the save"),
) -> None:
    """Predict the treasure of every geode kind at one point in the history."""
    predictor = _build_predictor(geodes_cracked=geodes_cracked, seed=seed)
    steps = settings.default_distance if distance is None else distance
    prediction = predictor.predict_at_distance(steps, direction)
    print(
        {
            "geodes_cracked": predictor.game.geode_count,
            "distance": steps,
            "direction": direction.value,
            "prediction": _format_prediction(prediction),
        }
    )


@app.command("predict-range")
def predict_range(
    ahead: int = typer.Option(None, min=0, help="How many geodes ahead to look"),
    behind: int = typer.Option(None, min=0, help="How many geodes behind to look"),
    geodes_cracked: int = typer.Option(None, min=0, help="Geodes cracked so far"),
    seed: int = typer.Option(None, min=0, help="Unique id of the save"),
) -> None:
    """Show a table of predictions around the current geode count."""
    predictor = _build_predictor(geodes_cracked=geodes_cracked, seed=seed)
    distance_ahead = settings.default_range_ahead if ahead is None else ahead
    distance_behind = settings.default_range_behind if behind is None else behind

    try:
        predictions = predictor.predict_over_range(distance_ahead, distance_behind)
    except PredictionRangeError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    current = predictor.game.geode_count
    first, _ = predictor.range_bounds(distance_ahead, distance_behind)
    table = Table(title=f"Geode predictions (cracked: {current})")
    table.add_column("Cracked", justify="right")
    for geode in predictor.geode_list:
        table.add_column(geode.name)
    for offset, prediction in enumerate(predictions):
        position = first + offset
        label = f"{position}*" if position == current else str(position)
        table.add_row(label, *(str(prediction[geode]) for geode in predictor.geode_list))
    print(table)


if __name__ == "__main__":
    app()
