"""Memoizing geode treasure predictor."""

from .cache import PredictionCache
from .errors import PredictionRangeError, StateRestoreError
from .models import GameObject, Prediction, PredictionDirection
from .predictor import GeodePredictor
from .simulation import SimulationContext

__all__ = [
    "GameObject",
    "GeodePredictor",
    "Prediction",
    "PredictionCache",
    "PredictionDirection",
    "PredictionRangeError",
    "SimulationContext",
    "StateRestoreError",
]
