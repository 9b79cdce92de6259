"""Explicit game-state handle used as the treasure calculator's input."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from geode_predictor.errors import StateRestoreError


@dataclass(slots=True)
class SimulationSnapshot:
    geode_count: int
    ephemeral: dict[str, Any] = field(default_factory=dict)


class SimulationContext:
    """Owns the geode counter and any other state a prediction may disturb.

    Calculators read ``geode_count`` from this object instead of process-wide
    state, so tests can build as many independent contexts as they like.
    """

    def __init__(
        self,
        geode_count: int = 0,
        *,
        unique_id: int = 0,
        ephemeral: dict[str, Any] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._geode_count = 0
        self.geode_count = geode_count
        self.unique_id = unique_id
        self.ephemeral: dict[str, Any] = dict(ephemeral or {})
        self._logger = logger or logging.getLogger("geode_predictor.simulation")

    @property
    def geode_count(self) -> int:
        return self._geode_count

    @geode_count.setter
    def geode_count(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"geode_count must be an int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"geode_count must not be negative, got {value}")
        self._geode_count = value

    def snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(geode_count=self._geode_count, ephemeral=copy.deepcopy(self.ephemeral))

    def restore(self, snapshot: SimulationSnapshot) -> None:
        self.geode_count = snapshot.geode_count
        self.ephemeral = copy.deepcopy(snapshot.ephemeral)

    @contextmanager
    def with_temporary_changes(self, logger: logging.Logger | None = None) -> Iterator[SimulationContext]:
        """Yield this context and put its state back on every exit path."""
        log = logger or self._logger
        saved = self.snapshot()
        log.debug("temporary_changes_entered", extra={"geode_count": saved.geode_count})
        try:
            yield self
        except BaseException as exc:
            try:
                self.restore(saved)
            except Exception as restore_exc:
                log.error(
                    "temporary_changes_restore_failed",
                    extra={"geode_count": saved.geode_count, "original_error": repr(exc)},
                )
                raise StateRestoreError(
                    f"Could not restore simulation state after {type(exc).__name__}: {exc}",
                    original_error=exc,
                ) from restore_exc
            log.debug("temporary_changes_restored", extra={"geode_count": saved.geode_count, "error": repr(exc)})
            raise

        try:
            self.restore(saved)
        except Exception as restore_exc:
            log.error("temporary_changes_restore_failed", extra={"geode_count": saved.geode_count})
            raise StateRestoreError("Could not restore simulation state") from restore_exc
        log.debug("temporary_changes_restored", extra={"geode_count": saved.geode_count})
