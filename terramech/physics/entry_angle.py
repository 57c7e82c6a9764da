"""
Entry-angle strategies.

FixedAngle returns a constant (45 degrees by default). SolvedAngle runs the
equilibrium line search for each geometry and returns its estimate.
"""

from __future__ import annotations

import math
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from terramech.models.config import EntryAngleMode, EntryAnglePolicy, SolverConfig
from terramech.models.contact import ContactGeometry
from terramech.physics.diagnostics import RecordingObserver

if TYPE_CHECKING:
    from terramech.physics.stress import StressField


class EntryAngleStrategy:
    """Chooses the front contact angle for a geometry."""

    def entry_angle(self, field: StressField, geometry: ContactGeometry) -> float:
        raise NotImplementedError

    def resolve(self, field: StressField, geometry: ContactGeometry) -> float:
        """
        Entry angle for one analysis of a geometry.

        Reports whatever diagnostics producing the angle raised to the
        field's observer, every time it is called.
        """
        return self.entry_angle(field, geometry)


class FixedAngle(EntryAngleStrategy):
    """Constant entry angle, independent of geometry and load."""

    def __init__(self, value: float = math.pi / 4):
        self.value = value

    def entry_angle(self, field, geometry):
        return self.value

    def __repr__(self) -> str:
        return f"FixedAngle({self.value!r})"


@dataclass(frozen=True)
class _SolvedEntry:
    """A memoised search result and the diagnostics it produced."""
    angle: float
    degeneracies: tuple = ()
    notes: tuple = ()

    def replay(self, observer) -> None:
        for event in self.degeneracies:
            observer.on_degeneracy(event)
        for message in self.notes:
            observer.on_solver_note(message)


class SolvedAngle(EntryAngleStrategy):
    """
    Entry angle from the equilibrium line search.

    Args:
        target_load: Vertical load to balance (N). None minimises the
                     integrated vertical load instead.
        config: Line search constants
        cache_size: Most geometries kept in the memo

    Results are memoised per soil, integration setup and geometry, so one
    integration pass runs one search however many samples it takes. The
    memo drops its least recently used entry once it holds cache_size
    geometries. Degeneracies and notes from a search are stored with its
    angle; resolve() replays them on a cache hit, entry_angle() does not.
    """

    def __init__(
        self,
        target_load: Optional[float] = None,
        config: Optional[SolverConfig] = None,
        cache_size: int = 256,
    ):
        self.target_load = target_load
        self.config = config or SolverConfig()
        self.cache_size = cache_size
        self._solved: OrderedDict[tuple, _SolvedEntry] = OrderedDict()
        self._lock = threading.Lock()

    def _cached(self, key: tuple) -> Optional[_SolvedEntry]:
        with self._lock:
            cached = self._solved.get(key)
            if cached is not None:
                self._solved.move_to_end(key)
            return cached

    def entry_angle(self, field, geometry):
        key = (field.soil, field.integration, geometry)
        cached = self._cached(key)
        if cached is not None:
            return cached.angle
        return self._search(field, geometry, key).angle

    def resolve(self, field, geometry):
        key = (field.soil, field.integration, geometry)
        cached = self._cached(key)
        if cached is None:
            # the search forwards its own diagnostics
            return self._search(field, geometry, key).angle
        cached.replay(field.observer)
        return cached.angle

    def _search(self, field: StressField, geometry: ContactGeometry, key: tuple) -> _SolvedEntry:
        from terramech.physics.line_search import EquilibriumSolver

        recorder = RecordingObserver(forward_to=field.observer)
        solver = EquilibriumSolver(
            field.soil,
            config=self.config,
            integration=field.integration,
            observer=recorder,
        )
        entry = _SolvedEntry(
            angle=solver.search(geometry, self.target_load).estimate,
            degeneracies=tuple(recorder.degeneracies),
            notes=tuple(recorder.notes),
        )
        with self._lock:
            self._solved[key] = entry
            self._solved.move_to_end(key)
            while len(self._solved) > self.cache_size:
                self._solved.popitem(last=False)
        return entry

    def __repr__(self) -> str:
        return f"SolvedAngle(target_load={self.target_load!r})"


def build_strategy(
    policy: EntryAnglePolicy,
    solver_config: Optional[SolverConfig] = None,
) -> EntryAngleStrategy:
    """Turn an entry-angle policy from configuration into a strategy."""
    if policy.mode == EntryAngleMode.SOLVED:
        return SolvedAngle(policy.target_load_N, solver_config)
    return FixedAngle(policy.fixed_angle)
