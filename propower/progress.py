"""
Progress and cancellation for simulated surveys.

Simulation loops report through a ``(current, total)`` callback wrapped in a
``ProgressReporter``; a caller-supplied ``cancel_check`` aborts the loop with
``SimulationCancelled``.
"""

import sys
from typing import Callable, Optional


class SimulationCancelled(Exception):
    """The caller's ``cancel_check`` asked a survey simulation to stop."""

    pass


class ProgressReporter:
    """Counts simulated surveys and forwards throttled updates to *callback*.

    Args:
        total: Surveys expected over the whole run.
        callback: Receives ``(current, total)``.
        update_every: Minimum number of surveys between two updates;
            ``total // 200`` (at least 1) when omitted.
    """

    def __init__(
        self,
        total: int,
        callback: Callable[[int, int], None],
        update_every: Optional[int] = None,
    ):
        self.total = total
        self._callback = callback
        self._current = 0
        self._last_fired = 0
        self.update_every = update_every if update_every is not None else max(1, total // 200)

    @property
    def current(self) -> int:
        return self._current

    def _fire(self, value: int):
        self._last_fired = value
        self._callback(value, self.total)

    def start(self):
        self._current = 0
        self._fire(0)

    def advance(self, n: int = 1):
        """Record *n* more surveys; batches of any size trigger an update once due."""
        self._current += n
        if self._current >= self.total or self._current - self._last_fired >= self.update_every:
            self._fire(self._current)

    def finish(self):
        """Jump to ``total`` if the loop stopped short of it (e.g. rounding of batches)."""
        if self._current < self.total:
            self._current = self.total
            self._fire(self.total)


class PrintReporter:
    """Single-line console progress on stderr, e.g. ``Progress:  45.2% (723/1600 surveys)``."""

    unit = "surveys"

    def __call__(self, current: int, total: int):
        if total <= 0:
            return
        stream = sys.stderr
        stream.write(f"\rProgress: {100.0 * current / total:5.1f}% ({current}/{total} {self.unit})")
        if current >= total:
            stream.write("\n")
        stream.flush()


class TqdmReporter:
    """Progress bar backed by ``tqdm``, imported on first update.

    Keyword arguments are passed to ``tqdm`` as given::

        model.find_power(400, progress_callback=TqdmReporter(desc="surveys"))
    """

    def __init__(self, **tqdm_kwargs):
        self._tqdm_kwargs = tqdm_kwargs
        self._bar = None

    def __call__(self, current: int, total: int):
        from tqdm import tqdm

        if self._bar is None:
            self._bar = tqdm(total=total, unit="survey", **self._tqdm_kwargs)

        step = current - self._bar.n
        if step > 0:
            self._bar.update(step)

        if current >= total:
            self._bar.close()
            self._bar = None


def compute_total_simulations(n_simulations: int, n_sample_sizes: int = 1) -> int:
    """Surveys simulated in total when every sample size gets *n_simulations* draws."""
    return n_simulations * n_sample_sizes
