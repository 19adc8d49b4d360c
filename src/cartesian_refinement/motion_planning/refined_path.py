"""Define an insert-only sequence of robot configurations shared by refinement and validation."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Iterator, overload

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cartesian_refinement.kinematics import Configuration


class RefinedPath:
    """A temporally ordered sequence of configurations that only ever grows by insertion.

    Samples are never removed or reordered, so a reader holding a snapshot never observes a
        dangling or displaced sample. Each stored configuration is a private copy that is not
        mutated after it enters the path.
    """

    def __init__(self, samples: Iterable[Configuration] = ()) -> None:
        """Initialize the path with an optional ordered collection of samples."""
        self._samples: list[Configuration] = [dict(s) for s in samples]
        self._lock = threading.Lock()

    def __len__(self) -> int:
        """Return the number of samples in the path."""
        return len(self._samples)

    @overload
    def __getitem__(self, index: int) -> Configuration: ...
    @overload
    def __getitem__(self, index: slice) -> list[Configuration]: ...
    def __getitem__(self, index: int | slice) -> Configuration | list[Configuration]:
        """Retrieve the sample(s) at the given index or slice."""
        return self._samples[index]

    def __iter__(self) -> Iterator[Configuration]:
        """Iterate over a snapshot of the samples taken when iteration begins."""
        return iter(self.snapshot())

    def __repr__(self) -> str:
        """Return a concise representation of the path."""
        return f"RefinedPath(num_samples={len(self)})"

    def append(self, sample: Configuration) -> None:
        """Add a sample after the current final sample."""
        with self._lock:
            self._samples.append(dict(sample))

    def insert(self, index: int, sample: Configuration) -> Configuration:
        """Insert a sample so that it ends up at the given index.

        :param index: Position of the new sample; it must fall strictly between existing samples
        :param sample: Configuration to be inserted (a private copy is stored)
        :return: The stored copy of the inserted sample
        """
        if not 0 < index < len(self._samples):
            raise IndexError(f"Samples may only be inserted between neighbors, got index {index}.")

        stored = dict(sample)
        with self._lock:
            self._samples.insert(index, stored)
        return stored

    def snapshot(self) -> tuple[Configuration, ...]:
        """Capture the current samples as an immutable tuple."""
        with self._lock:
            return tuple(self._samples)
