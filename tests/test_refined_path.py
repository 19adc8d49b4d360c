"""Unit tests for the insert-only path of configurations."""

import threading

import pytest

from cartesian_refinement.motion_planning import RefinedPath

from .fixtures.fake_robots import ee_config


def test_refined_path_stores_private_copies() -> None:
    """Verify that the path stores copies, so callers cannot mutate its samples."""
    # Arrange - Create a path from caller-owned configurations
    start = ee_config(0.0)
    path = RefinedPath([start, ee_config(1.0)])

    # Act - Mutate the caller's configuration
    start["x"] = 42.0

    # Assert - Expect the stored sample to be unaffected
    assert path[0]["x"] == 0.0
    assert path[0] is not start


def test_refined_path_insert_between_neighbors() -> None:
    """Verify that samples are inserted at the given index between existing samples."""
    # Arrange - Create a two-sample path
    path = RefinedPath([ee_config(0.0), ee_config(1.0)])

    # Act - Insert a sample between the two
    stored = path.insert(1, ee_config(0.5))

    # Assert - Expect three ordered samples, with the stored copy at index 1
    assert len(path) == 3
    assert [sample["x"] for sample in path] == [0.0, 0.5, 1.0]
    assert path[1] is stored


@pytest.mark.parametrize("index", [0, 2, -1])
def test_refined_path_insert_outside_neighbors(index: int) -> None:
    """Verify that samples cannot be inserted before the first or after the last sample."""
    path = RefinedPath([ee_config(0.0), ee_config(1.0)])

    with pytest.raises(IndexError):
        path.insert(index, ee_config(0.5))


def test_refined_path_snapshot_is_stable() -> None:
    """Verify that a snapshot is unaffected by later insertions."""
    # Arrange - Create a path and take a snapshot of it
    path = RefinedPath([ee_config(0.0), ee_config(1.0)])
    snapshot = path.snapshot()

    # Act - Insert and append samples after the snapshot
    path.insert(1, ee_config(0.5))
    path.append(ee_config(2.0))

    # Assert - Expect the snapshot to keep the samples it was taken with
    assert len(snapshot) == 2
    assert snapshot[0] is path[0]
    assert snapshot[1] is path[2]
    assert len(path) == 4


def test_refined_path_concurrent_reads_and_inserts() -> None:
    """Verify that snapshots taken during concurrent insertions are always consistent."""
    # Arrange - Create a path and a thread that repeatedly inserts before the final sample
    path = RefinedPath([ee_config(0.0), ee_config(1.0)])
    num_inserts = 500

    def insert_many() -> None:
        for k in range(num_inserts):
            path.insert(len(path) - 1, ee_config(k / num_inserts))

    writer = threading.Thread(target=insert_many)

    # Act - Take snapshots while the writer runs
    writer.start()
    snapshots = []
    while writer.is_alive():
        snapshots.append(path.snapshot())
    writer.join()

    # Assert - Expect every snapshot to keep the original endpoints, in order
    assert len(path) == num_inserts + 2
    for snapshot in snapshots:
        assert snapshot[0]["x"] == 0.0
        assert snapshot[-1]["x"] == 1.0
        assert [s["x"] for s in snapshot[1:-1]] == sorted(s["x"] for s in snapshot[1:-1])
