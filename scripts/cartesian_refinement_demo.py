"""Plan a refined Cartesian move of a serial-chain arm and summarize the resulting trajectory.

To run this script on the example arm and scene, use the command:

    python scripts/cartesian_refinement_demo.py scripts/data/six_dof_arm.yaml \
        --scene scripts/data/tabletop_scene.yaml --config scripts/data/refinement.yaml

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click
from rich.table import Table

from cartesian_refinement.io import configure_logging, console
from cartesian_refinement.kinematics import PrimitiveCollisionOracle, SerialChainModel
from cartesian_refinement.motion_planning import (
    CartesianRefinementPipeline,
    RefinedPath,
    RefinementConfig,
    cartesian_waypoints,
    export_trajectory,
    time_parameterize,
)
from cartesian_refinement.spatial import Pose3D

START_CONFIGURATION = {
    "joint_1": 0.2,
    "joint_2": 0.3,
    "joint_3": 0.6,
    "joint_4": 0.1,
    "joint_5": 0.5,
    "joint_6": -0.2,
}
"""Configuration (radians) from which the example arm begins its move."""

REPLAY_PERIOD_S = 0.01


class TrajectorySummary:
    """Prints the end-effector waypoints of a validated path and optionally exports its timing."""

    def __init__(
        self,
        model: SerialChainModel,
        ee_link: str,
        output_path: Optional[Path],
        period_s: float,
    ) -> None:
        """Initialize the summary for the given robot model and end-effector link."""
        self.model = model
        self.ee_link = ee_link
        self.output_path = output_path
        self.period_s = period_s

    def consume(self, path: RefinedPath) -> None:
        """Print the path's end-effector waypoints and export its trajectory (if requested)."""
        samples = path.snapshot()
        waypoints = cartesian_waypoints(samples, self.model, self.ee_link)

        table = Table(title=f"End-effector waypoints of '{self.ee_link}'")
        for column in ("Sample", "x (m)", "y (m)", "z (m)"):
            table.add_column(column, justify="right")
        for index, pose in enumerate(waypoints):
            table.add_row(str(index), *(f"{value:.4f}" for value in pose.position))
        console.print(table)

        trajectory = time_parameterize(samples, self.model.joint_names, self.period_s)
        duration_s = trajectory.duration_s
        console.print(f"Trajectory lasts {duration_s:.2f} s at {self.period_s} s per sample.")

        if self.output_path is not None:
            export_trajectory(trajectory, self.output_path)
            console.print(f"[green]Exported trajectory to {self.output_path}[/green]")


@click.command()
@click.argument("chain_yaml", type=click.Path(exists=True, path_type=Path))
@click.option("--scene", type=click.Path(exists=True, path_type=Path), help="Scene YAML file.")
@click.option("--config", type=click.Path(exists=True, path_type=Path), help="Config YAML file.")
@click.option(
    "--offset",
    type=(float, float, float),
    default=(-0.1, 0.0, -0.1),
    show_default=True,
    help="Goal translation (meters); local to the end-effector unless the config says otherwise.",
)
@click.option("--steps", type=int, default=None, help="Number of interpolation steps.")
@click.option("--output", type=click.Path(path_type=Path), help="Export the trajectory here.")
@click.option("--verbose", is_flag=True, help="Log every refinement decision.")
def main(
    chain_yaml: Path,
    scene: Optional[Path],
    config: Optional[Path],
    offset: tuple[float, float, float],
    steps: Optional[int],
    output: Optional[Path],
    verbose: bool,
) -> None:
    """Plan a straight-line move of the arm described by CHAIN_YAML and summarize the result."""
    configure_logging(logging.DEBUG if verbose else logging.INFO)

    model = SerialChainModel.from_yaml(chain_yaml)
    refinement_config = RefinementConfig() if config is None else RefinementConfig.from_yaml(config)
    oracle = (
        PrimitiveCollisionOracle(model)
        if scene is None
        else PrimitiveCollisionOracle.from_yaml(model, scene)
    )
    console.print(
        f"[yellow]Loaded robot '{model.name}' with {len(model.joint_names)} joints and "
        f"{len(oracle.obstacles)} obstacles.[/yellow]",
    )

    start = {name: START_CONFIGURATION.get(name, 0.0) for name in model.joint_names}
    goal = Pose3D.from_xyz_rpy(*offset)
    summary = TrajectorySummary(model, refinement_config.end_effector_link, output, REPLAY_PERIOD_S)

    pipeline = CartesianRefinementPipeline(model, oracle, refinement_config)
    outcome = pipeline.run(start, goal, summary, steps=steps)

    if outcome.success:
        console.print(f"[green]{outcome.message}[/green]")
    else:
        console.print(f"[red]{outcome.failure.kind.value}: {outcome.message}[/red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
