"""Import classes and definitions enabling adaptive Cartesian trajectory refinement."""

from .config import RefinementConfig as RefinementConfig
from .interpolation import CartesianInterpolator as CartesianInterpolator
from .interpolation import default_step_count as default_step_count
from .link_distance import LinkDistanceMetric as LinkDistanceMetric
from .outcome import FailedCheck as FailedCheck
from .outcome import Failure as Failure
from .outcome import FailureKind as FailureKind
from .outcome import InterpolationFailure as InterpolationFailure
from .outcome import Outcome as Outcome
from .outcome import TrajectoryError as TrajectoryError
from .outcome import TrajectoryInvalid as TrajectoryInvalid
from .pipeline import CartesianRefinementPipeline as CartesianRefinementPipeline
from .refined_path import RefinedPath as RefinedPath
from .refinement import ConvergenceGuard as ConvergenceGuard
from .refinement import LinkDistanceRefiner as LinkDistanceRefiner
from .trajectories import CartesianPath as CartesianPath
from .trajectories import Path as Path
from .trajectories import Trajectory as Trajectory
from .trajectories import TrajectoryConsumer as TrajectoryConsumer
from .trajectories import TrajectoryPoint as TrajectoryPoint
from .trajectories import cartesian_waypoints as cartesian_waypoints
from .trajectories import export_trajectory as export_trajectory
from .trajectories import time_parameterize as time_parameterize
from .validation import CollisionValidator as CollisionValidator
