"""Import classes and definitions for robot kinematics and collision checking."""

from .collision_oracle import Obstacle as Obstacle
from .collision_oracle import PrimitiveCollisionOracle as PrimitiveCollisionOracle
from .kinematic_model import CollisionOracle as CollisionOracle
from .kinematic_model import KinematicModel as KinematicModel
from .kinematics_core import Configuration as Configuration
from .serial_chain import ChainJoint as ChainJoint
from .serial_chain import ChainLink as ChainLink
from .serial_chain import SerialChainModel as SerialChainModel
