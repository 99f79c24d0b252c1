"""Arm poses and place locations for moving detected objects across a table."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

ARMS = ("left_arm", "right_arm")

_RIGHT_SIDE_POSITION = (-2.135, -0.02, -1.64, -2.07, -1.64, -1.680, 1.398)
_LEFT_SIDE_POSITION = (2.135, -0.02, 1.64, -2.07, 1.64, -1.680, 1.398)

_JOINT_SUFFIXES = (
    "_shoulder_pan_joint",
    "_shoulder_lift_joint",
    "_upper_arm_roll_joint",
    "_elbow_flex_joint",
    "_forearm_roll_joint",
    "_wrist_flex_joint",
    "_wrist_roll_joint",
)

_EPS = np.float32(1e-4)
_X_EXTENT = np.float32(0.6)
_X_STEP = np.float32(0.01)
_FIRST_Y_SHIFT = np.float32(-0.6)
_Y_MARGIN = np.float32(0.05)
_Y_STEP = np.float32(0.01)
_PLACE_HEIGHT = 0.04


@dataclass(frozen=True)
class Position:
    """A point in the robot's base frame."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class PlacementState:
    """What the pick-and-place loop remembers between iterations."""

    iteration: int = 0
    first_detected: Position = field(default_factory=Position)
    previous_detected: Position = field(default_factory=Position)
    previous_placing: Position = field(default_factory=Position)

    def record(self, detected: Position, placed: Position | None = None) -> None:
        """Remember a finished iteration; placed is None when placing failed."""
        if self.iteration == 0:
            self.first_detected = detected
        if placed is not None:
            self.previous_placing = placed
        self.previous_detected = detected
        self.iteration += 1


def arm_order() -> tuple[str, ...]:
    """Arms in the order in which picking is tried."""
    return ARMS


def side_position(arm_name: str) -> list[float]:
    """Joint positions that move an arm out of the way to its side."""
    if arm_name == "right_arm":
        return list(_RIGHT_SIDE_POSITION)
    return list(_LEFT_SIDE_POSITION)


def joint_names(arm_name: str) -> list[str]:
    """Names of the seven joints of an arm, prefixed by its first letter."""
    if not arm_name:
        raise ValueError("arm name must not be empty")
    prefix = arm_name[0]
    return [prefix + suffix for suffix in _JOINT_SUFFIXES]


def place_locations(
    first_detected: Position,
    detected: Position,
    previous_detected: Position,
    previous_placing: Position,
    iteration: int,
) -> list[Position]:
    """Candidate place positions relative to the grasped object, row by row in y.

    The first object goes to the far side of the table; later ones are placed
    next to where the previous object was put.
    """
    if iteration < 0:
        raise ValueError("iteration must not be negative")
    x_min = np.float32(first_detected.x - detected.x)
    x_max = np.float32(x_min + _X_EXTENT)
    if iteration == 0:
        y_min = _FIRST_Y_SHIFT
    else:
        y_min = np.float32(
            (previous_detected.y - detected.y) + previous_placing.y
        )
    y_max = np.float32(first_detected.y + _Y_MARGIN)

    locations = []
    dy = y_min
    while dy < y_max + _EPS:
        dx = x_min
        while dx < x_max + _EPS:
            locations.append(Position(float(dx), float(dy), _PLACE_HEIGHT))
            dx = np.float32(dx + _X_STEP)
        dy = np.float32(dy + _Y_STEP)
    return locations