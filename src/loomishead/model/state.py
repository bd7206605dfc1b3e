"""
View State (Data Model)
=======================
This module defines the snapshot of user-controlled inputs of the engine.

Why is this file needed?
------------------------
1. State Management: It holds the current head proportions, orientation and
   pan in one place, so the caller has a single object to hand over on every
   re-evaluation.
2. Decoupling: Interaction code (drags, sliders, reset buttons) writes to
   this object; the geometry functions only ever read plain values from it.

The values it holds are immutable; every update swaps in a new value, so a
snapshot taken before an update is never changed by it.

Classes:
    ViewState: The container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging

from loomishead.model.geometry_primitives import Vector
from loomishead.model.parameters import HeadParameters
from loomishead.model.transform import Orientation, Pan

logger = logging.getLogger(__name__)


@dataclass
class ViewState:
    parameters: HeadParameters = field(default_factory=HeadParameters)
    orientation: Orientation = field(default_factory=Orientation.identity)
    pan: Pan = field(default_factory=Pan)

    def rotate(self, axis: Vector, angle: float) -> None:
        """Apply an incremental rotation about a world-space axis."""
        self.orientation = self.orientation.premultiply(Orientation.from_axis_angle(axis, angle))

    def rotate_local(self, axis: Vector, angle: float) -> None:
        """Apply an incremental rotation about a head-space axis."""
        self.orientation = self.orientation.multiply(Orientation.from_axis_angle(axis, angle))

    def set_rotation_from_euler(self, x: float, y: float, z: float) -> None:
        self.orientation = Orientation.from_euler(x, y, z)

    def reset_rotation(self) -> None:
        self.orientation = Orientation.identity()

    def pan_by(self, dx: float, dy: float) -> None:
        """Apply an incremental pan offset in screen units."""
        self.pan = self.pan.moved(dx, dy)

    def reset_pan(self) -> None:
        self.pan = Pan()

    def set_parameters(self, parameters: HeadParameters) -> None:
        parameters.validate()
        self.parameters = parameters

    def reset(self) -> None:
        """Restore default proportions, orientation and pan."""
        self.parameters = HeadParameters()
        self.reset_rotation()
        self.reset_pan()
        logger.info("View state has been reset.")
