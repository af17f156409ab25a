"""Simulation core for Gravity Sandbox."""

from .data_models import Body, BodyView, GestureView, PlacementGesture, body_mass
from .physics import GravityPhysics
from .registry import BodyRegistry
from .simulation import SimulationController

__all__ = [
    "Body",
    "BodyView",
    "GestureView",
    "PlacementGesture",
    "body_mass",
    "GravityPhysics",
    "BodyRegistry",
    "SimulationController",
]
