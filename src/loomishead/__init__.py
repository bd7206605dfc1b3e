"""Parametric Loomis head construction: landmarks, guidelines and projection."""
from loomishead.model.parameters import HeadParameters
from loomishead.model.transform import Orientation, Pan
from loomishead.controller.scene import build_head_scene, read_landmarks

__all__ = ["HeadParameters", "Orientation", "Pan", "build_head_scene", "read_landmarks"]

__version__ = "0.1.0"
