"""
Actuators Module
================

Actuator models for spacecraft attitude control.
"""

from .magnetorquer import Magnetorquer, MagnetorquerConfig
from .reaction_wheel import ReactionWheel, ReactionWheelConfig

__all__ = [
    'Magnetorquer',
    'MagnetorquerConfig',
    'ReactionWheel',
    'ReactionWheelConfig',
]
