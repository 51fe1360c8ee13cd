"""
Dynamics Module
===============

Rigid-body attitude dynamics.
"""

from .rigid_body import RigidBodyIntegrator, actuator_torque, invert_inertia

__all__ = [
    'RigidBodyIntegrator',
    'actuator_torque',
    'invert_inertia',
]
