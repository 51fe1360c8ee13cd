"""
Simulation Scenarios
====================

Pre-configured control-loop scenarios.
"""

from .duty_cycle import DutyCycleScenario, DutyCycleScenarioConfig

__all__ = [
    'DutyCycleScenario',
    'DutyCycleScenarioConfig',
]
