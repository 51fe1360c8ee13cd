"""
Simulation Errors
=================

Exception hierarchy raised by the simulator core.
"""


class SimulationError(Exception):
    """Base class for all simulator errors."""


class ConfigurationError(SimulationError):
    """Configuration could not be loaded or is invalid."""


class SimulatorStateError(SimulationError):
    """Operation is not allowed in the simulator's current state."""


class DeviceNotFoundError(SimulationError, KeyError):
    """No device is registered under the requested name."""

    def __init__(self, name: str, kind: str = "device"):
        self.name = name
        self.kind = kind
        super().__init__(f"No {kind} registered under name {name!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class NumericalError(SimulationError, ArithmeticError):
    """Integration produced an undefined result."""


class SingularInertiaError(NumericalError):
    """Body inertia tensor cannot be inverted."""
