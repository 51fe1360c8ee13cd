"""
Duty-Cycle Scenario
===================

A synthetic control loop that runs for a few milliseconds, commands
its reaction wheels and then sleeps until the next cycle. The wheels
perform a rest-to-rest slew: constant torque for the first half of the
run, opposite torque for the second half.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.config import DeviceConfig, SatelliteParameters, SimulatorConfig
from ..core.simulator import SimulationState, Simulator
from ..core.time_sync import ManualClock
from ..actuators.reaction_wheel import ReactionWheel

logger = logging.getLogger(__name__)


@dataclass
class DutyCycleScenarioConfig:
    """Configuration for the duty-cycle scenario."""
    duration_ms: int = 20_000
    period_ms: int = 100  # Sleep requested each cycle
    compute_ms: int = 5  # Wall time the control code spends per cycle
    slew_torque_Nm: float = 0.0002  # Wheel torque during the slew


def default_simulator_config() -> SimulatorConfig:
    """Single z-axis wheel and two accelerometers on a 3U body."""
    return SimulatorConfig(
        timestep_ms=10,
        satellite=SatelliteParameters(),
        sensors=[
            DeviceConfig(name="accel_x", type="accelerometer", params={"position_m": [0.05, 0.0, 0.0]}),
            DeviceConfig(name="accel_y", type="accelerometer", params={"position_m": [0.0, 0.05, 0.0]}),
        ],
        actuators=[
            DeviceConfig(name="wheel_z", type="reaction_wheel",
                         params={"axis_body": [0.0, 0.0, 1.0], "friction_Nm": 0.0}),
        ],
    )


class DutyCycleScenario:
    """
    Duty-cycled control loop scenario.

    Exercises:
    - set_adcs_sleep / update_simulation interleaving
    - Actuator commands through the simulator
    - Sensor reads of local acceleration
    """

    def __init__(self,
                 config: DutyCycleScenarioConfig = None,
                 sim_config: SimulatorConfig = None):
        """
        Initialize scenario.

        Args:
            config: Scenario configuration
            sim_config: Simulator configuration (default: single-wheel 3U body)
        """
        self.config = config or DutyCycleScenarioConfig()
        self.sim_config = sim_config or default_simulator_config()

        self.wall_clock = ManualClock()
        self.simulator: Optional[Simulator] = None
        self.results: Dict = {}
        self.history: List[SimulationState] = []
        self.readings: List[Dict[str, np.ndarray]] = []

    def setup(self):
        """Setup scenario."""
        self.simulator = Simulator(self.sim_config, clock=self.wall_clock)

    def _wheel_names(self) -> List[str]:
        return [name for name, device in self.simulator.devices.actuators.items()
                if isinstance(device, ReactionWheel)]

    def _control_cycle(self, wheels: List[str]):
        sim = self.simulator
        sim.update_simulation()

        self.readings.append({name: sim.get_sensor_value(name) for name in sim.devices.sensors})

        halfway = self.config.duration_ms / 2
        torque = self.config.slew_torque_Nm
        if sim.simulation_time >= halfway:
            torque = -torque
        for name in wheels:
            sim.set_command(name, torque)

        self.wall_clock.advance(self.config.compute_ms)
        sim.set_adcs_sleep(self.config.period_ms)

    def run(self) -> Dict:
        """
        Run the scenario.

        Returns:
            Results dictionary
        """
        if self.simulator is None:
            self.setup()

        wheels = self._wheel_names()
        if not wheels:
            logger.warning("No reaction wheels configured, body will not be driven")

        logger.info("Running duty-cycle scenario: %d ms, period %d ms",
                    self.config.duration_ms, self.config.period_ms)

        while self.simulator.simulation_time < self.config.duration_ms:
            self._control_cycle(wheels)

        for name in wheels:
            self.simulator.set_command(name, 0.0)

        self.history = list(self.simulator.history)
        self.results = self._analyze_results(wheels)
        return self.results

    def _analyze_results(self, wheels: List[str]) -> Dict:
        """Analyze scenario results."""
        if not self.history:
            return {}

        sim = self.simulator
        omega_mags = [np.linalg.norm(s.angular_velocity) for s in self.history]
        wheel_momentum = {name: sim.devices.actuators[name].momentum for name in wheels}

        return {
            'duration_ms': sim.simulation_time,
            'num_cycles': len(self.readings),
            'num_steps': sim.clock.step_count,
            'final_omega_deg_s': float(np.degrees(omega_mags[-1])),
            'max_omega_deg_s': float(np.degrees(max(omega_mags))),
            'slew_angle_deg': np.degrees(sim.satellite.orientation).tolist(),
            'wheel_momentum_Nms': wheel_momentum,
        }

    def get_summary(self) -> str:
        """Get human-readable summary."""
        if not self.results:
            return "Scenario not yet run."

        return f"""
Duty-Cycle Scenario Summary
===========================
Duration: {self.results['duration_ms']} ms
Control cycles: {self.results['num_cycles']}
Integration steps: {self.results['num_steps']}

Attitude:
  Slew angle: {np.round(self.results['slew_angle_deg'], 3)} deg
  Max rate: {self.results['max_omega_deg_s']:.3f} deg/s
  Final rate: {self.results['final_omega_deg_s']:.4f} deg/s
"""
