#!/usr/bin/env python3
"""
ADCS Simulation Example
=======================

Loads a simulator configuration and runs the duty-cycle scenario
against it.

Usage:
  adcs-sim adcs_simulation/examples/config.yaml
  adcs-sim config.yaml --duration-ms 60000 --period-ms 50 --telemetry
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from adcs_simulation.core.config import load_config
from adcs_simulation.core.exceptions import SimulationError
from adcs_simulation.scenarios.duty_cycle import DutyCycleScenario, DutyCycleScenarioConfig

DEFAULT_CONFIG = Path(__file__).parent / "config.yaml"

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="ADCS rotational dynamics simulator")
    parser.add_argument('config', nargs='?', default=str(DEFAULT_CONFIG),
                        help='Path to YAML configuration (default: bundled example)')
    parser.add_argument('--duration-ms', type=int, default=20_000, help='Simulated duration [ms]')
    parser.add_argument('--period-ms', type=int, default=100, help='Control loop sleep per cycle [ms]')
    parser.add_argument('--compute-ms', type=int, default=5, help='Control code run time per cycle [ms]')
    parser.add_argument('--torque', type=float, default=0.0002, help='Wheel slew torque [Nm]')
    parser.add_argument('--telemetry', action='store_true', help='Print final telemetry as JSON')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        sim_config = load_config(args.config)
        scenario = DutyCycleScenario(
            DutyCycleScenarioConfig(
                duration_ms=args.duration_ms,
                period_ms=args.period_ms,
                compute_ms=args.compute_ms,
                slew_torque_Nm=args.torque,
            ),
            sim_config=sim_config,
        )

        start_time = time.time()
        scenario.run()
        elapsed = time.time() - start_time
    except SimulationError as exc:
        logger.error("Simulation failed: %s", exc)
        return 1

    print(scenario.get_summary())
    print(f"Simulation complete in {elapsed:.2f}s "
          f"(real-time factor {args.duration_ms / 1000.0 / max(elapsed, 1e-9):.1f}x)")

    if args.telemetry:
        print(json.dumps(scenario.simulator.get_telemetry(), indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(main())
