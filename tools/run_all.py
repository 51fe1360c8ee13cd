#!/usr/bin/env python3
"""Run the ADCS simulator validations.

This script executes:
- Python unit tests (pytest)
- The duty-cycle scenario against the bundled example configuration

It writes logs, data and plots into build/reports/.

Usage:
  python3 tools/run_all.py
  python3 tools/run_all.py --out build/reports --duration-ms 60000
"""

from __future__ import annotations

import argparse
import csv
import json
import logging
import os
import shutil
import subprocess
import sys
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional

# Force headless plotting
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np


REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_OUT_ROOT = REPO_ROOT / "build" / "reports"


def _utc_stamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%SZ")


def _run_cmd(
    cmd: list[str],
    *,
    cwd: Path,
    log_path: Path,
    env: Optional[dict[str, str]] = None,
) -> int:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("w", encoding="utf-8") as f:
        f.write(f"$ {' '.join(cmd)}\n")
        f.write(f"cwd={cwd}\n\n")
        f.flush()
        proc = subprocess.Popen(
            cmd,
            cwd=str(cwd),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            env=env,
        )
        assert proc.stdout is not None
        for line in proc.stdout:
            f.write(line)
        return proc.wait()


def _write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

    def _default(o: Any):
        if isinstance(o, np.ndarray):
            return o.tolist()
        if isinstance(o, np.generic):
            return o.item()
        if is_dataclass(o):
            return asdict(o)
        return str(o)

    path.write_text(json.dumps(obj, indent=2, sort_keys=True, default=_default) + "\n", encoding="utf-8")


def _history_to_rows(history: Iterable[Any]) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for s in history:
        rows.append(
            {
                "time_ms": int(s.time_ms),
                "steps": int(s.steps),
                "theta_x_rad": float(s.orientation[0]),
                "theta_y_rad": float(s.orientation[1]),
                "theta_z_rad": float(s.orientation[2]),
                "omega_x_rad_s": float(s.angular_velocity[0]),
                "omega_y_rad_s": float(s.angular_velocity[1]),
                "omega_z_rad_s": float(s.angular_velocity[2]),
                "omega_mag_deg_s": float(np.degrees(np.linalg.norm(s.angular_velocity))),
            }
        )
    return rows


def _write_csv(path: Path, rows: list[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if not rows:
        path.write_text("", encoding="utf-8")
        return
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)


def _plot_timeseries(rows: list[dict[str, Any]], out_png: Path, title: str) -> None:
    out_png.parent.mkdir(parents=True, exist_ok=True)
    if not rows:
        return

    t_s = np.array([r["time_ms"] for r in rows]) / 1000.0
    theta = np.degrees(np.array([[r["theta_x_rad"], r["theta_y_rad"], r["theta_z_rad"]] for r in rows]))
    omega = np.array([r["omega_mag_deg_s"] for r in rows])

    fig, axs = plt.subplots(2, 1, figsize=(12, 7), sharex=True)
    fig.suptitle(title)

    for i, label in enumerate("xyz"):
        axs[0].plot(t_s, theta[:, i], label=f"θ{label}")
    axs[0].set_ylabel("Orientation (deg)")
    axs[0].legend()
    axs[0].grid(True)

    axs[1].plot(t_s, omega)
    axs[1].set_ylabel("|ω| (deg/s)")
    axs[1].set_xlabel("Time (s)")
    axs[1].grid(True)

    fig.tight_layout(rect=(0, 0, 1, 0.96))
    fig.savefig(out_png, dpi=160)
    plt.close(fig)


def _run_scenario(out_dir: Path, *, config_path: Path, duration_ms: int) -> dict[str, Any]:
    from adcs_simulation.core.config import load_config
    from adcs_simulation.scenarios.duty_cycle import DutyCycleScenario, DutyCycleScenarioConfig

    log_path = out_dir / "logs" / "simulation_duty_cycle.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.INFO)
    try:
        scenario = DutyCycleScenario(
            DutyCycleScenarioConfig(duration_ms=duration_ms),
            sim_config=load_config(config_path),
        )
        results = scenario.run()
    finally:
        root.removeHandler(handler)
        handler.close()

    rows = _history_to_rows(scenario.history)
    _write_csv(out_dir / "data" / "duty_cycle_timeseries.csv", rows)
    _plot_timeseries(rows, out_dir / "images" / "duty_cycle_timeseries.png", "Scenario: duty_cycle")
    _write_json(out_dir / "data" / "duty_cycle_results.json", results)
    return results


def main() -> int:
    parser = argparse.ArgumentParser(description="Run tests + simulations and write artifacts into build/")
    parser.add_argument("--out", default=str(DEFAULT_OUT_ROOT), help="Output root (default: build/reports)")
    parser.add_argument("--config", default=str(REPO_ROOT / "adcs_simulation" / "examples" / "config.yaml"),
                        help="Simulator configuration for the scenario run")
    parser.add_argument("--duration-ms", type=int, default=20_000, help="Scenario duration [ms]")
    parser.add_argument("--skip-pytests", action="store_true", help="Skip pytest")
    parser.add_argument("--skip-sim", action="store_true", help="Skip simulations")
    args = parser.parse_args()

    out_root = Path(args.out)
    stamp = _utc_stamp()
    run_dir = out_root / stamp
    latest_dir = out_root / "latest"

    for sub in ("logs", "data", "images"):
        (run_dir / sub).mkdir(parents=True, exist_ok=True)

    meta = {
        "timestamp_utc": stamp,
        "python": sys.version,
        "repo": str(REPO_ROOT),
    }
    _write_json(run_dir / "meta.json", meta)

    summary: dict[str, Any] = {"meta": meta, "steps": {}}

    if not args.skip_pytests:
        code = _run_cmd(
            [
                sys.executable,
                "-m",
                "pytest",
                "-q",
                "--disable-warnings",
                f"--junitxml={str(run_dir / 'data' / 'pytest-junit.xml')}",
                "tests",
            ],
            cwd=REPO_ROOT,
            log_path=run_dir / "logs" / "pytest.log",
            env={**os.environ, "PYTHONPATH": str(REPO_ROOT)},
        )
        summary["steps"]["pytest"] = {"exit_code": code}

    if not args.skip_sim:
        # Repo root must be importable when run as a script
        sys.path.insert(0, str(REPO_ROOT))
        from adcs_simulation.core.exceptions import SimulationError

        try:
            results = _run_scenario(run_dir, config_path=Path(args.config), duration_ms=args.duration_ms)
            summary["steps"]["simulations"] = {"ok": True, "results": results}
        except SimulationError as e:
            (run_dir / "logs" / "simulation_runner_error.log").write_text(str(e) + "\n", encoding="utf-8")
            summary["steps"]["simulations"] = {"ok": False, "error": str(e)}

    _write_json(run_dir / "summary.json", summary)

    lines = [
        f"ADCS Simulation Validation Report ({stamp})",
        f"Output: {run_dir}",
        "",
        "Steps:",
    ]
    for k, v in summary["steps"].items():
        lines.append(f"- {k}: {v}")
    (run_dir / "summary.txt").write_text("\n".join(lines) + "\n", encoding="utf-8")

    if latest_dir.exists():
        shutil.rmtree(latest_dir)
    shutil.copytree(run_dir, latest_dir)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
