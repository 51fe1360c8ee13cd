"""
Simulation Configuration
========================

Satellite, device and timing parameters for the ADCS simulator,
plus loading them from a YAML file.
"""

import logging
import numpy as np
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Smallest accepted integration step [ms]
MIN_TIMESTEP_MS = 1

DEFAULT_TIMESTEP_MS = 10

# Most history samples kept by a simulator
DEFAULT_HISTORY_LIMIT = 10000


def _as_vector(value: Any, name: str) -> np.ndarray:
    try:
        vec = np.asarray(value, dtype=float).reshape(-1)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a 3-vector, got {value!r}") from exc
    if vec.shape != (3,):
        raise ConfigurationError(f"{name} must be a 3-vector, got shape {vec.shape}")
    if not np.all(np.isfinite(vec)):
        raise ConfigurationError(f"{name} must be finite, got {vec}")
    return vec


def _as_int(value: Any, name: str) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = float("nan")
    if isinstance(value, bool) or not number.is_integer():
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return int(number)


def _as_matrix(value: Any, name: str) -> np.ndarray:
    try:
        mat = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a 3x3 matrix, got {value!r}") from exc
    if mat.shape != (3, 3):
        raise ConfigurationError(f"{name} must be a 3x3 matrix, got shape {mat.shape}")
    if not np.all(np.isfinite(mat)):
        raise ConfigurationError(f"{name} must be finite")
    return mat


@dataclass
class SatelliteParameters:
    """Mass properties and initial rotational state of the satellite body."""
    # Moments of inertia (kg·m²), default 3U CubeSat
    inertia_xx: float = 0.008
    inertia_yy: float = 0.008
    inertia_zz: float = 0.002

    # Products of inertia
    inertia_xy: float = 0.0
    inertia_xz: float = 0.0
    inertia_yz: float = 0.0

    # Full tensor, overrides the individual moments when given
    inertia: Optional[np.ndarray] = None

    # Initial state
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))  # rad/s
    orientation: np.ndarray = field(default_factory=lambda: np.zeros(3))  # rad

    def __post_init__(self):
        if self.inertia is not None:
            self.inertia = _as_matrix(self.inertia, "satellite.inertia")
            if not np.allclose(self.inertia, self.inertia.T):
                raise ConfigurationError("satellite.inertia must be symmetric")
        self.angular_velocity = _as_vector(self.angular_velocity, "satellite.angular_velocity")
        self.orientation = _as_vector(self.orientation, "satellite.orientation")

        inertia = _as_matrix(self.inertia_matrix, "satellite inertia tensor")
        # Zero moments are left to the integrator, which rejects singular tensors
        eigenvalues = np.linalg.eigvalsh(inertia)
        if eigenvalues.min() < -1e-12 * np.abs(eigenvalues).max():
            raise ConfigurationError(
                f"satellite inertia tensor must be positive definite, got eigenvalues {eigenvalues}")

    @property
    def inertia_matrix(self) -> np.ndarray:
        """Return the 3x3 inertia tensor."""
        if self.inertia is not None:
            return self.inertia.copy()
        return np.array([
            [self.inertia_xx, -self.inertia_xy, -self.inertia_xz],
            [-self.inertia_xy, self.inertia_yy, -self.inertia_yz],
            [-self.inertia_xz, -self.inertia_yz, self.inertia_zz]
        ])


@dataclass
class DeviceConfig:
    """A configured sensor or actuator."""
    name: str
    type: Optional[str] = None  # catalog type, defaults to name
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def type_name(self) -> str:
        return self.type or self.name


@dataclass
class SimulatorConfig:
    """Complete simulator configuration."""
    timestep_ms: int = DEFAULT_TIMESTEP_MS
    print_stats: bool = False

    # History recording
    history_interval_ms: int = DEFAULT_TIMESTEP_MS  # Minimum spacing between samples
    history_limit: int = DEFAULT_HISTORY_LIMIT  # Oldest samples are dropped beyond this

    satellite: SatelliteParameters = field(default_factory=SatelliteParameters)
    sensors: List[DeviceConfig] = field(default_factory=list)
    actuators: List[DeviceConfig] = field(default_factory=list)

    def __post_init__(self):
        """Validate configuration."""
        self.timestep_ms = _as_int(self.timestep_ms, "timestep_ms")
        if self.timestep_ms < MIN_TIMESTEP_MS:
            raise ConfigurationError(
                f"timestep_ms must be at least {MIN_TIMESTEP_MS} ms, got {self.timestep_ms}")
        self.history_interval_ms = _as_int(self.history_interval_ms, "history_interval_ms")
        if self.history_interval_ms < 0:
            raise ConfigurationError("history_interval_ms must be non-negative")
        self.history_limit = _as_int(self.history_limit, "history_limit")
        if self.history_limit < 1:
            raise ConfigurationError("history_limit must be at least 1")
        self.print_stats = bool(self.print_stats)


def _device_entries(section: Any, kind: str) -> List[DeviceConfig]:
    """
    Normalize a sensors/actuators section.

    Accepts a list of names, a list of mappings with a ``name`` key,
    or a mapping of name -> params (order preserved).
    """
    if section is None:
        return []

    entries = []
    if isinstance(section, Mapping):
        for name, params in section.items():
            params = dict(params or {})
            type_name = params.pop("type", None)
            entries.append(DeviceConfig(name=str(name), type=type_name, params=params))
    elif isinstance(section, list):
        for item in section:
            if isinstance(item, Mapping):
                params = dict(item)
                name = params.pop("name", "")
                type_name = params.pop("type", None)
                entries.append(DeviceConfig(name="" if name is None else str(name),
                                            type=type_name, params=params))
            elif isinstance(item, str) or item is None:
                entries.append(DeviceConfig(name=item or ""))
            else:
                raise ConfigurationError(f"Invalid {kind} entry: {item!r}")
    else:
        raise ConfigurationError(f"'{kind}' must be a list or mapping, got {type(section).__name__}")
    return entries


def config_from_dict(data: Mapping[str, Any]) -> SimulatorConfig:
    """
    Build a SimulatorConfig from a plain mapping.

    Args:
        data: Parsed configuration document

    Returns:
        Validated configuration
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError("Configuration document must be a mapping")

    sat_data = data.get("satellite") or {}
    if not isinstance(sat_data, Mapping):
        raise ConfigurationError("'satellite' must be a mapping")
    try:
        satellite = SatelliteParameters(**sat_data)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid satellite parameters: {exc}") from exc

    return SimulatorConfig(
        timestep_ms=data.get("timestep_ms", DEFAULT_TIMESTEP_MS),
        print_stats=data.get("print_stats", False),
        history_interval_ms=data.get("history_interval_ms", DEFAULT_TIMESTEP_MS),
        history_limit=data.get("history_limit", DEFAULT_HISTORY_LIMIT),
        satellite=satellite,
        sensors=_device_entries(data.get("sensors"), "sensors"),
        actuators=_device_entries(data.get("actuators"), "actuators"),
    )


def load_config(path: Union[str, Path]) -> SimulatorConfig:
    """
    Load simulator configuration from a YAML file.

    Args:
        path: Path to the configuration file

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: File missing, unparsable or invalid
    """
    config_path = Path(path)
    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Config file not found: {config_path}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Could not read config file {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Error parsing config file {config_path}: {exc}") from exc

    if raw is None:
        raw = {}
    config = config_from_dict(raw)
    logger.info("Configuration loaded from %s", config_path)
    return config
