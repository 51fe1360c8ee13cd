import logging

import numpy as np
import pytest

from adcs_simulation.actuators.magnetorquer import Magnetorquer, MagnetorquerConfig
from adcs_simulation.actuators.reaction_wheel import ReactionWheel, ReactionWheelConfig
from adcs_simulation.core.exceptions import ConfigurationError, DeviceNotFoundError
from adcs_simulation.devices.catalog import DeviceCatalog, default_catalog
from adcs_simulation.devices.registry import DeviceRegistry
from adcs_simulation.sensors.accelerometer import Accelerometer, AccelerometerConfig


def test_default_catalog_knows_builtin_types():
    catalog = default_catalog()

    assert catalog.sensor_types == ["accelerometer"]
    assert catalog.actuator_types == ["magnetorquer", "reaction_wheel"]
    assert catalog.create_sensor("gyroscope") is None
    assert isinstance(catalog.create_actuator("reaction_wheel"), ReactionWheel)


def test_catalog_bad_parameters_are_configuration_errors():
    catalog = default_catalog()

    with pytest.raises(ConfigurationError):
        catalog.create_actuator("reaction_wheel", spin_rate=3)
    with pytest.raises(ConfigurationError):
        catalog.create_sensor("accelerometer", position_m=[1.0, 2.0])


@pytest.mark.parametrize("name", ["", "nonexistent-type"])
def test_unknown_sensor_name_is_skipped_with_warning(name, caplog):
    registry = DeviceRegistry()
    registry.create_sensor("accelerometer")

    with caplog.at_level(logging.WARNING, logger="adcs_simulation.devices.registry"):
        assert registry.create_sensor(name) is None

    assert len(registry) == 1
    assert caplog.records and caplog.records[-1].levelno == logging.WARNING


def test_unknown_actuator_name_is_skipped_with_warning(caplog):
    registry = DeviceRegistry()

    with caplog.at_level(logging.WARNING):
        assert registry.create_actuator("warp_drive") is None

    assert len(registry) == 0
    assert "Unknown actuator type: warp_drive" in caplog.text


def test_named_device_uses_explicit_type():
    registry = DeviceRegistry()
    wheel = registry.create_actuator("wheel_z", "reaction_wheel", axis_body=[0, 0, 1])

    assert "wheel_z" in registry
    assert registry.actuators["wheel_z"] is wheel
    np.testing.assert_allclose(wheel.config.axis_body, [0, 0, 1])


def test_reregistering_replaces_previous_instance(caplog):
    registry = DeviceRegistry()
    first = registry.create_actuator("wheel", "reaction_wheel")

    with caplog.at_level(logging.WARNING):
        second = registry.create_actuator("wheel", "reaction_wheel")

    assert registry.actuators["wheel"] is second
    assert second is not first
    assert len(registry) == 1
    assert "Replacing" in caplog.text


def test_command_and_read_of_unknown_name_raise_without_inserting():
    registry = DeviceRegistry()

    with pytest.raises(DeviceNotFoundError) as excinfo:
        registry.set_command("wheel_x", 0.001)
    assert isinstance(excinfo.value, KeyError)
    assert "wheel_x" in str(excinfo.value)

    with pytest.raises(DeviceNotFoundError):
        registry.get_sensor_value("accel_x")

    assert len(registry) == 0
    assert "wheel_x" not in registry


def test_views_are_read_only():
    registry = DeviceRegistry()

    with pytest.raises(TypeError):
        registry.sensors["x"] = Accelerometer()


def test_update_adcs_devices_stores_alpha_cross_r():
    registry = DeviceRegistry()
    registry.create_sensor("accel_x", "accelerometer", position_m=[1.0, 0.0, 0.0])
    registry.create_sensor("accel_z", "accelerometer", position_m=[0.0, 0.0, 2.0])

    registry.update_adcs_devices(np.array([0.0, 0.0, 0.5]))

    np.testing.assert_allclose(registry.get_sensor_value("accel_x"), [0.0, 0.5, 0.0])
    np.testing.assert_allclose(registry.get_sensor_value("accel_z"), [0.0, 0.0, 0.0])


def test_custom_catalog_entries():
    catalog = DeviceCatalog()
    catalog.register_sensor("imu", lambda **p: Accelerometer(AccelerometerConfig(**p)))
    registry = DeviceRegistry(catalog)

    assert registry.create_sensor("imu") is not None
    assert registry.create_actuator("reaction_wheel") is None


def test_reaction_wheel_command_is_torque_limited():
    wheel = ReactionWheel(ReactionWheelConfig(max_torque_Nm=0.001, friction_Nm=0.0))

    assert wheel.set_command(0.01) == pytest.approx(0.001)
    assert wheel.set_command(-0.01) == pytest.approx(-0.001)


def test_reaction_wheel_spin_state_along_axis():
    wheel = ReactionWheel(ReactionWheelConfig(axis_body=[0, 0, 2], inertia_kg_m2=1e-5, friction_Nm=0.0))
    wheel.set_command(1e-4)

    np.testing.assert_allclose(wheel.current_accelerations(), [0.0, 0.0, 10.0])

    wheel.propagate(0.5)
    np.testing.assert_allclose(wheel.current_velocities(), [0.0, 0.0, 5.0])
    assert wheel.momentum == pytest.approx(5e-5)


def test_reaction_wheel_inertia_tensor():
    wheel = ReactionWheel(ReactionWheelConfig(axis_body=[0, 0, 1],
                                              inertia_kg_m2=2e-5, transverse_inertia_kg_m2=1e-5))

    np.testing.assert_allclose(wheel.inertia_matrix(), np.diag([1e-5, 1e-5, 2e-5]))


def test_reaction_wheel_saturates_at_max_speed():
    wheel = ReactionWheel(ReactionWheelConfig(max_speed_rpm=60, inertia_kg_m2=1e-5, friction_Nm=0.0))
    wheel.set_command(0.001)

    for _ in range(10):
        wheel.propagate(0.1)

    assert wheel.wheel_speed_rad_s == pytest.approx(2 * np.pi)
    assert wheel.is_saturated
    np.testing.assert_allclose(wheel.current_accelerations(), np.zeros(3))

    # Braking is still allowed
    wheel.set_command(-0.001)
    assert wheel.wheel_acceleration_rad_s2 < 0


def test_reaction_wheel_friction_spins_down_to_rest():
    wheel = ReactionWheel(ReactionWheelConfig(friction_Nm=1e-5, inertia_kg_m2=1e-5))
    wheel.wheel_speed_rad_s = 0.5

    for _ in range(10):
        wheel.propagate(0.1)

    assert wheel.wheel_speed_rad_s == 0.0


def test_offline_wheel_ignores_commands():
    wheel = ReactionWheel()
    wheel.inject_fault('offline')

    assert wheel.set_command(0.001) == 0.0
    assert wheel.wheel_acceleration_rad_s2 == 0.0


def test_magnetorquer_has_no_rotating_mass():
    mtq = Magnetorquer(MagnetorquerConfig(axis_body=[0, 1, 0], max_dipole_Am2=0.2))

    assert mtq.set_command(1.0) == pytest.approx(0.2)
    np.testing.assert_allclose(mtq.dipole_vector, [0.0, 0.2, 0.0])
    assert not mtq.current_velocities().any()
    assert not mtq.current_accelerations().any()
    assert not mtq.inertia_matrix().any()


def test_accelerometer_bias_and_reproducible_noise():
    cfg = dict(position_m=[0.1, 0, 0], bias_m_s2=[0.01, 0, 0], noise_std_m_s2=0.001, seed=3)
    a = Accelerometer(AccelerometerConfig(**cfg))
    b = Accelerometer(AccelerometerConfig(**cfg))

    a.set_current_values(np.array([0.0, 1.0, 0.0]))
    b.set_current_values(np.array([0.0, 1.0, 0.0]))

    np.testing.assert_array_equal(a.get_value(), b.get_value())
    np.testing.assert_allclose(a.get_value(), [0.01, 1.0, 0.0], atol=0.01)
    assert a.sample_count == 1


def test_offline_accelerometer_reads_nan():
    sensor = Accelerometer()
    sensor.inject_fault('offline')
    sensor.set_current_values(np.ones(3))

    assert np.isnan(sensor.get_value()).all()


def test_name_shared_across_kinds_is_rejected(caplog):
    registry = DeviceRegistry()
    registry.create_actuator("wheel", "reaction_wheel")

    with caplog.at_level(logging.WARNING):
        assert registry.create_sensor("wheel", "accelerometer") is None

    assert "already belongs to the actuator" in caplog.text
    assert list(registry.names()) == ["wheel"]
    assert len(registry) == 1


def test_high_friction_fault_cleared_by_reset():
    config = ReactionWheelConfig(friction_Nm=1e-5, inertia_kg_m2=1e-5)
    wheel = ReactionWheel(config)
    wheel.wheel_speed_rad_s = 1.0

    wheel.inject_fault('high_friction')
    assert wheel.wheel_acceleration_rad_s2 == pytest.approx(-10.0)
    assert config.friction_Nm == 1e-5

    wheel.reset()
    wheel.wheel_speed_rad_s = 1.0
    assert wheel.wheel_acceleration_rad_s2 == pytest.approx(-1.0)


def test_noisy_fault_cleared_by_reset():
    config = AccelerometerConfig(noise_std_m_s2=0.0, seed=5)
    sensor = Accelerometer(config)

    sensor.inject_fault('noisy')
    sensor.set_current_values(np.zeros(3))
    assert sensor.get_value().any()
    assert config.noise_std_m_s2 == 0.0

    sensor.reset()
    sensor.set_current_values(np.zeros(3))
    np.testing.assert_array_equal(sensor.get_value(), np.zeros(3))
