"""Chassis power limit selection from referee and capacitor state."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from enum import IntEnum
from typing import Any

from rmkit.messages import CapacityData, ChassisCmd, GameRobotStatus, PowerHeatData

logger = logging.getLogger(__name__)


class PowerMode(IntEnum):
    CHARGE = 0
    BURST = 1
    NORMAL = 2
    ALLOFF = 3
    TEST = 4


def _required(params: Mapping, name: str, default: Any) -> Any:
    if name not in params:
        logger.error("%s no defined", name)
        return default
    return params[name]


class PowerLimit:
    """Chooses the chassis power limit; ``clock`` returns the time in seconds."""

    def __init__(self, params: Mapping, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._safety_power = _required(params, "safety_power", 0.0)
        self._capacitor_threshold = _required(params, "capacitor_threshold", 0.0)
        self._disable_cap_gyro_threshold = _required(params, "disable_cap_gyro_threshold", 0.0)
        self._enable_cap_gyro_threshold = _required(params, "enable_cap_gyro_threshold", 0.0)
        self._charge_power = _required(params, "charge_power", 0.0)
        self._extra_power = _required(params, "extra_power", 0.0)
        self._burst_power = _required(params, "burst_power", 0.0)
        self._standard_power = _required(params, "standard_power", 0.0)
        self._max_power_limit = _required(params, "max_power_limit", 70)
        self._power_gain = _required(params, "power_gain", 0.0)
        self._buffer_threshold = _required(params, "buffer_threshold", 0.0)
        self._is_new_capacitor = bool(_required(params, "is_new_capacitor", False))
        self._total_burst_time = _required(params, "total_burst_time", 0)

        self._chassis_power_buffer = 0
        self._robot_id = 0
        self._chassis_power_limit = 0
        self._cap_energy = 0.0
        self._power_buffer_threshold = 50.0
        self._expect_state = 0
        self._cap_state = 0
        self._capacitor_is_on = True
        self._allow_gyro_cap = False
        self._referee_is_online = False
        self._capacity_is_online = False
        self.start_burst_time = 0.0

    def update_safety_power(self, safety_power: int) -> None:
        if safety_power > 0:
            self._safety_power = safety_power
        logger.info("update safety power: %d", safety_power)

    def update_state(self, state: int) -> None:
        self._expect_state = state if self._capacitor_is_on else PowerMode.ALLOFF

    def update_cap_switch_state(self, state: bool) -> None:
        self._capacitor_is_on = state

    def set_game_robot_data(self, data: GameRobotStatus) -> None:
        self._robot_id = data.robot_id
        self._chassis_power_limit = data.chassis_power_limit

    def set_chassis_power_buffer(self, data: PowerHeatData) -> None:
        self._chassis_power_buffer = data.chassis_power_buffer
        self._power_buffer_threshold = self._chassis_power_buffer * 0.8

    def set_capacity_data(self, data: CapacityData) -> None:
        self._capacity_is_online = self._clock() - data.stamp < 0.3
        self._cap_energy = data.capacity_remain_charge
        self._cap_state = data.state_machine_running_state

    def set_referee_status(self, status: bool) -> None:
        self._referee_is_online = status

    def get_state(self) -> int:
        return self._expect_state

    def set_gyro_power(self, chassis_cmd: ChassisCmd) -> None:
        if not self._allow_gyro_cap and self._cap_energy >= self._enable_cap_gyro_threshold:
            self._allow_gyro_cap = True
        if self._allow_gyro_cap and self._cap_energy <= self._disable_cap_gyro_threshold:
            self._allow_gyro_cap = False
        if self._allow_gyro_cap and self._chassis_power_limit < 80:
            chassis_cmd.power_limit = self._chassis_power_limit + self._extra_power
        else:
            self._expect_state = PowerMode.NORMAL

    def set_limit_power(self, chassis_cmd: ChassisCmd, is_gyro: bool) -> None:
        """Write the power limit to use into ``chassis_cmd``."""
        if self._robot_id in (GameRobotStatus.BLUE_ENGINEER, GameRobotStatus.RED_ENGINEER):
            chassis_cmd.power_limit = 400
            return
        if not self._referee_is_online:
            chassis_cmd.power_limit = self._safety_power
            return
        if not (self._capacity_is_online and self._expect_state != PowerMode.ALLOFF):
            self._normal(chassis_cmd)
            return
        if self._chassis_power_limit > self._burst_power:
            chassis_cmd.power_limit = self._burst_power
            return
        mode = self._expect_state if self._is_new_capacitor else self._cap_state
        if mode == PowerMode.NORMAL:
            self._normal(chassis_cmd)
        elif mode == PowerMode.BURST:
            self._burst(chassis_cmd, is_gyro)
        elif mode == PowerMode.CHARGE:
            chassis_cmd.power_limit = self._chassis_power_limit * 0.70
        else:
            chassis_cmd.power_limit = 0.0

    def _normal(self, chassis_cmd: ChassisCmd) -> None:
        plus_power = (self._chassis_power_buffer - self._buffer_threshold) * self._power_gain
        chassis_cmd.power_limit = min(self._chassis_power_limit + plus_power, self._max_power_limit)

    def _burst(self, chassis_cmd: ChassisCmd, is_gyro: bool) -> None:
        if (
            self._cap_state != PowerMode.ALLOFF
            and self._cap_energy > self._capacitor_threshold
            and self._chassis_power_buffer > self._power_buffer_threshold
        ):
            if is_gyro:
                self.set_gyro_power(chassis_cmd)
            elif self._clock() - self.start_burst_time < self._total_burst_time:
                chassis_cmd.power_limit = self._burst_power
            else:
                chassis_cmd.power_limit = self._standard_power
        else:
            self._expect_state = PowerMode.NORMAL