"""Shooter heat bookkeeping and the allowed shooting frequency."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from enum import IntEnum
from typing import Any, Optional

from rmkit.messages import GameRobotStatus, PowerHeatData, SpeedLimit

logger = logging.getLogger(__name__)


class ShootHz(IntEnum):
    LOW = 0
    HIGH = 1
    BURST = 2
    MINIMAL = 3


def _required(params: Mapping, name: str, default: Any) -> Any:
    if name not in params:
        logger.error("%s no defined", name)
        return default
    return params[name]


class HeatLimit:
    """Tracks barrel heat and derives how fast the shooter may fire.

    ``publish`` receives the locally estimated heat on every :meth:`timer_cb`,
    which the owner should call every 0.1 s.
    """

    def __init__(self, params: Mapping, publish: Optional[Callable[[float], None]] = None) -> None:
        self._low_shoot_frequency = float(_required(params, "low_shoot_frequency", 0.0))
        self._high_shoot_frequency = float(_required(params, "high_shoot_frequency", 0.0))
        self._burst_shoot_frequency = float(_required(params, "burst_shoot_frequency", 0.0))
        self._minimal_shoot_frequency = float(_required(params, "minimal_shoot_frequency", 0.0))
        self._safe_shoot_frequency = float(_required(params, "safe_shoot_frequency", 0.0))
        self._heat_coeff = float(_required(params, "heat_coeff", 0.0))
        self._type = str(_required(params, "type", ""))
        self._heat_protect_threshold = float(_required(params, "local_heat_protect_threshold", 0.0))
        self._use_local_heat = bool(params.get("use_local_heat", True))
        self._bullet_heat = 100.0 if self._type == "ID1_42MM" else 10.0
        self._publish = publish

        self._state = 0
        self._burst_flag = False
        self._shoot_frequency = 0.0
        self._referee_is_online = False
        self._last_shoot_state = False
        self._shooter_cooling_limit = 0
        self._shooter_cooling_rate = 0
        self._shooter_cooling_heat = 0
        self._local_heat = 0.0
        self._lock = threading.Lock()

    def heat_cb(self, has_shoot: bool) -> None:
        """Add one bullet's heat on each rising edge of the shot signal."""
        with self._lock:
            if has_shoot and self._last_shoot_state != has_shoot:
                self._local_heat += self._bullet_heat
            self._last_shoot_state = has_shoot

    def timer_cb(self) -> None:
        """Cool the local heat estimate by one 0.1 s step and publish it."""
        with self._lock:
            if self._local_heat > 0.0:
                self._local_heat -= self._shooter_cooling_rate * 0.1
            if self._local_heat < 0.0:
                self._local_heat = 0.0
            value = self._local_heat
        if self._publish is not None:
            self._publish(value)

    def set_status_of_shooter(self, data: GameRobotStatus) -> None:
        self._shooter_cooling_limit = int(data.shooter_cooling_limit - self._heat_protect_threshold)
        self._shooter_cooling_rate = data.shooter_cooling_rate

    def set_cooling_heat_of_shooter(self, data: PowerHeatData) -> None:
        if self._type == "ID1_17MM":
            self._shooter_cooling_heat = data.shooter_id_1_17_mm_cooling_heat
        elif self._type == "ID2_17MM":
            self._shooter_cooling_heat = data.shooter_id_2_17_mm_cooling_heat
        elif self._type == "ID1_42MM":
            self._shooter_cooling_heat = data.shooter_id_1_42_mm_cooling_heat

    def set_referee_status(self, status: bool) -> None:
        self._referee_is_online = status

    def get_shoot_frequency(self) -> float:
        """Return the shooting frequency that keeps heat below the limit."""
        with self._lock:
            if self._state == ShootHz.BURST:
                return self._shoot_frequency
            if self._use_local_heat or not self._referee_is_online:
                heat = self._local_heat
            else:
                heat = float(self._shooter_cooling_heat)
            margin = self._shooter_cooling_limit - heat
            bullet = self._bullet_heat
            base = self._shooter_cooling_rate / bullet
            if margin < bullet:
                return 0.0
            if margin == bullet:
                return base
            if margin <= bullet * self._heat_coeff:
                return margin / (bullet * self._heat_coeff) * (self._shoot_frequency - base) + base
            return self._shoot_frequency

    def get_speed_limit(self) -> Optional[SpeedLimit]:
        """Refresh the expected frequency and return the bullet speed limit.

        Returns None for an unknown shooter type.
        """
        self._update_expect_shoot_frequency()
        if self._type in ("ID1_17MM", "ID2_17MM"):
            return SpeedLimit.SPEED_30M_PER_SECOND
        if self._type == "ID1_42MM":
            return SpeedLimit.SPEED_16M_PER_SECOND
        return None

    def get_cooling_limit(self) -> int:
        return self._shooter_cooling_limit

    def get_cooling_heat(self) -> int:
        return self._shooter_cooling_heat

    def set_shoot_frequency(self, mode: int) -> None:
        self._state = mode

    def get_shoot_frequency_mode(self) -> int:
        return self._state

    def _update_expect_shoot_frequency(self) -> None:
        frequencies = {
            ShootHz.BURST: self._burst_shoot_frequency,
            ShootHz.LOW: self._low_shoot_frequency,
            ShootHz.HIGH: self._high_shoot_frequency,
            ShootHz.MINIMAL: self._minimal_shoot_frequency,
        }
        self._shoot_frequency = frequencies.get(self._state, self._safe_shoot_frequency)
        self._burst_flag = self._state == ShootHz.BURST