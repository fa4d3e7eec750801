"""Plain message types exchanged between the decision helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, ClassVar, Optional


@dataclass
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Twist:
    linear: Vector3 = field(default_factory=Vector3)
    angular: Vector3 = field(default_factory=Vector3)


class ShootMode(IntEnum):
    STOP = 0
    READY = 1
    PUSH = 2


class SpeedLimit(IntEnum):
    SPEED_10M_PER_SECOND = 10
    SPEED_15M_PER_SECOND = 15
    SPEED_16M_PER_SECOND = 16
    SPEED_18M_PER_SECOND = 18
    SPEED_30M_PER_SECOND = 30


@dataclass
class ChassisCmd:
    mode: int = 0
    accel: Twist = field(default_factory=Twist)
    power_limit: float = 0.0
    follow_vel_des: float = 0.0
    stamp: float = 0.0


@dataclass
class GimbalCmd:
    mode: int = 0
    rate_yaw: float = 0.0
    rate_pitch: float = 0.0
    traj_yaw: float = 0.0
    traj_pitch: float = 0.0
    traj_frame_id: str = ""
    bullet_speed: float = 0.0
    target_pos: Any = None
    stamp: float = 0.0


@dataclass
class ShootCmd:
    mode: int = ShootMode.STOP
    wheel_speed: float = 0.0
    hz: float = 0.0
    stamp: float = 0.0


@dataclass
class ShootBeforehandCmd:
    ALLOW_SHOOT: ClassVar[int] = 1
    BAN_SHOOT: ClassVar[int] = 2

    cmd: int = 0
    stamp: float = 0.0


@dataclass
class GimbalDesError:
    error: float = 0.0
    stamp: float = 0.0


@dataclass
class TrackData:
    id: int = 0
    v_yaw: float = 0.0
    accel: float = 0.0


@dataclass
class GameRobotStatus:
    RED_ENGINEER: ClassVar[int] = 2
    BLUE_ENGINEER: ClassVar[int] = 102

    robot_id: int = 0
    chassis_power_limit: int = 0
    shooter_cooling_limit: int = 0
    shooter_cooling_rate: int = 0


@dataclass
class PowerHeatData:
    chassis_power_buffer: int = 0
    shooter_id_1_17_mm_cooling_heat: int = 0
    shooter_id_2_17_mm_cooling_heat: int = 0
    shooter_id_1_42_mm_cooling_heat: int = 0


@dataclass
class CapacityData:
    """Sample and status data reported by the power management board."""

    stamp: float = 0.0
    capacity_remain_charge: float = 0.0
    state_machine_running_state: int = 0


@dataclass
class ShootData:
    bullet_speed: float = 0.0


@dataclass
class LegCmd:
    mode: int = 0
    jump: bool = False
    leg_length: float = 0.0


@dataclass
class MultiDofCmd:
    mode: int = 0
    linear: Vector3 = field(default_factory=Vector3)
    angular: Vector3 = field(default_factory=Vector3)
    stamp: float = 0.0


@dataclass
class JointState:
    name: list[str] = field(default_factory=list)
    position: list[float] = field(default_factory=list)

    def index_of(self, name: str) -> Optional[int]:
        """Return the index of joint ``name``, or None if it is not listed."""
        try:
            return self.name.index(name)
        except ValueError:
            return None