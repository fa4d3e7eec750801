"""Wire format of the video transmission link: frames, payloads and CRCs."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

CRC8_INIT = 0xFF
CRC16_INIT = 0xFFFF

KEY_NAMES = (
    "w", "s", "a", "d", "shift", "ctrl", "q", "e",
    "r", "f", "g", "z", "x", "c", "v", "b",
)


def _reflected_table(poly: int) -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ poly if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


CRC8_TABLE = _reflected_table(0x8C)
CRC16_TABLE = _reflected_table(0x8408)


def _decode_keys(mask: int) -> dict[str, bool]:
    return {name: bool(mask >> bit & 1) for bit, name in enumerate(KEY_NAMES)}


class CmdId(IntEnum):
    CUSTOM_CONTROLLER_CMD = 0x0302
    ROBOT_COMMAND_CMD = 0x0304
    ROBOT_TO_CUSTOM_CMD = 0x0309


@dataclass(frozen=True)
class FrameHeader:
    """Five-byte header that starts every referee-style frame."""

    SIZE = 5
    _FORMAT = struct.Struct("<BHBB")

    sof: int
    data_length: int
    seq: int
    crc_8: int

    @classmethod
    def parse(cls, data: bytes) -> "FrameHeader":
        if len(data) < cls.SIZE:
            raise ValueError(f"frame header needs {cls.SIZE} bytes, got {len(data)}")
        return cls(*cls._FORMAT.unpack_from(data))


@dataclass(frozen=True)
class CustomControllerData:
    """Custom controller payload; two-byte values are big-endian."""

    SIZE = 30

    encoders: tuple[int, ...]
    joystick_l_y_data: int
    joystick_l_x_data: int
    joystick_r_y_data: int
    joystick_r_x_data: int
    buttons: tuple[bool, ...]

    @classmethod
    def parse(cls, data: bytes) -> "CustomControllerData":
        if len(data) < cls.SIZE:
            raise ValueError(f"custom controller data needs {cls.SIZE} bytes, got {len(data)}")
        values = struct.unpack_from(">10H", data)
        button_byte = data[20]
        return cls(
            encoders=tuple(values[:6]),
            joystick_l_y_data=values[6],
            joystick_l_x_data=values[7],
            joystick_r_y_data=values[8],
            joystick_r_x_data=values[9],
            buttons=tuple(bool(button_byte >> bit & 1) for bit in range(4)),
        )


@dataclass(frozen=True)
class KeyboardMouseData:
    """Keyboard and mouse state forwarded from the operator's client."""

    SIZE = 12
    _FORMAT = struct.Struct("<hhhbbHH")

    mouse_x: int
    mouse_y: int
    mouse_z: int
    left_button_down: int
    right_button_down: int
    keys: dict[str, bool]
    reserved: int

    @classmethod
    def parse(cls, data: bytes) -> "KeyboardMouseData":
        if len(data) < cls.SIZE:
            raise ValueError(f"keyboard and mouse data needs {cls.SIZE} bytes, got {len(data)}")
        mx, my, mz, left, right, mask, reserved = cls._FORMAT.unpack_from(data)
        return cls(mx, my, mz, left, right, _decode_keys(mask), reserved)


@dataclass(frozen=True)
class ControlData:
    """Bit-packed remote receiver state (17 bytes)."""

    SIZE = 17
    _TAIL = struct.Struct("<hhhBH")

    joystick_r_x: int
    joystick_r_y: int
    joystick_l_y: int
    joystick_l_x: int
    mode_switch: int
    pause_button: int
    custom_button_l: int
    custom_button_r: int
    wheel: int
    trigger: int
    mouse_x: int
    mouse_y: int
    mouse_wheel: int
    mouse_left_down: int
    mouse_right_down: int
    mouse_mid_down: int
    keys: dict[str, bool]

    @classmethod
    def parse(cls, data: bytes) -> "ControlData":
        if len(data) < cls.SIZE:
            raise ValueError(f"control data needs {cls.SIZE} bytes, got {len(data)}")
        bits = int.from_bytes(data[:8], "little")

        def take(offset: int, width: int) -> int:
            return bits >> offset & ((1 << width) - 1)

        mouse_x, mouse_y, mouse_wheel, buttons, mask = cls._TAIL.unpack_from(data, 8)
        return cls(
            joystick_r_x=take(0, 11),
            joystick_r_y=take(11, 11),
            joystick_l_y=take(22, 11),
            joystick_l_x=take(33, 11),
            mode_switch=take(44, 2),
            pause_button=take(46, 1),
            custom_button_l=take(47, 1),
            custom_button_r=take(48, 1),
            wheel=take(49, 11),
            trigger=take(60, 1),
            mouse_x=mouse_x,
            mouse_y=mouse_y,
            mouse_wheel=mouse_wheel,
            mouse_left_down=buttons & 0x3,
            mouse_right_down=buttons >> 2 & 0x3,
            mouse_mid_down=buttons >> 4 & 0x3,
            keys=_decode_keys(mask),
        )


def crc8(data: bytes, init: int = CRC8_INIT) -> int:
    """Table-driven CRC-8 over ``data`` starting from ``init``."""
    crc = init & 0xFF
    for byte in data:
        crc = CRC8_TABLE[crc ^ byte]
    return crc


def verify_crc8(data: bytes) -> bool:
    """Check that the last byte of ``data`` is the CRC-8 of the rest."""
    if len(data) <= 2:
        return False
    return crc8(data[:-1]) == data[-1]


def append_crc8(data: bytes) -> bytes:
    """Return ``data`` followed by its CRC-8 byte."""
    data = bytes(data)
    if len(data) < 2:
        raise ValueError("message too short for a CRC-8 tail")
    return data + bytes([crc8(data)])


def crc16(data: bytes, init: int = CRC16_INIT) -> int:
    """Table-driven CRC-16 over ``data`` starting from ``init``."""
    crc = init & 0xFFFF
    for byte in data:
        crc = (crc >> 8) ^ CRC16_TABLE[(crc ^ byte) & 0xFF]
    return crc


def verify_crc16(data: bytes) -> bool:
    """Check that the last two bytes of ``data`` are its little-endian CRC-16."""
    if len(data) <= 2:
        return False
    expected = crc16(data[:-2])
    return (expected & 0xFF) == data[-2] and (expected >> 8 & 0xFF) == data[-1]


def append_crc16(data: bytes) -> bytes:
    """Return ``data`` followed by its little-endian CRC-16."""
    data = bytes(data)
    if not data:
        raise ValueError("message too short for a CRC-16 tail")
    crc = crc16(data)
    return data + bytes([crc & 0xFF, crc >> 8 & 0xFF])