"""Decoder for the custom controller / keyboard / receiver video-link stream."""

from __future__ import annotations

import argparse
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import serial

from rmkit.vt_protocol import (
    CmdId,
    ControlData,
    CustomControllerData,
    FrameHeader,
    KeyboardMouseData,
    verify_crc8,
    verify_crc16,
)

logger = logging.getLogger(__name__)

CUSTOM_CONTROLLER_TOPIC = "custom_controller_data"
KEYBOARD_MOUSE_TOPIC = "keyboard_mouse_data"
RECEIVER_CONTROL_TOPIC = "receiver_control_data"

BUFFER_LENGTH = 256
FRAME_LENGTH = 128
HEADER_LENGTH = FrameHeader.SIZE
CMD_ID_LENGTH = 2
TAIL_LENGTH = 2
MAX_DATA_LENGTH = 256
CONTROL_FRAME_LENGTH = 21
ONLINE_TIMEOUT = 0.1

DEFAULT_PORT = "/dev/usbImagetran"
DEFAULT_BAUDRATE = 921600


class SerialPort(Protocol):
    in_waiting: int

    def read(self, size: int) -> bytes: ...


@dataclass
class CustomControllerMsg:
    encoder_data: list[float] = field(default_factory=lambda: [0.0] * 6)
    joystick_l_y: int = 0
    joystick_l_x: int = 0
    joystick_r_y: int = 0
    joystick_r_x: int = 0
    button_data: list[bool] = field(default_factory=lambda: [False] * 4)


@dataclass
class KeyboardMouseMsg:
    mouse_x: int = 0
    mouse_y: int = 0
    mouse_z: int = 0
    left_button_down: int = 0
    right_button_down: int = 0
    keys: dict[str, bool] = field(default_factory=dict)


@dataclass
class ReceiverControlMsg:
    joystick_r_x: float = 0.0
    joystick_r_y: float = 0.0
    joystick_l_y: float = 0.0
    joystick_l_x: float = 0.0
    mode_switch: int = 0
    pause_button: int = 0
    custom_button_l: int = 0
    custom_button_r: int = 0
    wheel: float = 0.0
    trigger: int = 0
    mouse_x: int = 0
    mouse_y: int = 0
    mouse_wheel: int = 0
    mouse_left_down: int = 0
    mouse_right_down: int = 0
    mouse_mid_down: int = 0
    keys: dict[str, bool] = field(default_factory=dict)


def _encoder_angle(raw: int) -> float:
    return 3.14 * raw / 18000.0


def _stick(raw: int) -> float:
    return (raw - 1024.0) / 660.0


class VideoTransmission:
    """Decodes frames from the link and hands messages to ``publish(topic, msg)``.

    ``clock`` returns the time in seconds; the link counts as offline once
    no valid frame has arrived for 0.1 s.
    """

    def __init__(
        self,
        serial_port: Optional[SerialPort],
        publish: Callable[[str, Any], None],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._serial = serial_port
        self._publish = publish
        self._clock = clock
        self._buffer = bytearray(BUFFER_LENGTH)
        self._online = False
        self._last_get_data_time = clock()

    def is_online(self) -> bool:
        return self._online

    def read(self) -> None:
        """Read whatever the serial port holds and decode it."""
        if self._serial is None:
            return
        waiting = self._serial.in_waiting
        if not waiting:
            return
        data = self._serial.read(waiting)
        if data:
            self.feed(data)

    def feed(self, data: bytes) -> None:
        """Shift ``data`` into the unpack buffer and decode the frames in it."""
        if self._clock() - self._last_get_data_time > ONLINE_TIMEOUT:
            self._online = False
        if len(data) < BUFFER_LENGTH:
            self._buffer = self._buffer[len(data):] + bytearray(data)
        buf = bytes(self._buffer)
        i = 0
        while i < BUFFER_LENGTH - FRAME_LENGTH:
            if buf[i] == 0xA5:
                length = self._unpack(buf[i:])
                if length is not None:
                    i += length
            if i + 1 < BUFFER_LENGTH and buf[i] == 0xA9 and buf[i + 1] == 0x53:
                length = self._control_data_unpack(buf[i:])
                if length is not None:
                    i += length
            i += 1

    def _mark_online(self) -> None:
        self._online = True
        self._last_get_data_time = self._clock()

    def _unpack(self, data: bytes) -> Optional[int]:
        header_bytes = data[:HEADER_LENGTH]
        if not verify_crc8(header_bytes):
            return None
        header = FrameHeader.parse(header_bytes)
        if header.data_length > MAX_DATA_LENGTH:
            logger.info("discard possible wrong frames, data length: %d", header.data_length)
            return 0
        frame_len = header.data_length + HEADER_LENGTH + CMD_ID_LENGTH + TAIL_LENGTH
        if not verify_crc16(data[:frame_len]):
            return None
        cmd_id = data[6] << 8 | data[5]
        payload = data[HEADER_LENGTH + CMD_ID_LENGTH:]
        if cmd_id == CmdId.CUSTOM_CONTROLLER_CMD:
            self._publish(CUSTOM_CONTROLLER_TOPIC, self._custom_controller_msg(payload))
        elif cmd_id == CmdId.ROBOT_COMMAND_CMD:
            self._publish(KEYBOARD_MOUSE_TOPIC, self._keyboard_mouse_msg(payload))
        else:
            logger.warning("Referee command ID %d not found.", cmd_id)
        self._mark_online()
        return frame_len

    @staticmethod
    def _custom_controller_msg(payload: bytes) -> CustomControllerMsg:
        ref = CustomControllerData.parse(payload)
        enc = ref.encoders
        encoder_data = [enc[0], enc[1], enc[5], enc[3], enc[4], enc[2]]
        return CustomControllerMsg(
            encoder_data=[_encoder_angle(raw) for raw in encoder_data],
            joystick_l_y=ref.joystick_l_x_data,
            joystick_l_x=ref.joystick_l_y_data,
            joystick_r_y=ref.joystick_r_x_data,
            joystick_r_x=ref.joystick_r_y_data,
            button_data=list(ref.buttons),
        )

    @staticmethod
    def _keyboard_mouse_msg(payload: bytes) -> KeyboardMouseMsg:
        ref = KeyboardMouseData.parse(payload)
        return KeyboardMouseMsg(
            mouse_x=ref.mouse_x,
            mouse_y=ref.mouse_y,
            mouse_z=ref.mouse_z,
            left_button_down=ref.left_button_down,
            right_button_down=ref.right_button_down,
            keys=dict(ref.keys),
        )

    def _control_data_unpack(self, data: bytes) -> Optional[int]:
        if not verify_crc16(data[:CONTROL_FRAME_LENGTH]):
            return None
        ref = ControlData.parse(data[2:2 + ControlData.SIZE])
        msg = ReceiverControlMsg(
            joystick_r_x=_stick(ref.joystick_r_x),
            joystick_r_y=_stick(ref.joystick_r_y),
            joystick_l_y=_stick(ref.joystick_l_y),
            joystick_l_x=_stick(ref.joystick_l_x),
            mode_switch=ref.mode_switch,
            pause_button=ref.pause_button,
            custom_button_l=ref.custom_button_l,
            custom_button_r=ref.custom_button_r,
            wheel=_stick(ref.wheel),
            trigger=ref.trigger,
            mouse_x=ref.mouse_x,
            mouse_y=ref.mouse_y,
            mouse_wheel=ref.mouse_wheel,
            mouse_left_down=ref.mouse_left_down,
            mouse_right_down=ref.mouse_right_down,
            mouse_mid_down=ref.mouse_mid_down,
            keys=dict(ref.keys),
        )
        self._publish(RECEIVER_CONTROL_TOPIC, msg)
        self._mark_online()
        return CONTROL_FRAME_LENGTH


def main(argv: Optional[list[str]] = None) -> int:
    """Read the video link and print every decoded message."""
    parser = argparse.ArgumentParser(description="Decode the video transmission link.")
    parser.add_argument("--port", default=DEFAULT_PORT)
    parser.add_argument("--baudrate", type=int, default=DEFAULT_BAUDRATE)
    parser.add_argument("--rate", type=float, default=100.0, help="polling rate in Hz")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    try:
        port = serial.Serial(args.port, args.baudrate, timeout=0.05)
    except serial.SerialException:
        logger.error("Cannot open image transmitter port")
        return 1

    def publish(topic: str, msg: Any) -> None:
        print(f"{topic}: {msg}", flush=True)

    logger.info("Video transmission load.")
    transmission = VideoTransmission(port, publish)
    period = 1.0 / args.rate
    try:
        with port:
            while True:
                transmission.read()
                time.sleep(period)
    except KeyboardInterrupt:
        return 0