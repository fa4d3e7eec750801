import struct

import pytest

from rmkit.vt_protocol import (
    KEY_NAMES,
    ControlData,
    CustomControllerData,
    FrameHeader,
    KeyboardMouseData,
    append_crc8,
    append_crc16,
    crc8,
    crc16,
    verify_crc8,
    verify_crc16,
)


@pytest.mark.parametrize("byte, expected", [(0x01, 0x5E), (0x02, 0xBC), (0xFF, 0x35)])
def test_crc8_single_byte_matches_table(byte, expected):
    assert crc8(bytes([byte]), 0) == expected


@pytest.mark.parametrize("byte, expected", [(0x01, 0x1189), (0x02, 0x2312), (0xFF, 0x0F78)])
def test_crc16_single_byte_matches_table(byte, expected):
    assert crc16(bytes([byte]), 0) == expected


def test_crc16_check_string():
    assert crc16(b"123456789") == 0x6F91


def test_crc_of_empty_data_is_init():
    assert crc8(b"", 0x42) == 0x42
    assert crc16(b"", 0x1234) == 0x1234


@pytest.mark.parametrize("payload", [b"ab", b"\xa5\x10\x00\x01", bytes(range(40))])
def test_crc8_round_trip(payload):
    framed = append_crc8(payload)
    assert framed[:-1] == payload
    assert verify_crc8(framed)


@pytest.mark.parametrize("payload", [b"a", b"\xa9\x53\x00", bytes(range(100))])
def test_crc16_round_trip(payload):
    framed = append_crc16(payload)
    assert framed[:-2] == payload
    assert verify_crc16(framed)


def test_corruption_detected():
    framed8 = bytearray(append_crc8(b"hello"))
    framed8[1] ^= 0x01
    assert not verify_crc8(bytes(framed8))
    framed16 = bytearray(append_crc16(b"hello"))
    framed16[0] ^= 0x80
    assert not verify_crc16(bytes(framed16))


def test_short_messages_fail_verification():
    assert verify_crc8(b"\x00\x00") is False
    assert verify_crc16(b"\xff\xff") is False


def test_append_rejects_too_short():
    with pytest.raises(ValueError):
        append_crc8(b"x")
    with pytest.raises(ValueError):
        append_crc16(b"")


def test_frame_header_parse():
    header = FrameHeader.parse(struct.pack("<BHBB", 0xA5, 300, 7, 0x3C))
    assert header == FrameHeader(sof=0xA5, data_length=300, seq=7, crc_8=0x3C)


def test_frame_header_too_short():
    with pytest.raises(ValueError):
        FrameHeader.parse(b"\xa5\x01")


def test_custom_controller_parse():
    values = [0x1234, 2, 3, 4, 5, 6, 7, 8, 9, 10]
    data = b"".join(v.to_bytes(2, "big") for v in values) + bytes([0b0101]) + bytes(9)
    parsed = CustomControllerData.parse(data)
    assert parsed.encoders == (0x1234, 2, 3, 4, 5, 6)
    assert parsed.joystick_l_y_data == 7
    assert parsed.joystick_l_x_data == 8
    assert parsed.joystick_r_y_data == 9
    assert parsed.joystick_r_x_data == 10
    assert parsed.buttons == (True, False, True, False)


def test_custom_controller_too_short():
    with pytest.raises(ValueError):
        CustomControllerData.parse(bytes(29))


def test_keyboard_mouse_parse():
    mask = (1 << KEY_NAMES.index("w")) | (1 << KEY_NAMES.index("b"))
    data = struct.pack("<hhhbbHH", -5, 7, 3, 1, 0, mask, 0)
    parsed = KeyboardMouseData.parse(data)
    assert (parsed.mouse_x, parsed.mouse_y, parsed.mouse_z) == (-5, 7, 3)
    assert parsed.left_button_down == 1
    assert parsed.right_button_down == 0
    assert [name for name, down in parsed.keys.items() if down] == ["w", "b"]


def test_keyboard_mouse_too_short():
    with pytest.raises(ValueError):
        KeyboardMouseData.parse(bytes(11))


def _control_bytes(r_x, r_y, l_y, l_x, mode, pause, cl, cr, wheel, trigger,
                   mouse=(0, 0, 0), buttons=(0, 0, 0), mask=0):
    bits = (
        r_x | r_y << 11 | l_y << 22 | l_x << 33 | mode << 44 | pause << 46
        | cl << 47 | cr << 48 | wheel << 49 | trigger << 60
    )
    button_byte = buttons[0] | buttons[1] << 2 | buttons[2] << 4
    return bits.to_bytes(8, "little") + struct.pack("<hhhBH", *mouse, button_byte, mask)


def test_control_data_parse():
    mask = 1 << KEY_NAMES.index("shift")
    data = _control_bytes(1000, 1100, 364, 1684, 2, 1, 0, 1, 1500, 1,
                          mouse=(-20, 30, 4), buttons=(1, 2, 3), mask=mask)
    parsed = ControlData.parse(data)
    assert (parsed.joystick_r_x, parsed.joystick_r_y) == (1000, 1100)
    assert (parsed.joystick_l_y, parsed.joystick_l_x) == (364, 1684)
    assert parsed.mode_switch == 2
    assert (parsed.pause_button, parsed.custom_button_l, parsed.custom_button_r) == (1, 0, 1)
    assert parsed.wheel == 1500
    assert parsed.trigger == 1
    assert (parsed.mouse_x, parsed.mouse_y, parsed.mouse_wheel) == (-20, 30, 4)
    assert (parsed.mouse_left_down, parsed.mouse_right_down, parsed.mouse_mid_down) == (1, 2, 3)
    assert parsed.keys["shift"] and sum(parsed.keys.values()) == 1


def test_control_data_too_short():
    with pytest.raises(ValueError):
        ControlData.parse(bytes(16))