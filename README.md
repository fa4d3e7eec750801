# rmkit

Building blocks for robot control software that need no middleware. Inputs
are plain numbers, lists, dictionaries, numpy arrays and dataclasses, and
outputs go to callables you supply.

## What is in it

- `rmkit.mathutil`: `angular_minus` (shortest signed angle difference),
  `min_abs`, `sgn`, `square`, and `alpha` (the smoothing factor of a
  first-order low-pass filter for a cutoff and a sample rate).
- `rmkit.params`: `get_param`, `as_float` and `get_float` for reading numeric
  values out of dictionaries and lists; non-numeric values raise `TypeError`.
- `rmkit.interpolation.LinearInterp`: piecewise-linear lookup over `[x, y]`
  points. Inputs outside the table are clamped to the end values; unsorted
  points raise `ValueError`.
- `rmkit.traj_gen`: `RampTraj`, an accelerate/decelerate position profile
  with a bounded acceleration (`calc` returns `False` when the limit cannot
  cover the distance in the given time), and `MinTimeTraj`, a bang-bang
  minimum-time torque controller.
- `rmkit.one_euro_filter.OneEuroFilter`: the One Euro adaptive low-pass
  filter.
- `rmkit.kalman_filter.KalmanFilter`: a linear Kalman filter on numpy
  arrays. It does nothing until `clear(x)` sets the initial state.
- `rmkit.lqr`: `solve_riccati_arimoto_potter` and `Lqr`, whose `compute_k`
  returns `False` when Q is not symmetric positive semi-definite or R is not
  symmetric positive definite.
- `rmkit.messages`: dataclasses for the data the limits work on
  (`ChassisCmd`, `GameRobotStatus`, `PowerHeatData`, `CapacityData`,
  `ShootCmd`, `JointState`, …) and the `ShootMode` and `SpeedLimit` enums.
- `rmkit.heat_limit.HeatLimit`: tracks barrel heat, either from the referee
  or from a local estimate fed by `heat_cb` and cooled by `timer_cb` (call it
  every 0.1 s), and gives the allowed shooting frequency for the selected
  `ShootHz` mode.
- `rmkit.power_limit.PowerLimit`: picks the chassis power limit from robot
  type, referee status, buffer energy and super-capacitor state
  (`PowerMode`), writing it into a `ChassisCmd`.
- `rmkit.vt_protocol`: the video-transmission wire format. `crc8`, `crc16`,
  `verify_crc8`, `verify_crc16`, `append_crc8`, `append_crc16`, the `CmdId`
  enum, and `parse` class methods for `FrameHeader`, `CustomControllerData`,
  `KeyboardMouseData` and `ControlData`.
- `rmkit.video_transmission.VideoTransmission`: keeps a 256-byte window of
  the incoming stream, finds CRC-checked frames in it and calls
  `publish(topic, msg)` with a `CustomControllerMsg`
  (`custom_controller_data`), `KeyboardMouseMsg` (`keyboard_mouse_data`) or
  `ReceiverControlMsg` (`receiver_control_data`). Bytes come either from a
  serial port through `read()` or directly through `feed(data)`;
  `is_online()` turns false once no valid frame has arrived for 0.1 s.

## Examples

Piecewise-linear lookup:

```python
from rmkit.interpolation import LinearInterp

interp = LinearInterp()
interp.init([[0, 1.0], [50, 2.0], [100, 3.0]])
interp.output(25)    # 1.5
interp.output(500)   # 3.0
```

A ramp from 0 to 1 over 2 seconds with acceleration limit 4:

```python
from rmkit.traj_gen import RampTraj

traj = RampTraj()
traj.set_limit(4.0)
traj.set_state(0.0, 1.0, 0.0)
if traj.calc(2.0):
    print(traj.get_pos(1.0), traj.get_vel(1.0), traj.get_acc(1.0))
```

Smoothing a signal:

```python
from rmkit.one_euro_filter import OneEuroFilter

f = OneEuroFilter(100.0, 1.0, 0.0, 1.0)
for sample in (0.0, 0.1, 0.05, 0.2):
    f.input(sample)
print(f.output())
```

Building and checking a frame for the video-transmission link:

```python
import struct
from rmkit.vt_protocol import FrameHeader, append_crc8, append_crc16, verify_crc8, verify_crc16

payload = bytes(12)
header = append_crc8(b"\xa5" + struct.pack("<H", len(payload)) + b"\x00")
frame = append_crc16(header + struct.pack("<H", 0x0304) + payload)

assert verify_crc8(frame[:5]) and verify_crc16(frame)
FrameHeader.parse(frame).data_length   # 12
```

## Command line

```
rmkit-vt [--port PORT] [--baudrate BAUD] [--rate HZ]
```

Opens the serial port (default `/dev/usbImagetran` at 921600 baud), polls it
at the given rate (default 100 Hz) and prints each decoded message as
`topic: message` until interrupted. It exits with status 1 if the port
cannot be opened.

## What it does not do

The package holds the numeric and rule logic only. It has no command
senders for chassis, gimbal or shooter, no controller start/stop batching,
no calibration sequencing and no service-call helpers, and it does not
publish to any robot middleware: decoded messages and heat estimates are
handed to the callables you pass in.

## Tests

The tests use pytest and live in `tests/`; install the `test` extra to get
it.