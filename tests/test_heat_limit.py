import pytest

from rmkit.heat_limit import HeatLimit, ShootHz
from rmkit.messages import GameRobotStatus, PowerHeatData, SpeedLimit

PARAMS = {
    "low_shoot_frequency": 10.0,
    "high_shoot_frequency": 15.0,
    "burst_shoot_frequency": 20.0,
    "minimal_shoot_frequency": 5.0,
    "safe_shoot_frequency": 8.0,
    "heat_coeff": 3.0,
    "type": "ID1_17MM",
    "local_heat_protect_threshold": 0.0,
}


def make(**overrides):
    published = []
    limit = HeatLimit({**PARAMS, **overrides}, published.append)
    return limit, published


def test_plenty_of_heat_gives_mode_frequency():
    limit, _ = make()
    limit.set_status_of_shooter(GameRobotStatus(shooter_cooling_limit=200, shooter_cooling_rate=40))
    limit.get_speed_limit()
    assert limit.get_shoot_frequency() == PARAMS["low_shoot_frequency"]
    limit.set_shoot_frequency(ShootHz.HIGH)
    limit.get_speed_limit()
    assert limit.get_shoot_frequency() == PARAMS["high_shoot_frequency"]


def test_unknown_mode_uses_safe_frequency():
    limit, _ = make()
    limit.set_status_of_shooter(GameRobotStatus(shooter_cooling_limit=200, shooter_cooling_rate=40))
    limit.set_shoot_frequency(9)
    limit.get_speed_limit()
    assert limit.get_shoot_frequency() == PARAMS["safe_shoot_frequency"]
    assert limit.get_shoot_frequency_mode() == 9


def test_margin_below_one_bullet_stops_shooting():
    limit, _ = make()
    limit.set_status_of_shooter(GameRobotStatus(shooter_cooling_limit=5, shooter_cooling_rate=40))
    limit.get_speed_limit()
    assert limit.get_shoot_frequency() == 0.0


def test_margin_of_exactly_one_bullet_matches_cooling():
    limit, _ = make()
    status = GameRobotStatus(shooter_cooling_limit=10, shooter_cooling_rate=40)
    limit.set_status_of_shooter(status)
    limit.get_speed_limit()
    assert limit.get_shoot_frequency() == pytest.approx(status.shooter_cooling_rate / 10.0)


def test_intermediate_margin_is_between_bounds():
    limit, _ = make()
    status = GameRobotStatus(shooter_cooling_limit=20, shooter_cooling_rate=40)
    limit.set_status_of_shooter(status)
    limit.get_speed_limit()
    freq = limit.get_shoot_frequency()
    assert status.shooter_cooling_rate / 10.0 < freq < PARAMS["low_shoot_frequency"]


def test_burst_ignores_heat():
    limit, _ = make()
    limit.set_status_of_shooter(GameRobotStatus(shooter_cooling_limit=0, shooter_cooling_rate=0))
    limit.set_shoot_frequency(ShootHz.BURST)
    limit.get_speed_limit()
    assert limit.get_shoot_frequency() == PARAMS["burst_shoot_frequency"]


def test_speed_limit_by_type():
    assert make()[0].get_speed_limit() == SpeedLimit.SPEED_30M_PER_SECOND
    assert make(type="ID2_17MM")[0].get_speed_limit() == SpeedLimit.SPEED_30M_PER_SECOND
    assert make(type="ID1_42MM")[0].get_speed_limit() == SpeedLimit.SPEED_16M_PER_SECOND
    assert make(type="unknown")[0].get_speed_limit() is None


def test_heat_added_on_rising_edge_only():
    limit, published = make()
    limit.heat_cb(True)
    limit.heat_cb(True)
    limit.timer_cb()
    assert published[-1] == 10.0
    limit.heat_cb(False)
    limit.heat_cb(True)
    limit.timer_cb()
    assert published[-1] == 20.0


def test_large_caliber_bullet_heat():
    limit, published = make(type="ID1_42MM")
    limit.heat_cb(True)
    limit.timer_cb()
    assert published[-1] == 100.0


def test_timer_cools_and_clamps_at_zero():
    limit, published = make()
    limit.set_status_of_shooter(GameRobotStatus(shooter_cooling_limit=100, shooter_cooling_rate=40))
    limit.heat_cb(True)
    limit.timer_cb()
    assert published[-1] < 10.0
    for _ in range(5):
        limit.timer_cb()
    assert published[-1] == 0.0
    assert all(value >= 0.0 for value in published)


def test_protect_threshold_reduces_limit():
    limit, _ = make(local_heat_protect_threshold=5.0)
    limit.set_status_of_shooter(GameRobotStatus(shooter_cooling_limit=100, shooter_cooling_rate=10))
    assert limit.get_cooling_limit() == 95


def test_referee_heat_used_when_local_disabled():
    limit, _ = make(use_local_heat=False)
    limit.set_referee_status(True)
    limit.set_status_of_shooter(GameRobotStatus(shooter_cooling_limit=100, shooter_cooling_rate=10))
    limit.set_cooling_heat_of_shooter(PowerHeatData(shooter_id_1_17_mm_cooling_heat=95))
    limit.get_speed_limit()
    assert limit.get_cooling_heat() == 95
    assert limit.get_shoot_frequency() == 0.0


def test_heat_picked_by_type():
    limit, _ = make(type="ID2_17MM")
    limit.set_cooling_heat_of_shooter(
        PowerHeatData(shooter_id_1_17_mm_cooling_heat=1, shooter_id_2_17_mm_cooling_heat=2)
    )
    assert limit.get_cooling_heat() == 2


def test_missing_params_are_reported(caplog):
    with caplog.at_level("ERROR"):
        HeatLimit({})
    assert "low_shoot_frequency" in caplog.text
    assert "heat_coeff" in caplog.text