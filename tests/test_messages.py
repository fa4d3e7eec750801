from rmkit.messages import ChassisCmd, JointState, MultiDofCmd, ShootCmd, ShootMode, Twist


def test_index_of_found():
    state = JointState(name=["yaw", "pitch", "barrel"], position=[0.1, 0.2, 0.3])
    assert state.index_of("pitch") == 1
    assert state.position[state.index_of("barrel")] == 0.3


def test_index_of_missing():
    state = JointState(name=["yaw"], position=[0.0])
    assert state.index_of("pitch") is None


def test_mutable_defaults_are_independent():
    first = Twist()
    second = Twist()
    first.linear.x = 5.0
    assert second.linear.x == 0.0
    assert first.linear is not second.linear


def test_chassis_cmd_accel_starts_at_zero():
    cmd = ChassisCmd()
    assert (cmd.accel.linear.x, cmd.accel.linear.y, cmd.accel.angular.z) == (0.0, 0.0, 0.0)


def test_shoot_cmd_defaults_to_stop():
    assert ShootCmd().mode == ShootMode.STOP


def test_multi_dof_vectors_independent():
    a = MultiDofCmd()
    b = MultiDofCmd()
    a.angular.z = 1.0
    assert b.angular.z == 0.0