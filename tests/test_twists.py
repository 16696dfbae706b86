import pytest

from envs.rubik.twists import (DOUBLE_TWIST_LIST, SINGLE_TWIST_LIST, TWIST_LIST, TWIST_RULE,
                               InvalidTwistError, Twist, format_twists, parse_twists)


def test_rule_table_has_27_twists():
    assert len(TWIST_RULE) == 27
    assert len(SINGLE_TWIST_LIST) == 18
    assert len(DOUBLE_TWIST_LIST) == 9
    assert set(TWIST_LIST) == set(Twist)


def test_rule_table_is_read_only():
    with pytest.raises(TypeError):
        TWIST_RULE[Twist.U] = TWIST_RULE[Twist.D]


@pytest.mark.parametrize("twist", list(Twist))
def test_rule_shape(twist):
    rule = TWIST_RULE[twist]
    assert sorted(abs(a) for a in rule.axis) == [0, 0, 1]
    assert set(rule.levels) <= {0, 1, 2}
    assert rule.steps in (1, 2)


def test_single_twists_come_in_inverse_pairs():
    for twist in SINGLE_TWIST_LIST:
        rule = TWIST_RULE[twist]
        inverse_rule = TWIST_RULE[twist.inverse]
        assert inverse_rule.axis == tuple(-a for a in rule.axis)
        assert inverse_rule.levels == rule.levels
        assert twist.inverse.inverse is twist


def test_double_twists_match_their_quarter_twist():
    for twist in DOUBLE_TWIST_LIST:
        quarter = Twist(twist.letter)
        assert TWIST_RULE[twist].axis == TWIST_RULE[quarter].axis
        assert TWIST_RULE[twist].levels == TWIST_RULE[quarter].levels
        assert twist.inverse is twist


@pytest.mark.parametrize("twist", list(Twist))
def test_tokens_round_trip(twist):
    assert Twist.parse(str(twist)) is twist
    assert Twist.parse(twist) is twist


@pytest.mark.parametrize("token", ["X", "u", "", "U3", "U''", None, 3])
def test_unknown_tokens_are_rejected(token):
    with pytest.raises(InvalidTwistError):
        Twist.parse(token)


def test_invalid_twist_error_is_a_value_error():
    assert issubclass(InvalidTwistError, ValueError)


def test_parse_sequences():
    assert parse_twists("U R U'") == [Twist.U, Twist.R, Twist.UR]
    assert parse_twists(["M2", "E'"]) == [Twist.M2, Twist.ER]
    assert parse_twists(Twist.S) == [Twist.S]
    assert parse_twists("") == []
    assert format_twists(parse_twists("U R2 M'")) == "U R2 M'"


def test_cancels():
    assert Twist.U.cancels(Twist.UR)
    assert Twist.UR.cancels(Twist.U)
    assert not Twist.U.cancels(Twist.U)
    assert not Twist.U.cancels(Twist.D)
    assert not Twist.U2.cancels(Twist.U2)
