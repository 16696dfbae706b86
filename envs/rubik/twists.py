"""
Twist rule table and twist notation.

Every twist is a rotation of one layer (or middle slice) around an axis.
`axis` is a unit vector with a single nonzero component, `levels` are the
layers that move along that axis and `steps` is the number of quarter turns.
"""
from collections import namedtuple
from enum import Enum
from types import MappingProxyType


class InvalidTwistError(ValueError):
    pass


class Twist(Enum):
    U = "U"
    UR = "U'"
    F = "F"
    FR = "F'"
    R = "R"
    RR = "R'"
    D = "D"
    DR = "D'"
    B = "B"
    BR = "B'"
    L = "L"
    LR = "L'"
    M = "M"
    MR = "M'"
    E = "E"
    ER = "E'"
    S = "S"
    SR = "S'"
    U2 = "U2"
    F2 = "F2"
    R2 = "R2"
    D2 = "D2"
    B2 = "B2"
    L2 = "L2"
    M2 = "M2"
    E2 = "E2"
    S2 = "S2"

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, token):
        """
        Turn a notation token ("U", "U'", "U2", ...) or a `Twist` into a
        `Twist`. Anything else raises `InvalidTwistError`.
        """
        if isinstance(token, cls):
            return token
        try:
            return cls(token.strip())
        except (ValueError, AttributeError):
            raise InvalidTwistError(f"Unknown twist: {token!r}") from None

    @property
    def letter(self):
        return self.value[0]

    @property
    def is_double(self):
        return TWIST_RULE[self].steps == 2

    @property
    def inverse(self):
        if self.is_double:
            return self
        if self.value.endswith("'"):
            return Twist(self.letter)
        return Twist(self.letter + "'")

    def cancels(self, other):
        """True when `other` directly undoes this twist."""
        return not self.is_double and other is self.inverse


TwistRule = namedtuple("TwistRule", ["axis", "levels", "steps"])

TWIST_RULE = MappingProxyType({
    Twist.U: TwistRule((0, -1, 0), (2,), 1),
    Twist.UR: TwistRule((0, 1, 0), (2,), 1),
    Twist.F: TwistRule((0, 0, -1), (2,), 1),
    Twist.FR: TwistRule((0, 0, 1), (2,), 1),
    Twist.R: TwistRule((-1, 0, 0), (2,), 1),
    Twist.RR: TwistRule((1, 0, 0), (2,), 1),
    Twist.D: TwistRule((0, 1, 0), (0,), 1),
    Twist.DR: TwistRule((0, -1, 0), (0,), 1),
    Twist.B: TwistRule((0, 0, 1), (0,), 1),
    Twist.BR: TwistRule((0, 0, -1), (0,), 1),
    Twist.L: TwistRule((1, 0, 0), (0,), 1),
    Twist.LR: TwistRule((-1, 0, 0), (0,), 1),
    Twist.M: TwistRule((1, 0, 0), (1,), 1),
    Twist.MR: TwistRule((-1, 0, 0), (1,), 1),
    Twist.E: TwistRule((0, 1, 0), (1,), 1),
    Twist.ER: TwistRule((0, -1, 0), (1,), 1),
    Twist.S: TwistRule((0, 0, -1), (1,), 1),
    Twist.SR: TwistRule((0, 0, 1), (1,), 1),
    Twist.U2: TwistRule((0, -1, 0), (2,), 2),
    Twist.F2: TwistRule((0, 0, -1), (2,), 2),
    Twist.R2: TwistRule((-1, 0, 0), (2,), 2),
    Twist.D2: TwistRule((0, 1, 0), (0,), 2),
    Twist.B2: TwistRule((0, 0, 1), (0,), 2),
    Twist.L2: TwistRule((1, 0, 0), (0,), 2),
    Twist.M2: TwistRule((1, 0, 0), (1,), 2),
    Twist.E2: TwistRule((0, 1, 0), (1,), 2),
    Twist.S2: TwistRule((0, 0, -1), (1,), 2),
})

SINGLE_TWIST_LIST = tuple(t for t in Twist if TWIST_RULE[t].steps == 1)
DOUBLE_TWIST_LIST = tuple(t for t in Twist if TWIST_RULE[t].steps == 2)
TWIST_LIST = SINGLE_TWIST_LIST + DOUBLE_TWIST_LIST


def parse_twists(twists):
    """Parse a space separated string or an iterable of tokens."""
    if isinstance(twists, (str, Twist)):
        twists = twists.split() if isinstance(twists, str) else [twists]
    return [Twist.parse(t) for t in twists]


def format_twists(twists):
    return " ".join(str(t) for t in twists)
