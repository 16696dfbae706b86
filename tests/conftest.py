import numpy as np
import pytest

from envs.rubik.cube import CubeState
from utils.metric_logging import AbsLogger


class RecordingLogger(AbsLogger):
    def __init__(self):
        self.scalars = []
        self.properties = {}
        self.messages = []

    def log_scalar(self, name, step, value):
        self.scalars.append((name, step, value))

    def log_property(self, name, value):
        self.properties[name] = value

    def log_message(self, message):
        self.messages.append(message)

    def last_scalar(self, name):
        return [value for n, _, value in self.scalars if n == name][-1]


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def cube(logger):
    cube = CubeState(logger=logger)
    cube.init()
    return cube


@pytest.fixture
def labels():
    """A sticker array where every slot holds a distinct value."""
    return np.arange(54)


@pytest.fixture(autouse=True)
def seed():
    np.random.seed(1234)
