import os
import sys
from abc import ABC, abstractmethod


class AbsLogger(ABC):
    @abstractmethod
    def log_scalar(self, name, step, value):
        raise NotImplementedError

    @abstractmethod
    def log_property(self, name, value):
        raise NotImplementedError

    @abstractmethod
    def log_message(self, message):
        raise NotImplementedError


class StdoutLogger(AbsLogger):
    """Logs to standard error, optionally mirroring messages to a file."""

    def __init__(self, file=None, output_dir=None):
        self._file = file
        self.output_dir = output_dir

    @property
    def file(self):
        # resolved lazily so a redirected stderr is honoured
        return self._file if self._file is not None else sys.stderr

    def log_scalar(self, name, step, value):
        """Logs a scalar to stdout."""
        # Format:
        #      1 | solved_rate:                0.789
        #   1234 | avg_length:                12.345
        #   2137 | oracle_time:               1.0e-5
        if 0 < value < 1e-2:
            line = "{:>6} | {:64}{:>9.1e}".format(step, name + ":", value)
        else:
            line = "{:>6} | {:64}{:>9.3f}".format(step, name + ":", value)
        print(line, file=self.file)
        self._append(line)

    def log_property(self, name, value):
        self.log_message(f"{name}: {value}")

    def log_message(self, message):
        print(message, file=self.file)
        self._append(message)

    def _append(self, line):
        if self.output_dir is None:
            return
        os.makedirs(self.output_dir, exist_ok=True)
        with open(os.path.join(self.output_dir, "log.txt"), "a") as f:
            f.write(f"{line}\n")


class Loggers:
    def __init__(self):
        self.loggers = []

    def register_logger(self, logger: AbsLogger):
        self.loggers.append(logger)

    def log_scalar(self, name, step, value):
        for logger in self.loggers:
            logger.log_scalar(name, step, value)

    def log_property(self, name, value):
        for logger in self.loggers:
            logger.log_property(name, value)

    def log_message(self, message):
        for logger in self.loggers:
            logger.log_message(message)
