from __future__ import annotations

import datetime
from dataclasses import dataclass

from typing_extensions import Any


class LogicalError(Exception):
    """
    An error that happens due to mistake in the logical operation or usage of the API during runtime.
    """


class UsageError(LogicalError):
    """
    An exception raised when an incorrect usage of the API is encountered.
    """


@dataclass
class UnsupportedOperationError(UsageError, NotImplementedError):
    """
    Raised when a member of an interface is invoked instead of the member of a concrete implementation.
    """

    type_name: str
    operation: str

    def __post_init__(self):
        msg = f"{self.type_name}.{self.operation} is part of an interface and cannot be invoked directly."
        super().__init__(msg)


@dataclass
class InvalidArgumentError(UsageError, ValueError):
    """
    Raised when a mandatory argument is missing.
    """

    argument_name: str

    def __post_init__(self):
        msg = f"{self.argument_name} is required."
        super().__init__(msg)


@dataclass
class UnknownReferenceFrameError(UsageError, ValueError):
    frame: Any

    def __post_init__(self):
        msg = f"Cannot convert from unknown reference frame {self.frame!r}."
        super().__init__(msg)


class TransformError(Exception):
    """
    Exceptions related to computing rotations between reference frames.
    """


@dataclass
class TransformUnavailableError(TransformError):
    """
    Raised when neither the precise nor the approximate inertial-to-fixed rotation
    can be computed for a time.
    """

    time: datetime.datetime

    def __post_init__(self):
        msg = f"No inertial to fixed rotation is available for {self.time.isoformat()}."
        super().__init__(msg)


@dataclass
class NonMonotonicSamplesError(TransformError, ValueError):
    """
    Raised when earth orientation samples are not strictly increasing in time.
    """

    index: int

    def __post_init__(self):
        msg = f"Sample times must be strictly increasing, but sample {self.index} is not."
        super().__init__(msg)


def require(value: Any, argument_name: str) -> None:
    """
    Raise an :class:`InvalidArgumentError` if a mandatory argument was not supplied.

    :param value: The argument value.
    :param argument_name: The name reported in the error.
    """
    if value is None:
        raise InvalidArgumentError(argument_name)
