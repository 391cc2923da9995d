from __future__ import annotations

import datetime
import logging
from abc import ABC, abstractmethod
from typing import Optional

from .enums import ReferenceFrame
from .exceptions import (
    TransformUnavailableError,
    UnknownReferenceFrameError,
    UnsupportedOperationError,
    require,
)
from .spatial_types import Cartesian3, Matrix3
from .transforms import TransformProvider, get_default_transform_provider

logger = logging.getLogger(__name__)


class PositionProperty(ABC):
    """
    The interface for all properties that represent a world location as a :class:`Cartesian3`
    with an associated :class:`ReferenceFrame`.

    Concrete implementations are e.g. constant, sampled, interval based or composite positions.
    """

    @property
    @abstractmethod
    def reference_frame(self) -> ReferenceFrame:
        """
        The reference frame the values of this property are natively expressed in.
        """
        raise UnsupportedOperationError(PositionProperty.__name__, "reference_frame")

    @abstractmethod
    def get_value(self, time: datetime.datetime, result: Optional[Cartesian3] = None) -> Optional[Cartesian3]:
        """
        Get the value of the property at the provided time in the native reference frame.

        :param time: The time for which to retrieve the value.
        :param result: The object to store the value into. If omitted, a new instance is created.
        :return: The modified result or a new instance.
        :raises InvalidArgumentError: If time is None.
        """
        raise UnsupportedOperationError(PositionProperty.__name__, "get_value")

    @abstractmethod
    def get_value_in_reference_frame(
        self,
        time: datetime.datetime,
        reference_frame: ReferenceFrame,
        result: Optional[Cartesian3] = None,
    ) -> Optional[Cartesian3]:
        """
        Get the value of the property at the provided time in the provided reference frame.

        :param time: The time for which to retrieve the value.
        :param reference_frame: The desired reference frame of the result.
        :param result: The object to store the value into. If omitted, a new instance is created.
        :return: The modified result or a new instance.
        :raises InvalidArgumentError: If time or reference_frame is None.
        """
        raise UnsupportedOperationError(PositionProperty.__name__, "get_value_in_reference_frame")


def convert_to_reference_frame(
    time: datetime.datetime,
    value: Cartesian3,
    input_frame: ReferenceFrame,
    output_frame: ReferenceFrame,
    result: Optional[Cartesian3] = None,
    transform_provider: Optional[TransformProvider] = None,
) -> Cartesian3:
    """
    Re-express a position from one reference frame in another at the given time.

    The inertial to fixed rotation is taken from the precise ICRF computation of the transform provider.
    If that is not available for the time, the approximate TEME to pseudo-fixed rotation is used instead.

    :param time: The time of the conversion.
    :param value: The position in the input frame.
    :param input_frame: The frame the value is expressed in.
    :param output_frame: The frame to express the value in.
    :param result: The object to store the converted value into. If omitted, a new instance is created.
    :param transform_provider: The provider of the rotations, defaults to the package-wide provider.
    :return: The modified result or a new instance.
    """
    require(time, "time")
    require(value, "value")
    require(input_frame, "input_frame")
    require(output_frame, "output_frame")

    if input_frame == output_frame:
        return value.clone(result)

    if input_frame not in (ReferenceFrame.INERTIAL, ReferenceFrame.FIXED):
        raise UnknownReferenceFrameError(input_frame)
    if output_frame not in (ReferenceFrame.INERTIAL, ReferenceFrame.FIXED):
        raise UnknownReferenceFrameError(output_frame)

    provider = transform_provider or get_default_transform_provider()
    rotation = Matrix3()
    icrf_to_fixed = provider.compute_icrf_to_fixed_matrix(time, rotation)
    if icrf_to_fixed is None:
        logger.debug(f"No ICRF to fixed rotation for {time.isoformat()}, falling back to pseudo-fixed.")
        icrf_to_fixed = provider.compute_teme_to_pseudo_fixed_matrix(time, rotation)
    if icrf_to_fixed is None:
        raise TransformUnavailableError(time)

    if input_frame == ReferenceFrame.INERTIAL:
        return icrf_to_fixed.multiply_by_vector(value, result)
    return icrf_to_fixed.transpose(rotation).multiply_by_vector(value, result)
