from __future__ import annotations

import datetime
import logging
from typing import Callable, List, Optional

from .enums import ReferenceFrame
from .exceptions import require
from .position_property import PositionProperty, convert_to_reference_frame
from .spatial_types import Cartesian3
from .transforms import TransformProvider

logger = logging.getLogger(__name__)


class ConstantPositionProperty(PositionProperty):
    """
    A position property whose value does not change with time.
    """

    def __init__(
        self,
        value: Optional[Cartesian3] = None,
        reference_frame: ReferenceFrame = ReferenceFrame.FIXED,
        transform_provider: Optional[TransformProvider] = None,
    ):
        """
        :param value: The position, or None if the property has no value.
        :param reference_frame: The reference frame the value is expressed in.
        :param transform_provider: The provider used for frame conversions, defaults to the package-wide provider.
        """
        require(reference_frame, "reference_frame")
        self._value: Optional[Cartesian3] = None if value is None else value.clone()
        self._reference_frame = reference_frame
        self.transform_provider = transform_provider
        self.definition_changed: List[Callable[[ConstantPositionProperty], None]] = []
        """
        Callbacks that are called with this property whenever its value or reference frame changes.
        """

    @property
    def is_constant(self) -> bool:
        return True

    @property
    def reference_frame(self) -> ReferenceFrame:
        return self._reference_frame

    def get_value(self, time: datetime.datetime, result: Optional[Cartesian3] = None) -> Optional[Cartesian3]:
        require(time, "time")
        if self._value is None:
            return None
        return self._value.clone(result)

    def get_value_in_reference_frame(
        self,
        time: datetime.datetime,
        reference_frame: ReferenceFrame,
        result: Optional[Cartesian3] = None,
    ) -> Optional[Cartesian3]:
        require(time, "time")
        require(reference_frame, "reference_frame")
        if self._value is None:
            return None
        return convert_to_reference_frame(
            time,
            self._value,
            self._reference_frame,
            reference_frame,
            result,
            transform_provider=self.transform_provider,
        )

    def set_value(self, value: Optional[Cartesian3], reference_frame: Optional[ReferenceFrame] = None):
        """
        Set the value of the property and optionally its reference frame.
        The definition changed callbacks are only notified if something actually changed.

        :param value: The new position, or None to clear the value.
        :param reference_frame: The new reference frame, if omitted the current one is kept.
        """
        changed = False
        if self._value != value:
            self._value = None if value is None else value.clone()
            changed = True
        if reference_frame is not None and reference_frame != self._reference_frame:
            self._reference_frame = reference_frame
            changed = True
        if changed:
            self._notify_definition_changed()

    def _notify_definition_changed(self):
        for callback in list(self.definition_changed):
            try:
                callback(self)
            except Exception as e:
                logger.error(e)

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, ConstantPositionProperty):
            return NotImplemented
        return self._reference_frame == other._reference_frame and self._value == other._value

    __hash__ = None

    def __repr__(self):
        return f"{self.__class__.__name__}({self._value!r}, {self._reference_frame.name})"
