from __future__ import annotations

import datetime
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray
from typing_extensions import Self

from .exceptions import NonMonotonicSamplesError, require
from .spatial_types import Matrix3

logger = logging.getLogger(__name__)

J2000_JULIAN_DATE = 2451545.0
UNIX_EPOCH_JULIAN_DATE = 2440587.5
SECONDS_PER_DAY = 86400.0
DAYS_PER_JULIAN_CENTURY = 36525.0
ARCSECONDS_TO_RADIANS = np.pi / (180.0 * 3600.0)
SIDEREAL_TO_SOLAR_RATE = 1.00273790935
"""
Ratio of a mean solar day to a mean sidereal day.
"""
TT_MINUS_UTC_SECONDS = 69.184
"""
TAI - UTC (37 leap seconds, valid since 2017) plus TT - TAI (32.184 s).
"""


def as_utc(time: datetime.datetime) -> datetime.datetime:
    """
    Return the time as an aware UTC datetime. Naive datetimes are interpreted as UTC.
    """
    if time.tzinfo is None:
        return time.replace(tzinfo=datetime.timezone.utc)
    return time.astimezone(datetime.timezone.utc)


def julian_date(time: datetime.datetime) -> float:
    """
    :param time: The time to convert.
    :return: The julian date of the time on its own time scale.
    """
    return as_utc(time).timestamp() / SECONDS_PER_DAY + UNIX_EPOCH_JULIAN_DATE


def gmst(time: datetime.datetime) -> float:
    """
    Compute the Greenwich mean sidereal time with the IAU 1982 model.

    The sidereal time at 0h UT of the day is evaluated with the polynomial in julian centuries since
    J2000, and the earth rotation since midnight is added on top.

    :param time: The UT1 time, UTC is an acceptable approximation.
    :return: The Greenwich mean sidereal time in radians in [0, 2 pi).
    """
    time = as_utc(time)
    midnight = time.replace(hour=0, minute=0, second=0, microsecond=0)
    seconds_into_day = (time - midnight).total_seconds()
    t = (julian_date(midnight) - J2000_JULIAN_DATE) / DAYS_PER_JULIAN_CENTURY
    gmst_at_midnight = 24110.54841 + t * (8640184.812866 + t * (0.093104 + t * -6.2e-6))
    seconds = gmst_at_midnight + SIDEREAL_TO_SOLAR_RATE * seconds_into_day
    return float(np.mod(seconds * 2.0 * np.pi / SECONDS_PER_DAY, 2.0 * np.pi))


def precession_matrix(time: datetime.datetime) -> Matrix3:
    """
    Compute the IAU 1976 precession from the J2000 mean equator and equinox to the mean equator
    and equinox of date.

    :param time: The UTC time, converted to TT internally.
    :return: The passive rotation matrix.
    """
    jd_tt = julian_date(time) + TT_MINUS_UTC_SECONDS / SECONDS_PER_DAY
    t = (jd_tt - J2000_JULIAN_DATE) / DAYS_PER_JULIAN_CENTURY
    zeta = (2306.2181 * t + 0.30188 * t**2 + 0.017998 * t**3) * ARCSECONDS_TO_RADIANS
    theta = (2004.3109 * t - 0.42665 * t**2 - 0.041833 * t**3) * ARCSECONDS_TO_RADIANS
    z = (2306.2181 * t + 1.09468 * t**2 + 0.018203 * t**3) * ARCSECONDS_TO_RADIANS
    return (
        Matrix3.from_rotation_z(-z)
        @ Matrix3.from_rotation_y(theta)
        @ Matrix3.from_rotation_z(-zeta)
    )


def polar_motion_matrix(x_pole: float, y_pole: float) -> Matrix3:
    """
    Compute the rotation from the terrestrial intermediate frame to the earth fixed frame,
    the transpose of the IERS polar motion matrix W = R2(xp) R1(yp). The TIO locator s' is neglected.

    :param x_pole: Polar motion x coordinate in arcseconds.
    :param y_pole: Polar motion y coordinate in arcseconds.
    :return: The passive rotation matrix R1(-yp) R2(-xp).
    """
    return Matrix3.from_rotation_x(-y_pole * ARCSECONDS_TO_RADIANS) @ Matrix3.from_rotation_y(
        -x_pole * ARCSECONDS_TO_RADIANS
    )


@dataclass(eq=False)
class EarthOrientationParameters:
    """
    Sampled earth orientation parameters, as published by the IERS.

    Values between samples are linearly interpolated. Times outside the sampled span are not covered,
    which makes the precise inertial to fixed rotation unavailable for them.
    """

    times: List[datetime.datetime]
    """
    The sample times, strictly increasing.
    """

    x_pole: NDArray
    """
    Polar motion x coordinate in arcseconds.
    """

    y_pole: NDArray
    """
    Polar motion y coordinate in arcseconds.
    """

    ut1_minus_utc: NDArray
    """
    UT1 - UTC in seconds.
    """

    _seconds: NDArray = field(init=False, repr=False)

    def __post_init__(self):
        self.times = [as_utc(t) for t in self.times]
        self.x_pole = np.asarray(self.x_pole, dtype=float)
        self.y_pole = np.asarray(self.y_pole, dtype=float)
        self.ut1_minus_utc = np.asarray(self.ut1_minus_utc, dtype=float)
        if not (len(self.times) == len(self.x_pole) == len(self.y_pole) == len(self.ut1_minus_utc)):
            raise ValueError("All earth orientation parameter columns must have the same length.")
        if len(self.times) == 0:
            raise ValueError("At least one earth orientation sample is required.")
        self._seconds = np.array([t.timestamp() for t in self.times])
        for index in range(1, len(self._seconds)):
            if self._seconds[index] <= self._seconds[index - 1]:
                raise NonMonotonicSamplesError(index)

    @classmethod
    def from_samples(cls, samples: Iterable[Tuple[datetime.datetime, float, float, float]]) -> Self:
        """
        Create the parameters from rows of (time, x_pole, y_pole, ut1_minus_utc).
        """
        samples = list(samples)
        return cls(
            times=[s[0] for s in samples],
            x_pole=[s[1] for s in samples],
            y_pole=[s[2] for s in samples],
            ut1_minus_utc=[s[3] for s in samples],
        )

    @property
    def start(self) -> datetime.datetime:
        return self.times[0]

    @property
    def stop(self) -> datetime.datetime:
        return self.times[-1]

    def covers(self, time: datetime.datetime) -> bool:
        return self.start <= as_utc(time) <= self.stop

    def interpolate(self, time: datetime.datetime) -> Tuple[float, float, float]:
        """
        :param time: A time covered by the samples.
        :return: The tuple (x_pole, y_pole, ut1_minus_utc) at the time.
        """
        if not self.covers(time):
            raise ValueError(f"{time.isoformat()} is outside of [{self.start.isoformat()}, {self.stop.isoformat()}].")
        seconds = as_utc(time).timestamp()
        return (
            float(np.interp(seconds, self._seconds, self.x_pole)),
            float(np.interp(seconds, self._seconds, self.y_pole)),
            float(np.interp(seconds, self._seconds, self.ut1_minus_utc)),
        )


class TransformProvider(ABC):
    """
    Supplies time dependent rotations from the inertial to the fixed frame.
    """

    @abstractmethod
    def compute_icrf_to_fixed_matrix(
        self, time: datetime.datetime, result: Optional[Matrix3] = None
    ) -> Optional[Matrix3]:
        """
        Compute the precise rotation from the ICRF to the earth fixed frame.

        :param time: The time of the rotation.
        :param result: The matrix to store the rotation in. If omitted, a new instance is created.
        :return: The rotation, or None if it is not available for the time.
        """
        raise NotImplementedError

    @abstractmethod
    def compute_teme_to_pseudo_fixed_matrix(
        self, time: datetime.datetime, result: Optional[Matrix3] = None
    ) -> Optional[Matrix3]:
        """
        Compute the approximate rotation from the true equator mean equinox frame to the
        pseudo-fixed frame. This must succeed for every supported time.

        :param time: The time of the rotation.
        :param result: The matrix to store the rotation in. If omitted, a new instance is created.
        :return: The rotation.
        """
        raise NotImplementedError


@dataclass
class Transforms(TransformProvider):
    """
    The default transform provider.

    The pseudo-fixed rotation only accounts for the earth rotation through the Greenwich mean
    sidereal time. The precise rotation additionally applies IAU 1976 precession, UT1 and polar motion
    and therefore needs earth orientation parameters covering the requested time. Nutation is not modelled.
    """

    earth_orientation_parameters: Optional[EarthOrientationParameters] = None

    def load_earth_orientation_parameters(self, parameters: Optional[EarthOrientationParameters]):
        self.earth_orientation_parameters = parameters
        if parameters is not None:
            logger.info(
                f"Loaded earth orientation parameters from {parameters.start.isoformat()} "
                f"to {parameters.stop.isoformat()}"
            )

    def compute_icrf_to_fixed_matrix(
        self, time: datetime.datetime, result: Optional[Matrix3] = None
    ) -> Optional[Matrix3]:
        require(time, "time")
        parameters = self.earth_orientation_parameters
        if parameters is None or not parameters.covers(time):
            return None
        x_pole, y_pole, ut1_minus_utc = parameters.interpolate(time)
        ut1 = as_utc(time) + datetime.timedelta(seconds=ut1_minus_utc)
        polar_motion = polar_motion_matrix(x_pole, y_pole)
        earth_rotation = Matrix3.from_rotation_z(gmst(ut1))
        return (polar_motion @ earth_rotation).multiply(precession_matrix(time), result)

    def compute_teme_to_pseudo_fixed_matrix(
        self, time: datetime.datetime, result: Optional[Matrix3] = None
    ) -> Matrix3:
        require(time, "time")
        return Matrix3.from_rotation_z(gmst(time)).clone(result)


default_transforms = Transforms()
"""
The transform provider used by conversions that are not given one explicitly.
"""

_default_transform_provider: TransformProvider = default_transforms


def get_default_transform_provider() -> TransformProvider:
    return _default_transform_provider


def set_default_transform_provider(provider: TransformProvider) -> TransformProvider:
    """
    Replace the transform provider used by conversions that are not given one explicitly.

    :param provider: The new default provider.
    :return: The previous default provider, so it can be restored.
    """
    global _default_transform_provider
    require(provider, "provider")
    previous = _default_transform_provider
    _default_transform_provider = provider
    return previous
