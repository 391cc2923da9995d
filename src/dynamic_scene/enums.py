from enum import Enum


class ReferenceFrame(int, Enum):
    """
    Enum for the reference frames a position can be expressed in.
    """
    FIXED = 0
    """
    The frame rigidly attached to and rotating with the Earth.
    """
    INERTIAL = 1
    """
    The quasi-inertial, Earth-centered frame (ICRF) that does not rotate with the Earth.
    """
