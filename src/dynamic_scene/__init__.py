__version__ = "0.1.0"


import logging

logger = logging.getLogger("dynamic_scene")
logger.setLevel(logging.INFO)

from .enums import ReferenceFrame
from .spatial_types import Cartesian3, Matrix3
from .transforms import (
    TransformProvider,
    Transforms,
    EarthOrientationParameters,
    default_transforms,
    set_default_transform_provider,
)
from .position_property import PositionProperty, convert_to_reference_frame
from .constant_position_property import ConstantPositionProperty
