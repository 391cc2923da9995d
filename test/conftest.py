import datetime

import pytest

from dynamic_scene.transforms import (
    EarthOrientationParameters,
    Transforms,
    set_default_transform_provider,
)


@pytest.fixture
def t0():
    return datetime.datetime(2024, 3, 20, 3, 6, tzinfo=datetime.timezone.utc)


@pytest.fixture
def earth_orientation_parameters():
    return EarthOrientationParameters.from_samples(
        [
            (datetime.datetime(2024, 3, 19), 0.0125, 0.3131, 0.0106),
            (datetime.datetime(2024, 3, 20), 0.0139, 0.3137, 0.0099),
            (datetime.datetime(2024, 3, 21), 0.0153, 0.3143, 0.0092),
        ]
    )


@pytest.fixture
def default_provider():
    """
    Installs a fresh default transform provider for the duration of a test.
    """
    provider = Transforms()
    previous = set_default_transform_provider(provider)
    yield provider
    set_default_transform_provider(previous)
