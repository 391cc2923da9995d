import datetime

import numpy as np
import pytest
from hypothesis import given
from numpy.testing import assert_allclose

from dynamic_scene.enums import ReferenceFrame
from dynamic_scene.exceptions import (
    InvalidArgumentError,
    TransformUnavailableError,
    UnknownReferenceFrameError,
    UnsupportedOperationError,
)
from dynamic_scene.position_property import PositionProperty, convert_to_reference_frame
from dynamic_scene.spatial_types import Cartesian3, Matrix3
from dynamic_scene.transforms import Transforms, gmst
from utils_for_tests import (
    ExplodingProvider,
    FixedMatrixProvider,
    QUARTER_TURN_ABOUT_Z,
    cartesian3,
    instants,
)

T0 = datetime.datetime(2024, 3, 20, 3, 6)


class DelegatingPositionProperty(PositionProperty):
    """
    Forwards every member to the interface itself.
    """

    @property
    def reference_frame(self):
        return super().reference_frame

    def get_value(self, time, result=None):
        return super().get_value(time, result)

    def get_value_in_reference_frame(self, time, reference_frame, result=None):
        return super().get_value_in_reference_frame(time, reference_frame, result)


class TestPositionPropertyInterface:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            PositionProperty()

    def test_interface_members_are_unsupported(self):
        p = DelegatingPositionProperty()
        with pytest.raises(UnsupportedOperationError):
            p.reference_frame
        with pytest.raises(UnsupportedOperationError):
            p.get_value(T0)
        with pytest.raises(UnsupportedOperationError):
            p.get_value_in_reference_frame(T0, ReferenceFrame.FIXED)

    def test_unsupported_is_not_implemented(self):
        with pytest.raises(NotImplementedError):
            DelegatingPositionProperty().get_value(T0)


class TestConvertToReferenceFrame:
    @given(instants(), cartesian3())
    def test_identity(self, time, value):
        for frame in ReferenceFrame:
            converted = convert_to_reference_frame(
                time, value, frame, frame, transform_provider=ExplodingProvider()
            )
            assert converted == value
            assert converted is not value

    def test_identity_into_result(self):
        value = Cartesian3.from_values(1, 2, 3)
        result = Cartesian3()
        returned = convert_to_reference_frame(
            T0, value, ReferenceFrame.FIXED, ReferenceFrame.FIXED, result, ExplodingProvider()
        )
        assert returned is result
        assert result == value

    @given(instants(), cartesian3())
    def test_round_trip(self, time, value):
        provider = Transforms()
        fixed = convert_to_reference_frame(
            time, value, ReferenceFrame.INERTIAL, ReferenceFrame.FIXED, transform_provider=provider
        )
        inertial = convert_to_reference_frame(
            time, fixed, ReferenceFrame.FIXED, ReferenceFrame.INERTIAL, transform_provider=provider
        )
        assert_allclose(inertial.data, value.data, atol=1e-6 * max(1.0, np.abs(value.data).max()))

    def test_round_trip_with_earth_orientation_parameters(self, t0, earth_orientation_parameters):
        provider = Transforms(earth_orientation_parameters)
        value = Cartesian3.from_values(6378137.0, -1000.0, 42.0)
        fixed = convert_to_reference_frame(
            t0, value, ReferenceFrame.INERTIAL, ReferenceFrame.FIXED, transform_provider=provider
        )
        inertial = convert_to_reference_frame(
            t0, fixed, ReferenceFrame.FIXED, ReferenceFrame.INERTIAL, transform_provider=provider
        )
        assert inertial.almost_equal(value, tolerance=1e-6)

    def test_inertial_to_fixed_applies_matrix(self):
        provider = FixedMatrixProvider(icrf=QUARTER_TURN_ABOUT_Z)
        converted = convert_to_reference_frame(
            T0, Cartesian3.from_values(1, 0, 0), ReferenceFrame.INERTIAL, ReferenceFrame.FIXED,
            transform_provider=provider,
        )
        assert_allclose(converted.data, [0.0, -1.0, 0.0])

    def test_fixed_to_inertial_applies_transpose(self):
        provider = FixedMatrixProvider(icrf=QUARTER_TURN_ABOUT_Z)
        result = Cartesian3()
        returned = convert_to_reference_frame(
            T0, Cartesian3.from_values(1, 0, 0), ReferenceFrame.FIXED, ReferenceFrame.INERTIAL, result,
            transform_provider=provider,
        )
        assert returned is result
        assert_allclose(result.data, [0.0, 1.0, 0.0])

    def test_precise_matrix_preferred(self):
        provider = FixedMatrixProvider(icrf=Matrix3.identity(), teme=QUARTER_TURN_ABOUT_Z)
        converted = convert_to_reference_frame(
            T0, Cartesian3.from_values(1, 0, 0), ReferenceFrame.INERTIAL, ReferenceFrame.FIXED,
            transform_provider=provider,
        )
        assert converted == Cartesian3.from_values(1, 0, 0)
        assert provider.icrf_calls == 1
        assert provider.teme_calls == 0

    def test_fallback_when_precise_unavailable(self):
        provider = FixedMatrixProvider(icrf=None, teme=QUARTER_TURN_ABOUT_Z)
        converted = convert_to_reference_frame(
            T0, Cartesian3.from_values(1, 0, 0), ReferenceFrame.INERTIAL, ReferenceFrame.FIXED,
            transform_provider=provider,
        )
        assert_allclose(converted.data, [0.0, -1.0, 0.0])
        assert provider.icrf_calls == 1
        assert provider.teme_calls == 1

    def test_default_provider_falls_back_to_pseudo_fixed(self, default_provider):
        converted = convert_to_reference_frame(
            T0, Cartesian3.from_values(1, 0, 0), ReferenceFrame.INERTIAL, ReferenceFrame.FIXED
        )
        expected = Matrix3.from_rotation_z(gmst(T0)).multiply_by_vector(Cartesian3.from_values(1, 0, 0))
        assert converted.almost_equal(expected, tolerance=1e-12)

    def test_both_providers_unavailable(self):
        with pytest.raises(TransformUnavailableError):
            convert_to_reference_frame(
                T0, Cartesian3(), ReferenceFrame.FIXED, ReferenceFrame.INERTIAL,
                transform_provider=FixedMatrixProvider(),
            )

    def test_unknown_input_frame(self):
        provider = FixedMatrixProvider(icrf=Matrix3.identity())
        with pytest.raises(UnknownReferenceFrameError):
            convert_to_reference_frame(
                T0, Cartesian3(), 7, ReferenceFrame.FIXED, transform_provider=provider
            )
        assert provider.icrf_calls == 0

    @pytest.mark.parametrize("input_frame", list(ReferenceFrame))
    def test_unknown_output_frame(self, input_frame):
        provider = FixedMatrixProvider(icrf=QUARTER_TURN_ABOUT_Z)
        with pytest.raises(UnknownReferenceFrameError) as error:
            convert_to_reference_frame(
                T0, Cartesian3.from_values(1, 0, 0), input_frame, 7, transform_provider=provider
            )
        assert error.value.frame == 7
        assert provider.icrf_calls == 0
        assert provider.teme_calls == 0

    @pytest.mark.parametrize(
        "time, value, input_frame, output_frame, name",
        [
            (None, Cartesian3(), ReferenceFrame.FIXED, ReferenceFrame.INERTIAL, "time"),
            (T0, None, ReferenceFrame.FIXED, ReferenceFrame.INERTIAL, "value"),
            (T0, Cartesian3(), None, ReferenceFrame.INERTIAL, "input_frame"),
            (T0, Cartesian3(), ReferenceFrame.FIXED, None, "output_frame"),
        ],
    )
    def test_missing_arguments(self, time, value, input_frame, output_frame, name):
        with pytest.raises(InvalidArgumentError) as error:
            convert_to_reference_frame(
                time, value, input_frame, output_frame, transform_provider=ExplodingProvider()
            )
        assert error.value.argument_name == name
