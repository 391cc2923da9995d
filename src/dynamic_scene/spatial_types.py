from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray
from typing_extensions import Self

from .exceptions import require


@dataclass(eq=False)
class Cartesian3:
    """
    A 3D cartesian position with x, y and z components, backed by a numpy array.

    A Cartesian3 carries no reference frame of its own; it is only meaningful together with the
    :class:`~dynamic_scene.enums.ReferenceFrame` of whatever produced it.
    """

    data: NDArray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        self.data = np.asarray(self.data, dtype=float)
        assert self.data.shape == (3,), "Vector must be 3-dimensional"

    @classmethod
    def from_values(cls, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Self:
        return cls(data=np.array([x, y, z], dtype=float))

    def to_values(self) -> Tuple[float, float, float]:
        """Return the tuple (x,y,z)"""
        return float(self.data[0]), float(self.data[1]), float(self.data[2])

    @property
    def x(self) -> float:
        return float(self.data[0])

    @property
    def y(self) -> float:
        return float(self.data[1])

    @property
    def z(self) -> float:
        return float(self.data[2])

    def clone(self, result: Optional[Cartesian3] = None) -> Cartesian3:
        """
        Copy this vector.

        :param result: The vector to copy into. If omitted, a new instance is created.
        :return: The modified result or a new instance.
        """
        if result is None:
            return Cartesian3(data=self.data.copy())
        result.data[:] = self.data
        return result

    def almost_equal(self, other: Cartesian3, tolerance: float = 1e-6) -> bool:
        return bool(np.allclose(self.data, other.data, rtol=0.0, atol=tolerance))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Cartesian3):
            return NotImplemented
        return bool(np.array_equal(self.data, other.data))

    def __repr__(self):
        return f"Cartesian3({self.x}, {self.y}, {self.z})"


@dataclass(eq=False)
class Matrix3:
    """
    A 3x3 matrix, used to represent rotations between reference frames.

    The rotation convention is passive: ``matrix.multiply_by_vector(v)`` re-expresses ``v`` in the
    rotated frame. Since rotation matrices are orthonormal, the transpose is the inverse rotation.
    """

    data: NDArray = field(default_factory=lambda: np.eye(3))

    def __post_init__(self):
        self.data = np.asarray(self.data, dtype=float)
        assert self.data.shape == (3, 3), "Matrix must be 3x3"

    @classmethod
    def identity(cls) -> Self:
        return cls(data=np.eye(3))

    @classmethod
    def from_rotation_x(cls, angle: float) -> Self:
        """
        Elementary passive rotation about the x-axis.

        :param angle: The rotation angle in radians.
        """
        c, s = np.cos(angle), np.sin(angle)
        return cls(data=np.array([[1.0, 0.0, 0.0], [0.0, c, s], [0.0, -s, c]]))

    @classmethod
    def from_rotation_y(cls, angle: float) -> Self:
        """
        Elementary passive rotation about the y-axis.

        :param angle: The rotation angle in radians.
        """
        c, s = np.cos(angle), np.sin(angle)
        return cls(data=np.array([[c, 0.0, -s], [0.0, 1.0, 0.0], [s, 0.0, c]]))

    @classmethod
    def from_rotation_z(cls, angle: float) -> Self:
        """
        Elementary passive rotation about the z-axis.

        :param angle: The rotation angle in radians.
        """
        c, s = np.cos(angle), np.sin(angle)
        return cls(data=np.array([[c, s, 0.0], [-s, c, 0.0], [0.0, 0.0, 1.0]]))

    def multiply_by_vector(self, vector: Cartesian3, result: Optional[Cartesian3] = None) -> Cartesian3:
        """
        Compute the product of this matrix and a column vector.

        :param vector: The vector to multiply.
        :param result: The vector to store the product in. If omitted, a new instance is created.
        :return: The modified result or a new instance.
        """
        require(vector, "vector")
        product = self.data @ vector.data
        if result is None:
            return Cartesian3(data=product)
        result.data[:] = product
        return result

    def multiply(self, other: Matrix3, result: Optional[Matrix3] = None) -> Matrix3:
        """
        Compute the matrix product ``self @ other``.

        :param other: The right hand side of the product.
        :param result: The matrix to store the product in. If omitted, a new instance is created.
        :return: The modified result or a new instance.
        """
        require(other, "other")
        product = self.data @ other.data
        if result is None:
            return Matrix3(data=product)
        result.data[:] = product
        return result

    def transpose(self, result: Optional[Matrix3] = None) -> Matrix3:
        """
        Compute the transpose of this matrix. ``result`` may be this matrix itself.

        :param result: The matrix to store the transpose in. If omitted, a new instance is created.
        :return: The modified result or a new instance.
        """
        transposed = self.data.T.copy()
        if result is None:
            return Matrix3(data=transposed)
        result.data[:] = transposed
        return result

    def clone(self, result: Optional[Matrix3] = None) -> Matrix3:
        if result is None:
            return Matrix3(data=self.data.copy())
        result.data[:] = self.data
        return result

    def almost_equal(self, other: Matrix3, tolerance: float = 1e-6) -> bool:
        return bool(np.allclose(self.data, other.data, rtol=0.0, atol=tolerance))

    def __matmul__(self, other: Matrix3) -> Matrix3:
        return self.multiply(other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix3):
            return NotImplemented
        return bool(np.array_equal(self.data, other.data))
