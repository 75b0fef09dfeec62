import math

import numpy as np
import pytest

from body_lines.kinematics.vector import Vector2D


def test_vector_arithmetic():
    a = Vector2D(1.0, 2.0)
    b = Vector2D(3.0, -1.0)
    assert a + b == Vector2D(4.0, 1.0)
    assert a - b == Vector2D(-2.0, 3.0)
    assert a * 2 == Vector2D(2.0, 4.0)
    assert 2 * a == Vector2D(2.0, 4.0)
    assert b / 2 == Vector2D(1.5, -0.5)
    assert -a == Vector2D(-1.0, -2.0)


def test_vector_equality_uses_tolerance():
    assert Vector2D(1.0, 1.0) == Vector2D(1.0 + 1e-8, 1.0 - 1e-8)
    assert Vector2D(1.0, 1.0) != Vector2D(1.0 + 1e-3, 1.0)


def test_vector_is_immutable():
    v = Vector2D(1.0, 2.0)
    with pytest.raises(AttributeError):
        v.x = 5.0


def test_vector_length_and_normalized():
    v = Vector2D(3.0, 4.0)
    assert v.length() == pytest.approx(5.0)
    assert v.length_squared() == pytest.approx(25.0)
    assert v.normalized() == Vector2D(0.6, 0.8)
    # The zero vector stays zero instead of dividing by zero.
    assert Vector2D(0.0, 0.0).normalized() == Vector2D(0.0, 0.0)


def test_vector_products_and_rotation():
    a = Vector2D(1.0, 0.0)
    b = Vector2D(0.0, 1.0)
    assert a.dot(b) == pytest.approx(0.0)
    assert a.cross(b) == pytest.approx(1.0)
    assert a.rotate(math.pi / 2) == b
    assert b.angle() == pytest.approx(math.pi / 2)
    assert a.angle_between(b) == pytest.approx(math.pi / 2)
    assert a.angle_between(Vector2D(0.0, 0.0)) == 0.0


def test_vector_numpy_interop():
    v = Vector2D(1.5, -2.5)
    np.testing.assert_allclose(v.to_array(), np.array([1.5, -2.5]))
    assert Vector2D.from_array(np.array([1.5, -2.5])) == v
    assert Vector2D.from_polar(2.0, math.pi) == Vector2D(-2.0, 0.0)
    assert tuple(v) == (1.5, -2.5)


def test_vector_is_finite():
    assert Vector2D(1.0, 2.0).is_finite()
    assert not Vector2D(float("nan"), 0.0).is_finite()
    assert not Vector2D(0.0, float("inf")).is_finite()
