# -*- coding: utf-8 -*-
#
#  Copyright 2026 Smiles2D contributors
#  This file is part of Smiles2D.
#
#  Smiles2D is free software; you can redistribute it and/or modify
#  it under the terms of the GNU Lesser General Public License as published by
#  the Free Software Foundation; either version 3 of the License, or
#  (at your option) any later version.
#
#  This program is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  GNU Lesser General Public License for more details.
#
#  You should have received a copy of the GNU Lesser General Public License
#  along with this program; if not, see <https://www.gnu.org/licenses/>.
#
from math import acos, atan2, cos, sin, sqrt
from typing import Iterable, Sequence, Tuple


class Vector2:
    """
    2D point. mutating methods change vector in place and return it for chaining.
    use clone() or operators (+, -, *) for independent copies.
    """
    __slots__ = ('x', 'y')

    def __init__(self, x: float = 0., y: float = 0.):
        self.x = x
        self.y = y

    def __repr__(self):
        return f'{self.__class__.__name__}({self.x}, {self.y})'

    def __iter__(self):
        yield self.x
        yield self.y

    def __add__(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> 'Vector2':
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> 'Vector2':
        return Vector2(-self.x, -self.y)

    def clone(self) -> 'Vector2':
        return Vector2(self.x, self.y)

    def add(self, vector: 'Vector2') -> 'Vector2':
        self.x += vector.x
        self.y += vector.y
        return self

    def divide(self, scalar: float) -> 'Vector2':
        """
        divide by scalar. zero scalar keeps vector unchanged.
        """
        if scalar != 0:
            self.x /= scalar
            self.y /= scalar
        return self

    def multiply(self, vector: 'Vector2') -> 'Vector2':
        self.x *= vector.x
        self.y *= vector.y
        return self

    def multiply_scalar(self, scalar: float) -> 'Vector2':
        self.x *= scalar
        self.y *= scalar
        return self

    def invert(self) -> 'Vector2':
        self.x = -self.x
        self.y = -self.y
        return self

    def normalize(self) -> 'Vector2':
        return self.divide(self.length())

    def angle(self) -> float:
        return atan2(self.y, self.x)

    def length(self) -> float:
        return sqrt(self.x * self.x + self.y * self.y)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def distance(self, vector: 'Vector2') -> float:
        return sqrt(self.distance_sq(vector))

    def distance_sq(self, vector: 'Vector2') -> float:
        dx = vector.x - self.x
        dy = vector.y - self.y
        return dx * dx + dy * dy

    def clockwise(self, vector: 'Vector2') -> int:
        """
        -1 if vector is clockwise to this one, 0 if collinear, 1 if counter-clockwise. origin is rotation center.
        """
        a = self.y * vector.x
        b = self.x * vector.y
        if a > b:
            return -1
        elif a == b:
            return 0
        return 1

    def relative_clockwise(self, center: 'Vector2', vector: 'Vector2') -> int:
        """
        same as clockwise but relative to given center.
        """
        a = (self.y - center.y) * (vector.x - center.x)
        b = (self.x - center.x) * (vector.y - center.y)
        if a > b:
            return -1
        elif a == b:
            return 0
        return 1

    def rotate(self, angle: float) -> 'Vector2':
        """
        rotate around origin by angle in radians.
        """
        cos_a = cos(angle)
        sin_a = sin(angle)
        x = self.x * cos_a - self.y * sin_a
        y = self.x * sin_a + self.y * cos_a
        self.x = x
        self.y = y
        return self

    def rotate_around(self, angle: float, center: 'Vector2') -> 'Vector2':
        cos_a = cos(angle)
        sin_a = sin(angle)
        dx = self.x - center.x
        dy = self.y - center.y
        self.x = dx * cos_a - dy * sin_a + center.x
        self.y = dx * sin_a + dy * cos_a + center.y
        return self

    def rotate_to(self, vector: 'Vector2', center: 'Vector2', offset_angle: float = 0.) -> 'Vector2':
        """
        rotate around center onto the ray from center to vector. distance to center is kept.

        :param offset_angle: additional rotation in radians
        """
        return self.rotate_around(self.get_rotate_to_angle(vector, center) + offset_angle, center)

    def rotate_away_from(self, vector: 'Vector2', center: 'Vector2', angle: float) -> 'Vector2':
        """
        rotate around center by angle in direction which increases distance to vector.
        """
        return self.rotate_around(self.get_rotate_away_from_angle(vector, center, angle), center)

    def get_rotate_away_from_angle(self, vector: 'Vector2', center: 'Vector2', angle: float) -> float:
        """
        signed angle of rotation around center which moves this vector away from given vector.
        """
        plus = self.clone().rotate_around(angle, center).distance_sq(vector)
        minus = self.clone().rotate_around(-angle, center).distance_sq(vector)
        if minus > plus:
            return -angle
        return angle

    def get_rotate_towards_angle(self, vector: 'Vector2', center: 'Vector2', angle: float) -> float:
        """
        signed angle of rotation around center which moves this vector towards given vector.
        """
        plus = self.clone().rotate_around(angle, center).distance_sq(vector)
        minus = self.clone().rotate_around(-angle, center).distance_sq(vector)
        if minus < plus:
            return -angle
        return angle

    def get_rotate_to_angle(self, vector: 'Vector2', center: 'Vector2') -> float:
        """
        signed angle of rotation around center which aligns this vector with ray center -> vector.
        """
        a = Vector2.subtract(self, center)
        b = Vector2.subtract(vector, center)
        return atan2(a.x * b.y - a.y * b.x, a.x * b.x + a.y * b.y)

    def is_in_polygon(self, polygon: Sequence['Vector2']) -> bool:
        """
        even-odd rule test. polygon can be non-convex.
        """
        inside = False
        x, y = self.x, self.y
        j = len(polygon) - 1
        for i, p in enumerate(polygon):
            q = polygon[j]
            if (p.y > y) != (q.y > y) and x < (q.x - p.x) * (y - p.y) / (q.y - p.y) + p.x:
                inside = not inside
            j = i
        return inside

    @staticmethod
    def subtract(a: 'Vector2', b: 'Vector2') -> 'Vector2':
        return Vector2(a.x - b.x, a.y - b.y)

    @staticmethod
    def dot(a: 'Vector2', b: 'Vector2') -> float:
        return a.x * b.x + a.y * b.y

    @staticmethod
    def angle_between(a: 'Vector2', b: 'Vector2') -> float:
        """
        unsigned angle between two vectors. zero for zero-length vectors.
        """
        tmp = a.length() * b.length()
        if tmp == 0:
            return 0.
        return acos(max(-1., min(1., Vector2.dot(a, b) / tmp)))

    @staticmethod
    def midpoint(a: 'Vector2', b: 'Vector2') -> 'Vector2':
        return Vector2((a.x + b.x) / 2, (a.y + b.y) / 2)

    @staticmethod
    def normals(a: 'Vector2', b: 'Vector2') -> Tuple['Vector2', 'Vector2']:
        """
        two unit normals of segment a-b.
        """
        delta = Vector2.subtract(b, a)
        return Vector2(-delta.y, delta.x).normalize(), Vector2(delta.y, -delta.x).normalize()

    @staticmethod
    def average(vectors: Iterable['Vector2']) -> 'Vector2':
        out = Vector2()
        n = 0
        for v in vectors:
            out.add(v)
            n += 1
        return out.divide(n)


__all__ = ['Vector2']
