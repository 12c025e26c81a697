"""
Shared geometry helpers for contact tracking.
"""

import math
from typing import List


class Point:
    """Represents a 2D point."""

    def __init__(self, x: float, y: float):
        self.x = float(x)
        self.y = float(y)

    def __repr__(self):
        return f"Point({self.x:.1f}, {self.y:.1f})"

    def __eq__(self, other):
        if not isinstance(other, Point):
            return False
        return abs(self.x - other.x) < 1e-10 and abs(self.y - other.y) < 1e-10

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)


class GeometryUtils:
    """Utility class for geometric calculations."""

    @staticmethod
    def calculate_centroid(points: List[Point]) -> Point:
        """Calculate the centroid of a list of points."""
        if not points:
            return Point(0, 0)
        sum_x = sum(p.x for p in points)
        sum_y = sum(p.y for p in points)
        return Point(sum_x / len(points), sum_y / len(points))

    @staticmethod
    def calculate_spread(points: List[Point]) -> float:
        """Average distance of the points from their centroid."""
        if len(points) < 2:
            return 0.0
        centroid = GeometryUtils.calculate_centroid(points)
        return sum(p.distance_to(centroid) for p in points) / len(points)

    @staticmethod
    def calculate_angle(p1: Point, p2: Point) -> float:
        """Angle of the vector from p1 to p2 in degrees, clockwise on screen."""
        return math.degrees(math.atan2(p2.y - p1.y, p2.x - p1.x))

    @staticmethod
    def wrap_angle(angle: float) -> float:
        """Wrap an angle difference into [-180, 180)."""
        return (angle + 180.0) % 360.0 - 180.0
