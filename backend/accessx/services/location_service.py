"""Proximity checks between student and instructor positions."""
import math
from typing import Dict


class LocationService:
    """Service for GPS distance calculations."""

    EARTH_RADIUS_METERS = 6371000

    @staticmethod
    def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Calculate distance between two GPS points in meters (Haversine)."""
        lat1_rad = math.radians(lat1)
        lat2_rad = math.radians(lat2)
        delta_lat = math.radians(lat2 - lat1)
        delta_lon = math.radians(lon2 - lon1)

        a = (math.sin(delta_lat/2) ** 2 +
             math.cos(lat1_rad) * math.cos(lat2_rad) *
             math.sin(delta_lon/2) ** 2)
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1-a))

        return LocationService.EARTH_RADIUS_METERS * c

    @staticmethod
    def is_within_proximity(
        student_lat: float,
        student_lon: float,
        instructor_lat: float,
        instructor_lon: float,
        max_distance_meters: float = 100
    ) -> Dict:
        """Check if a student is within range of the instructor."""
        distance = LocationService.calculate_distance(
            student_lat, student_lon,
            instructor_lat, instructor_lon
        )

        return {
            'is_valid': distance <= max_distance_meters,
            'distance': round(distance)
        }

    @staticmethod
    def format_distance(meters: float) -> str:
        """Format distance for display, e.g. '50m' or '1.2km'."""
        if meters < 1000:
            return f"{round(meters)}m"
        return f"{meters / 1000:.1f}km"
