"""
Models package - Data models for the geco animation engine
"""

from .enums import FeatureType, LogLevel, LogCategory
from .vector import Vec3
from .render import RenderedPoint, RenderedFeature, LineSegmentBuffer

__all__ = [
    'FeatureType',
    'LogLevel',
    'LogCategory',
    'Vec3',
    'RenderedPoint',
    'RenderedFeature',
    'LineSegmentBuffer',
]
