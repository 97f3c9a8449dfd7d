"""
Geco - animated geographic features on the unit sphere

Features (points, polylines, polygons) carry per-point keyframed positions
and a timeline of structural snapshots. The engine interpolates positions
along great circles, renders visible features per frame and round-trips
whole documents through a compact binary format.
"""

__version__ = "0.1.0"
