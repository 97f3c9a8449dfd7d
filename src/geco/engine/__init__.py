"""
Animation engine: interpolation, structure resolution, rendering and codec.

Import concrete modules directly, e.g.
    from geco.engine.animation_engine import AnimationEngine
"""
