"""
API Routes - HTTP endpoint handlers

One router per area (animation, features, render, storage), all included
in the main app under /api/v1.
"""
