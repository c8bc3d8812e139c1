"""Rendering constants."""

CLASS_PREFIX = "edgeflow"

# Pin glyph drawn when a measured pin has no size
MIN_PIN_SIZE = 6.0

# Marker geometry (marker units) and ids by marker type
MARKER_SIZE = 12.5
MARKER_TYPES = ("arrow", "arrowclosed")

# Animated edges: dash pattern and travel speed (px/s)
ANIMATION_DASH = 5.0
ANIMATION_SPEED = 40.0
MIN_ANIMATION_DURATION = 0.25
