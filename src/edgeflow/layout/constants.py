"""Default geometry and interaction parameters."""

# Curvature-weighted bezier
CURVATURE = 0.25
CURVATURE_SCALE = 25.0

# Orthogonal (step / smoothstep) routing
STEP_OFFSET = 20.0
BORDER_RADIUS = 5.0

# Connection gesture
CONNECTION_RADIUS = 20.0
PRIMARY_BUTTON = 0

# Auto-pan while connecting: distance from the container edge (px) where
# panning kicks in, the maximum pan step per frame, and the distance over
# which velocity ramps up to that maximum.
AUTO_PAN_EDGE_DISTANCE = 35.0
AUTO_PAN_SPEED = 20.0
AUTO_PAN_RAMP = 50.0

# Visibility culling pads a degenerate (zero-extent) edge box by this much
DEGENERATE_AXIS_PADDING = 1.0
