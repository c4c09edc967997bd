"""Window, frame and rendering constants."""

# Basic window and render size.
RENDER_WIDTH = 640
RENDER_HEIGHT = 400
FRAME_RATE = 60
CIRCLE_STEPS = 50

# Rendering details.
MAX_LIGHTS = 32