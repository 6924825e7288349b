"""Constants for MindMap scenes and rendering."""

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600

# Fixed footprint of every node, in model units.
NODE_WIDTH = 100.0
NODE_HEIGHT = 50.0
NODE_CORNER_RADIUS = 10.0

# Distance kept between a newly placed node and the canvas edge.
PLACEMENT_MARGIN = 25.0

NUDGE_STEP = 5.0

ZOOM_IN_FACTOR = 1.1
ZOOM_OUT_FACTOR = 0.9

LINK_COLOR = "#999999"
LINK_WIDTH = 2.0

BORDER_COLOR = "#000000"
BORDER_WIDTH = 1.0
SELECTED_BORDER_COLOR = "#ff0000"
SELECTED_BORDER_WIDTH = 3.0
LABEL_COLOR = "#000000"

# Random node colors: any hue, fully saturated, light.
RANDOM_COLOR_SATURATION = 1.0
RANDOM_COLOR_LIGHTNESS = 0.75

EXPORT_FILENAME = "mindmap.png"
