"""Static tables for property classification and quick color presets."""

# Keys containing any of these are edited as plain numbers
SIMPLE_NUMBER_PROPERTIES = ["blur", "offset", "radius", "translate", "halo-width", "halo-blur"]

PROPERTY_DESCRIPTIONS = {
    # Line properties
    "line-dasharray": (
        "Pattern of dashes and gaps for dashed lines. Example: [3, 0.5] = 3px dash, "
        "0.5px gap. Used for railways, borders, etc."
    ),
    "line-gap-width": (
        "Creates space between parallel lines (double-line effect). Commonly used for "
        "highways and major roads to show separate lanes."
    ),
    "line-width": (
        "Thickness of the line in pixels. For roads, buildings, borders. Can vary by zoom "
        "level for better visibility at different map scales."
    ),
    "line-blur": (
        "Softens line edges. 0 = sharp edge, higher values = softer/blurred edge. Useful "
        "for subtle water boundaries or atmospheric effects."
    ),
    "line-color": (
        "Color of the line. Used for roads (black/white), water boundaries (blue), "
        "building outlines, borders, etc."
    ),
    "line-opacity": (
        "Transparency of the line. 0 = completely invisible, 1 = fully opaque. Use lower "
        "values for subtle features."
    ),
    "line-offset": (
        "Shifts the line perpendicular to its direction. Positive values move right, "
        "negative move left. Used for road casings."
    ),
    # Fill properties
    "fill-color": (
        "Color that fills polygons like water bodies, parks, buildings, land areas. The "
        "main visible color of the feature."
    ),
    "fill-opacity": (
        "Transparency of polygon fills. 0 = see-through, 1 = solid. Lower values let "
        "multiple layers show through."
    ),
    "fill-outline-color": (
        "Color of the polygon outline/border. Creates definition between adjacent areas."
    ),
    "fill-pattern": (
        "Uses a sprite image to fill the polygon with a pattern instead of solid color."
    ),
    # Background
    "background-color": (
        "The base map background color. Shows when no other layers are visible (ocean, "
        "space outside map)."
    ),
    "background-opacity": "Transparency of the background. Usually kept at 1 (fully opaque).",
    "background-pattern": "Uses a sprite image pattern for the background instead of solid color.",
    # Circle properties
    "circle-radius": (
        "Size of circle markers in pixels. Used for points of interest, cities, markers. "
        "Can scale with zoom."
    ),
    "circle-color": "Fill color of circle markers.",
    "circle-blur": "Blur amount for circles. Creates soft edges. 0 = sharp, 1 = very soft.",
    "circle-opacity": "Transparency of circle fill. 0 = invisible, 1 = solid.",
    "circle-stroke-width": "Width of the circle outline in pixels.",
    "circle-stroke-color": "Color of the circle outline.",
    "circle-stroke-opacity": "Transparency of the circle outline.",
    # Text properties
    "text-color": "Color of text labels (street names, place names, etc.).",
    "text-halo-width": (
        "Width of text outline/halo in pixels. Makes text readable over busy backgrounds."
    ),
    "text-halo-blur": "Blur applied to text halo. Softens the outline.",
    "text-halo-color": (
        "Color of text halo/outline. Usually white or light color for dark text, dark for "
        "light text."
    ),
    "text-opacity": "Transparency of text. 0 = invisible, 1 = fully visible.",
    "text-size": "Font size in pixels. Can vary by zoom level to keep labels readable.",
    # Icon properties
    "icon-size": "Scale of icon symbols. 1 = original size, 0.5 = half size, 2 = double size.",
    "icon-opacity": "Transparency of icons. 0 = invisible, 1 = fully visible.",
    "icon-color": "Tint color applied to icons.",
    "icon-halo-width": "Width of icon halo/outline in pixels.",
    "icon-halo-color": "Color of icon halo/outline.",
    # Raster properties
    "raster-opacity": (
        "Transparency of raster layers (satellite imagery, hillshade). 0 = invisible, "
        "1 = opaque."
    ),
    "raster-brightness-min": "Minimum brightness for raster layers. -1 = very dark, 0 = normal.",
    "raster-brightness-max": "Maximum brightness for raster layers. 0 = normal, 1 = very bright.",
    "raster-contrast": (
        "Contrast adjustment for raster layers. -1 = low contrast, 1 = high contrast."
    ),
    "raster-saturation": (
        "Color saturation for raster layers. -1 = grayscale, 0 = normal, 1 = oversaturated."
    ),
}

# Quick color categories: which layer ids they match and which paint keys they recolor.
# "ids" must equal the lowercased layer id, "contains" must be a substring of it.
QUICK_COLOR_RULES = {
    "background": {
        "contains": ["bg"],
        "ids": ["background"],
        "paint_keys": ["background-color"],
    },
    "water": {
        "contains": ["water"],
        "ids": [],
        "paint_keys": ["fill-color", "line-color"],
    },
    "buildings": {
        "contains": ["building"],
        "ids": [],
        "paint_keys": ["fill-color"],
    },
    "roads": {
        "contains": ["road", "street", "motorway", "trunk", "primary", "secondary"],
        "ids": [],
        "paint_keys": ["line-color"],
    },
}

DEFAULT_COLOR_PRESETS = [
    {"id": "background", "label": "Background", "color": "#ffffff"},
    {"id": "water", "label": "Water", "color": "#a9c4c4"},
    {"id": "buildings", "label": "Buildings", "color": "#dcdcdc"},
    {"id": "roads", "label": "Roads", "color": "#000000"},
]

LAYER_FILTERS = [
    {"label": "All", "value": "all"},
    {"label": "Fill", "value": "fill"},
    {"label": "Line", "value": "line"},
    {"label": "Background", "value": "background"},
    {"label": "Symbol", "value": "symbol"},
]
