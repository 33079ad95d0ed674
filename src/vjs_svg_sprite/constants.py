"""Application-wide constants for the SVG sprite builder.

Constants are grouped into the following categories:
- CLI Constants: Program name and default file names
- Staging Constants: Naming of the per-run scratch directory
- SVG Constants: Namespaces and markup fragments
- Sprite Constants: Defaults for the symbol sprite layout
- Optimizer Constants: Default plugin pipelines for icons and the sprite
"""

# CLI constants
PROGRAM_NAME = "vjs-svg-sprite"
DEFAULT_CONFIG_FILENAME = "vjs-icons-config.json"  # Written by the `create` subcommand
JSON_INDENT = 2
YAML_SUFFIXES = (".yaml", ".yml")  # Override files with these suffixes are parsed as YAML
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

# Starter configuration written by `create`
CONFIG_TEMPLATE = {
    "root-dir": "icons",
    "output-dir": "dist",
    "icons": {
        "play": "play.svg",
        "pause": "pause.svg",
        "volume-high": {"file": "volume-high.svg", "root-dir": "icons/volume"},
    },
}

# Staging constants
TEMP_DIR_PREFIX = "vjs-sprite-tmp_"  # Followed by a random UUID per run
STAGED_ICON_SUFFIX = ".svg"

# SVG constants
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
SVG_FILE_EXTENSION = ".svg"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'
SVG_DOCTYPE = (
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">'
)

# Sprite constants
DEFAULT_SPRITE_FILENAME = "vjs-sprite-icons.svg"
DEFAULT_SPRITE_DEST = "vjs-sprite"
DEFAULT_EXAMPLE_DEST = "index.html"
DEFAULT_EXAMPLE_TEMPLATE = "sprite.html.j2"  # Packaged Jinja2 template
DEFAULT_ID_GENERATOR = "vjs-icon-%s"
DEFAULT_ID_WHITESPACE = "_"  # Replaces whitespace runs in icon names
DEFAULT_MAX_DIMENSION = 48.0  # Maximum icon width/height in user units
INLINE_SPRITE_ATTRIBUTES = {"width": "0", "height": "0", "style": "position:absolute"}

# Optimizer constants
DEFAULT_FLOAT_PRECISION = 3
DEFAULT_INDENT = 4

ICON_OPTIMIZER_CONFIG = {
    "js2svg": {"indent": 2, "pretty": True},
    "plugins": [
        "removeXMLProcInst",
        "cleanupAttrs",
        "cleanupIds",
        {
            "name": "removeAttrs",
            "params": {
                "attrs": [
                    "version",
                    "sketch.type",
                    "xmlns.sketch",
                    "stroke-width",
                    "fill-rule",
                    "style",
                ]
            },
        },
        "removeUselessStrokeAndFill",
        "removeDimensions",
        "removeDesc",
        "removeComments",
        "removeTitle",
        "removeUselessDefs",
        "removeStyleElement",
        "removeXlink",
        "collapseGroups",
        "convertPathData",
        "convertTransform",
        "mergePaths",
    ],
}

SPRITE_OPTIMIZER_CONFIG = {
    "plugins": [
        {"name": "removeAttrs", "params": {"attrs": ["xmlns", "xmlns.xlink", "style"]}},
        {
            "name": "addAttributesToSVGElement",
            "params": {
                "attributes": [
                    {"style": "display:none"},
                    {"xmlns": SVG_NAMESPACE},
                ]
            },
        },
    ],
}
