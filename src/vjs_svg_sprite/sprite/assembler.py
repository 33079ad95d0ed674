"""Symbol sprite assembly.

Collects optimized icons, turns each one into a ``<symbol>`` and compiles
them into a single sprite document plus an optional HTML preview page.
"""

import copy
import logging
import os
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jinja2

from vjs_svg_sprite.constants import (
    DEFAULT_EXAMPLE_TEMPLATE,
    INLINE_SPRITE_ATTRIBUTES,
    SVG_NAMESPACE,
    XLINK_NAMESPACE,
)
from vjs_svg_sprite.exceptions import SpriteCompilationError, SvgParseError, chain_exception
from vjs_svg_sprite.models.config import SpriteAssemblyConfig
from vjs_svg_sprite.models.sprite import CompiledArtifact
from vjs_svg_sprite.optimizer.document import (
    SvgDocument,
    is_element,
    parse_svg,
    rename_references,
    serialize_svg,
)
from vjs_svg_sprite.utils.path_utils import path_resolver

VIEW_BOX_SEPARATOR_RE = re.compile(r"[\s,]+")
LENGTH_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+))(?:px)?\s*$")

# Icon root attributes that are replaced or have no meaning on a <symbol>
SKIPPED_ROOT_ATTRIBUTES = frozenset({"id", "viewBox", "width", "height", "x", "y", "version"})


@dataclass
class Shape:
    """An icon registered with the assembler.

    Attributes:
        name: Icon name, the stem of the virtual path it was added under
        id: Symbol ID
        view_box: Normalized ``(min_x, min_y, width, height)``
        width: Display width, scaled down to the configured maximum
        height: Display height, scaled down to the configured maximum
        symbol: The ``<symbol>`` element
    """

    name: str
    id: str
    view_box: tuple[float, float, float, float]
    width: float
    height: float
    symbol: ET.Element

    @property
    def view_box_attribute(self) -> str:
        """The viewBox as an attribute value."""
        return " ".join(_format_length(value) for value in self.view_box)


def _format_length(value: float) -> str:
    return f"{round(value, 3):g}"


def _parse_length(value: str | None) -> float | None:
    if value is None:
        return None
    match = LENGTH_RE.match(value)
    if match is None:
        return None
    length = float(match.group(1))
    return length if length > 0 else None


def _parse_view_box(value: str | None) -> tuple[float, float, float, float] | None:
    if not value:
        return None
    parts = VIEW_BOX_SEPARATOR_RE.split(value.strip())
    if len(parts) != 4:
        return None
    try:
        min_x, min_y, width, height = (float(part) for part in parts)
    except ValueError:
        return None
    if width <= 0 or height <= 0:
        return None
    return min_x, min_y, width, height


def _used_prefixes(node: ET.Element) -> set[str]:
    prefixes = set()
    for element in node.iter():
        if not is_element(element):
            continue
        names = [str(element.tag), *element.attrib]
        prefixes.update(
            name.split(":", 1)[0] for name in names if ":" in name and not name.startswith("xmlns")
        )
    return prefixes


class SpriteAssembler:
    """Builds a ``<symbol>`` sprite from individual icons.

    Attributes:
        config: Sprite assembly configuration
        working_dir: Directory output paths are relative to
        shapes: Registered icons keyed by name, in the order they were first added
    """

    def __init__(self, config: SpriteAssemblyConfig, working_dir: str | Path) -> None:
        """Initialize the assembler.

        Args:
            config: Sprite assembly configuration.
            working_dir: Directory output paths are relative to.
        """
        self.config = config
        self.working_dir = path_resolver.normalize_path(working_dir)
        self.shapes: dict[str, Shape] = {}
        self.logger = logging.getLogger(__name__)

    @property
    def sprite_path(self) -> Path:
        """Destination of the compiled sprite."""
        symbol = self.config.mode.symbol
        return path_resolver.resolve_from(
            self.working_dir, self.config.dest, symbol.dest, symbol.sprite
        )

    @property
    def example_path(self) -> Path | None:
        """Destination of the preview page, or None when it is disabled."""
        symbol = self.config.mode.symbol
        if symbol.example is None:
            return None
        return path_resolver.resolve_from(
            self.working_dir, self.config.dest, symbol.dest, symbol.example.dest
        )

    def add(self, virtual_path: str | Path, content: str | bytes) -> Shape:
        """Register an icon.

        The symbol ID is derived from the file stem of ``virtual_path``.
        Adding a second icon with the same stem replaces the first.

        Args:
            virtual_path: Path the icon is known by; only its stem is used.
            content: Optimized SVG markup.

        Returns:
            The registered shape.

        Raises:
            SpriteCompilationError: If the content is not an SVG document.
        """
        name = Path(virtual_path).stem
        try:
            if isinstance(content, bytes):
                content = content.decode("utf-8")
            document = parse_svg(content)
        except (SvgParseError, UnicodeDecodeError) as e:
            raise chain_exception(
                SpriteCompilationError(
                    f"Cannot add icon {name} to the sprite",
                    {"path": str(virtual_path), "error": str(e)},
                ),
                e,
            ) from e

        if document.root.tag != "svg":
            raise SpriteCompilationError(
                f"Cannot add icon {name} to the sprite: root element is not <svg>",
                {"path": str(virtual_path), "root": str(document.root.tag)},
            )

        if name in self.shapes:
            self.logger.warning(f"Icon {name} was added twice, keeping the last one")

        shape = self._build_shape(name, document)
        self.shapes[name] = shape
        self.logger.debug(f"Added icon {name} as #{shape.id}")
        return shape

    def _build_shape(self, name: str, document: SvgDocument) -> Shape:
        root = document.root
        dimension = self.config.shape.dimension
        id_config = self.config.shape.id
        symbol_id = id_config.generator.replace("%s", re.sub(r"\s+", id_config.whitespace, name))

        width = _parse_length(root.get("width"))
        height = _parse_length(root.get("height"))
        view_box = _parse_view_box(root.get("viewBox"))
        if view_box is None:
            view_box = (0.0, 0.0, width or dimension.max_width, height or dimension.max_height)
        width = width or view_box[2]
        height = height or view_box[3]

        if width > dimension.max_width or height > dimension.max_height:
            scale = min(dimension.max_width / width, dimension.max_height / height)
            width, height = width * scale, height * scale

        symbol = ET.Element("symbol", {"id": symbol_id})
        shape = Shape(name, symbol_id, view_box, width, height, symbol)
        symbol.set("viewBox", shape.view_box_attribute)

        used = _used_prefixes(root)
        for attribute, value in root.attrib.items():
            if attribute in SKIPPED_ROOT_ATTRIBUTES or attribute == "xmlns":
                continue
            if attribute.startswith("xmlns:"):
                prefix = attribute.split(":", 1)[1]
                # The sprite root declares xlink itself
                if prefix not in used or value == XLINK_NAMESPACE:
                    continue
            symbol.set(attribute, value)

        symbol.extend(copy.deepcopy(child) for child in root)

        if self.config.svg.namespace_ids:
            mapping = {
                element.get("id"): f"{symbol_id}-{element.get('id')}"
                for child in symbol
                for element in child.iter()
                if is_element(element) and element.get("id")
            }
            for child in symbol:
                rename_references(child, mapping)

        return shape

    def compile(self) -> list[CompiledArtifact]:
        """Compile the sprite and, when configured, its preview page.

        Returns:
            The sprite artifact followed by the preview page artifact.

        Raises:
            SpriteCompilationError: If the sprite or the preview page cannot be built.
        """
        self.logger.info(f"Compiling sprite with {len(self.shapes)} icons")
        try:
            sprite = self._compile_sprite()
            artifacts = [CompiledArtifact(contents=sprite.encode("utf-8"), path=self.sprite_path)]

            example_path = self.example_path
            if example_path is not None:
                page = self._render_example(sprite, example_path)
                artifacts.append(CompiledArtifact(contents=page.encode("utf-8"), path=example_path))
        except jinja2.TemplateError as e:
            raise chain_exception(
                SpriteCompilationError(
                    "Failed to render the sprite preview page", {"error": str(e)}
                ),
                e,
            ) from e
        except OSError as e:
            raise chain_exception(
                SpriteCompilationError("Failed to compile the sprite", {"error": str(e)}), e
            ) from e

        return artifacts

    def _compile_sprite(self) -> str:
        symbol_mode = self.config.mode.symbol
        svg_config = self.config.svg

        root = ET.Element("svg", {"xmlns": SVG_NAMESPACE, "xmlns:xlink": XLINK_NAMESPACE})
        if symbol_mode.inline:
            for attribute, value in INLINE_SPRITE_ATTRIBUTES.items():
                root.set(attribute, value)
        root.extend(copy.deepcopy(shape.symbol) for shape in self.shapes.values())

        # Inline sprites are embedded into HTML and never carry declarations
        return serialize_svg(
            SvgDocument(root=root),
            xml_declaration=svg_config.xml_declaration and not symbol_mode.inline,
            doctype=svg_config.doctype_declaration and not symbol_mode.inline,
        )

    def _render_example(self, sprite: str, example_path: Path) -> str:
        example = self.config.mode.symbol.example
        if example is not None and example.template:
            template_path = path_resolver.resolve_from(self.working_dir, example.template)
        else:
            template_path = path_resolver.get_template_path(DEFAULT_EXAMPLE_TEMPLATE)

        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(template_path.parent), autoescape=True
        )
        template = env.get_template(template_path.name)

        context: dict[str, Any] = {
            "inline": self.config.mode.symbol.inline,
            "sprite": sprite,
            "sprite_path": Path(os.path.relpath(self.sprite_path, example_path.parent)).as_posix(),
            "shapes": [
                {
                    "name": shape.name,
                    "id": shape.id,
                    "width": _format_length(shape.width),
                    "height": _format_length(shape.height),
                    "view_box": shape.view_box_attribute,
                }
                for shape in self.shapes.values()
            ],
        }
        return template.render(**context)
