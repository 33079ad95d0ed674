"""Optimizer plugins.

Each plugin is a function ``(document, params) -> None`` that rewrites an
SvgDocument in place, registered under the name used in optimizer
configurations. Names and parameters follow the svgo conventions so that
existing svgo configs can be reused as override files.
"""

import logging
import re
import string
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterator
from typing import Any

from vjs_svg_sprite.constants import DEFAULT_FLOAT_PRECISION, XLINK_NAMESPACE
from vjs_svg_sprite.optimizer.document import (
    SvgDocument,
    child_elements,
    collect_references,
    is_comment,
    is_element,
    remove_nodes,
    rename_references,
    replace_with_children,
)
from vjs_svg_sprite.optimizer.path_data import (
    PathDataError,
    PathSegment,
    boxes_intersect,
    convert_path_data,
    convert_transform,
    format_path_data,
    parse_path_data,
    path_bounding_box,
)

logger = logging.getLogger(__name__)

Plugin = Callable[[SvgDocument, dict[str, Any]], None]

PLUGINS: dict[str, Plugin] = {}

# Presentation attributes inherited by descendants
INHERITABLE_ATTRIBUTES = frozenset(
    {
        "clip-rule", "color", "color-interpolation", "color-interpolation-filters",
        "color-profile", "color-rendering", "cursor", "direction", "dominant-baseline",
        "fill", "fill-opacity", "fill-rule", "font", "font-family", "font-size",
        "font-size-adjust", "font-stretch", "font-style", "font-variant", "font-weight",
        "glyph-orientation-horizontal", "glyph-orientation-vertical", "image-rendering",
        "letter-spacing", "marker", "marker-end", "marker-mid", "marker-start",
        "paint-order", "pointer-events", "shape-rendering", "stroke", "stroke-dasharray",
        "stroke-dashoffset", "stroke-linecap", "stroke-linejoin", "stroke-miterlimit",
        "stroke-opacity", "stroke-width", "text-anchor", "text-rendering", "transform",
        "visibility", "word-spacing", "writing-mode",
    }
)

SHAPE_ELEMENTS = frozenset({"circle", "ellipse", "line", "path", "polygon", "polyline", "rect"})
ANIMATION_ELEMENTS = frozenset(
    {"animate", "animateColor", "animateMotion", "animateTransform", "set"}
)
NON_RENDERING_ELEMENTS = frozenset(
    {"clipPath", "filter", "linearGradient", "marker", "mask", "pattern", "radialGradient",
     "solidColor", "symbol"}
)
MERGE_BLOCKING_ATTRIBUTES = ("clip-path", "marker-start", "marker-mid", "marker-end", "mask",
                             "transform", "id")
ID_CHARACTERS = string.ascii_lowercase + string.ascii_uppercase
XLINK_SHOW_TARGETS = {"new": "_blank", "replace": "_self"}


def register(name: str) -> Callable[[Plugin], Plugin]:
    """Register a plugin under ``name``."""

    def decorator(plugin: Plugin) -> Plugin:
        PLUGINS[name] = plugin
        return plugin

    return decorator


@register("removeXMLProcInst")
def remove_xml_proc_inst(document: SvgDocument, params: dict[str, Any]) -> None:
    """Drop the XML declaration."""
    document.xml_declaration = None


@register("cleanupAttrs")
def cleanup_attrs(document: SvgDocument, params: dict[str, Any]) -> None:
    """Normalize whitespace inside attribute values."""
    newlines = params.get("newlines", True)
    trim = params.get("trim", True)
    spaces = params.get("spaces", True)

    for node in document.elements():
        for name, value in list(node.attrib.items()):
            if newlines:
                value = re.sub(r"(\S)\r?\n(\S)", r"\1 \2", value)
                value = re.sub(r"\r?\n", "", value)
            if trim:
                value = value.strip()
            if spaces:
                value = re.sub(r"\s{2,}", " ", value)
            node.set(name, value)


def _generate_ids(taken: set[str]) -> Iterator[str]:
    """Yield short IDs (a, b, ..., Z, aa, ab, ...) not present in ``taken``."""
    length = 1
    while True:
        indices = [0] * length
        while True:
            candidate = "".join(ID_CHARACTERS[i] for i in indices)
            if candidate not in taken:
                yield candidate
            position = length - 1
            while position >= 0 and indices[position] == len(ID_CHARACTERS) - 1:
                indices[position] = 0
                position -= 1
            if position < 0:
                break
            indices[position] += 1
        length += 1


@register("cleanupIds")
def cleanup_ids(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove unreferenced IDs and shorten referenced ones.

    Documents with ``<style>`` or ``<script>`` are left untouched unless
    ``force`` is set, since selectors and scripts may use any ID.
    """
    remove = params.get("remove", True)
    minify = params.get("minify", True)
    preserve = set(params.get("preserve", []))
    preserve_prefixes = tuple(params.get("preservePrefixes", []))

    if not params.get("force", False) and document.has_elements("style", "script"):
        return

    referenced = collect_references(document.root)

    def keep(value: str) -> bool:
        return value in preserve or bool(preserve_prefixes and value.startswith(preserve_prefixes))

    # The root id is how the document is addressed from outside
    kept = {
        value
        for node in document.elements()
        if (value := node.get("id")) is not None
        and (
            keep(value)
            or node is document.root
            or (value not in referenced and not remove)
            or (value in referenced and not minify)
        )
    }
    short_ids = _generate_ids(kept)
    mapping: dict[str, str] = {}

    for node in document.elements():
        value = node.get("id")
        if value is None or value in kept or value in mapping:
            continue
        if value not in referenced:
            if remove:
                del node.attrib["id"]
        elif minify:
            mapping[value] = next(short_ids)

    rename_references(document.root, mapping)


def _compile_attr_pattern(pattern: str, separator: str) -> tuple[re.Pattern[str], ...]:
    parts = pattern.split(separator)
    if len(parts) == 1:
        parts = [".*", parts[0], ".*"]
    elif len(parts) == 2:
        parts = [parts[0], parts[1], ".*"]
    return tuple(re.compile(part) for part in parts[:3])


@register("removeAttrs")
def remove_attrs(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove attributes matching ``[element:]attribute[:value]`` regex patterns.

    ``.`` stands in for ``:`` inside a single name, so ``xmlns.xlink`` matches
    the ``xmlns:xlink`` declaration.
    """
    attrs = params.get("attrs", [])
    if isinstance(attrs, str):
        attrs = [attrs]
    separator = params.get("elemSeparator", ":")
    preserve_current_color = params.get("preserveCurrentColor", False)
    patterns = [_compile_attr_pattern(pattern, separator) for pattern in attrs]

    for node in document.elements():
        for element_re, name_re, value_re in patterns:
            if not element_re.fullmatch(str(node.tag)):
                continue
            for name, value in list(node.attrib.items()):
                if (
                    preserve_current_color
                    and name in ("fill", "stroke")
                    and value.lower() == "currentcolor"
                ):
                    continue
                if name_re.fullmatch(name) and value_re.fullmatch(value):
                    del node.attrib[name]


@register("removeUselessStrokeAndFill")
def remove_useless_stroke_and_fill(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove stroke and fill attributes that cannot have a visible effect."""
    remove_stroke = params.get("stroke", True)
    remove_fill = params.get("fill", True)
    remove_none = params.get("removeNone", False)

    if document.has_elements("style", "script"):
        return

    invisible: list[tuple[ET.Element, ET.Element]] = []

    def visit(node: ET.Element, inherited: dict[str, str], parent: ET.Element | None) -> None:
        computed = dict(inherited)
        computed.update(
            (name, value) for name, value in node.attrib.items() if name in INHERITABLE_ATTRIBUTES
        )

        if node.get("id") is None:
            if remove_stroke and (
                computed.get("stroke", "none") == "none"
                or computed.get("stroke-opacity") == "0"
                or computed.get("stroke-width") == "0"
            ) and "marker-end" not in computed:
                for name in [name for name in node.attrib if name.startswith("stroke")]:
                    del node.attrib[name]
                if inherited.get("stroke", "none") != "none":
                    node.set("stroke", "none")
                computed["stroke"] = "none"

            if remove_fill and (
                computed.get("fill") == "none" or computed.get("fill-opacity") == "0"
            ):
                for name in [name for name in node.attrib if name.startswith("fill-")]:
                    del node.attrib[name]
                if inherited.get("fill") != "none" or "fill" in node.attrib:
                    node.set("fill", "none")
                computed["fill"] = "none"

            if (
                parent is not None
                and node.tag in SHAPE_ELEMENTS
                and computed.get("stroke", "none") == "none"
                and computed.get("fill") == "none"
            ):
                invisible.append((parent, node))

        for child in child_elements(node):
            visit(child, computed, node)

    visit(document.root, {}, None)

    if remove_none:
        for parent, node in invisible:
            parent.remove(node)


@register("removeDimensions")
def remove_dimensions(document: SvgDocument, params: dict[str, Any]) -> None:
    """Replace root width/height with a viewBox."""
    root = document.root
    if "viewBox" not in root.attrib:
        width = root.get("width", "").removesuffix("px")
        height = root.get("height", "").removesuffix("px")
        try:
            root.set("viewBox", f"0 0 {float(width):g} {float(height):g}")
        except ValueError:
            return
    root.attrib.pop("width", None)
    root.attrib.pop("height", None)


@register("removeDesc")
def remove_desc(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove editor-generated ``<desc>`` elements, or all of them with ``removeAny``."""
    remove_any = params.get("removeAny", False)
    generated = re.compile(r"^(Created with|Created using)")

    def useless(node: ET.Element) -> bool:
        if node.tag != "desc":
            return False
        text = (node.text or "").strip()
        return remove_any or not text or bool(generated.match(text))

    remove_nodes(document.root, useless)


@register("removeComments")
def remove_comments(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove comments, keeping those starting with ``!``."""
    preserve = [re.compile(pattern) for pattern in params.get("preservePatterns", ["^!"])]
    remove_nodes(
        document.root,
        lambda node: is_comment(node)
        and not any(pattern.search(node.text or "") for pattern in preserve),
    )


@register("removeTitle")
def remove_title(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove ``<title>`` elements."""
    remove_nodes(document.root, lambda node: node.tag == "title")


def _useful_nodes(node: ET.Element) -> list[ET.Element]:
    """Collect descendants of a ``<defs>`` child that can be referenced."""
    useful = []
    for child in child_elements(node):
        if child.tag == "style" or child.get("id") is not None:
            useful.append(child)
        else:
            useful.extend(_useful_nodes(child))
    return useful


@register("removeUselessDefs")
def remove_useless_defs(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove definitions nothing can reference."""

    def visit(parent: ET.Element) -> None:
        for node in child_elements(parent):
            if node.tag == "defs":
                useful = _useful_nodes(node)
                if not useful:
                    parent.remove(node)
                    continue
                node[:] = useful
            elif node.tag in NON_RENDERING_ELEMENTS and node.get("id") is None:
                parent.remove(node)
                continue
            visit(node)

    visit(document.root)


@register("removeStyleElement")
def remove_style_element(document: SvgDocument, params: dict[str, Any]) -> None:
    """Remove ``<style>`` elements."""
    remove_nodes(document.root, lambda node: node.tag == "style")


@register("removeXlink")
def remove_xlink(document: SvgDocument, params: dict[str, Any]) -> None:
    """Replace XLink attributes with their SVG 2 equivalents."""
    prefixes = {
        name.split(":", 1)[1]
        for node in document.elements()
        for name, value in node.attrib.items()
        if name.startswith("xmlns:") and value == XLINK_NAMESPACE
    } or {"xlink"}

    for node in document.elements():
        for prefix in prefixes:
            href = node.attrib.pop(f"{prefix}:href", None)
            if href is not None and "href" not in node.attrib:
                node.set("href", href)

            show = node.attrib.pop(f"{prefix}:show", None)
            if show in XLINK_SHOW_TARGETS and "target" not in node.attrib:
                node.set("target", XLINK_SHOW_TARGETS[show])

            title = node.attrib.pop(f"{prefix}:title", None)
            if title is not None and not any(child.tag == "title" for child in node):
                title_node = ET.Element("title")
                title_node.text = title
                node.insert(0, title_node)

    still_used = {
        name.split(":", 1)[0]
        for node in document.elements()
        for name in node.attrib
        if ":" in name and not name.startswith("xmlns:")
    }
    for node in document.elements():
        for prefix in prefixes - still_used:
            node.attrib.pop(f"xmlns:{prefix}", None)


def _collapse_into_child(group: ET.Element, child: ET.Element) -> None:
    """Move a group's attributes onto its only child where that is safe."""
    if child.get("id") is not None or group.get("filter") is not None:
        return
    if group.get("class") is not None and child.get("class") is not None:
        return
    if (group.get("clip-path") is not None or group.get("mask") is not None) and not (
        child.tag == "g" and group.get("transform") is None and child.get("transform") is None
    ):
        return

    for name, value in list(group.attrib.items()):
        if name not in child.attrib:
            child.set(name, value)
        elif name == "transform":
            child.set(name, f"{value} {child.get(name)}")
        elif child.get(name) == "inherit":
            child.set(name, value)
        elif name not in INHERITABLE_ATTRIBUTES and child.get(name) != value:
            return
        del group.attrib[name]


@register("collapseGroups")
def collapse_groups(document: SvgDocument, params: dict[str, Any]) -> None:
    """Collapse useless groups, moving single-child group attributes to the child."""

    def visit(node: ET.Element) -> None:
        for child in child_elements(node):
            visit(child)
        if node.tag == "switch":
            return
        for child in list(node):
            if not is_element(child) or child.tag != "g":
                continue
            if any(grandchild.tag in ANIMATION_ELEMENTS for grandchild in child):
                continue
            if child.attrib and len(child) == 1 and is_element(child[0]):
                _collapse_into_child(child, child[0])
            if not child.attrib:
                replace_with_children(node, child)

    visit(document.root)


@register("convertPathData")
def convert_path_data_plugin(document: SvgDocument, params: dict[str, Any]) -> None:
    """Rewrite path data in its shortest form."""
    precision = params.get("floatPrecision", DEFAULT_FLOAT_PRECISION)
    for node in document.elements():
        data = node.get("d")
        if data is None:
            continue
        try:
            node.set("d", convert_path_data(data, precision))
        except PathDataError as e:
            logger.debug(f"Keeping unparsable path data on <{node.tag}>: {e}")


@register("convertTransform")
def convert_transform_plugin(document: SvgDocument, params: dict[str, Any]) -> None:
    """Rewrite transform lists in their shortest form, dropping identities."""
    precision = params.get("floatPrecision", DEFAULT_FLOAT_PRECISION)
    for node in document.elements():
        for name in ("transform", "gradientTransform", "patternTransform"):
            value = node.get(name)
            if value is None:
                continue
            try:
                converted = convert_transform(value, precision)
            except PathDataError as e:
                logger.debug(f"Keeping unparsable {name} on <{node.tag}>: {e}")
                continue
            if converted:
                node.set(name, converted)
            else:
                del node.attrib[name]


@register("mergePaths")
def merge_paths(document: SvgDocument, params: dict[str, Any]) -> None:
    """Merge adjacent paths with identical attributes.

    Paths whose bounding boxes overlap are only merged with ``force``, as
    overlapping fills may render differently once they share a fill rule.
    """
    force = params.get("force", False)
    precision = params.get("floatPrecision", DEFAULT_FLOAT_PRECISION)

    def mergeable(node: ET.Element) -> bool:
        return (
            node.tag == "path"
            and len(node) == 0
            and "d" in node.attrib
            and not any(name in node.attrib for name in MERGE_BLOCKING_ATTRIBUTES)
        )

    for parent in list(document.elements()):
        previous: ET.Element | None = None
        previous_segments: list[PathSegment] = []
        for child in list(parent):
            if not is_element(child) or not mergeable(child):
                previous = None
                continue
            try:
                segments = parse_path_data(child.get("d", ""))
            except PathDataError:
                previous = None
                continue

            same_attributes = previous is not None and {
                name: value for name, value in previous.attrib.items() if name != "d"
            } == {name: value for name, value in child.attrib.items() if name != "d"}

            if (
                previous is not None
                and same_attributes
                and (
                    force
                    or not boxes_intersect(
                        path_bounding_box(previous_segments), path_bounding_box(segments)
                    )
                )
            ):
                previous_segments = previous_segments + segments
                previous.set("d", format_path_data(previous_segments, precision))
                parent.remove(child)
                continue

            previous, previous_segments = child, segments


@register("addAttributesToSVGElement")
def add_attributes_to_svg_element(document: SvgDocument, params: dict[str, Any]) -> None:
    """Add attributes to the root ``<svg>`` element unless already present."""
    if document.root.tag != "svg":
        return
    attributes = list(params.get("attributes", []))
    if "attribute" in params:
        attributes.append(params["attribute"])
    for item in attributes:
        if isinstance(item, str):
            document.root.attrib.setdefault(item, "")
            continue
        for name, value in item.items():
            document.root.attrib.setdefault(name, str(value))
