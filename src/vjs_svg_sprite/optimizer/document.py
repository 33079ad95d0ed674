"""SVG document model used by the optimizer and the sprite assembler.

Documents are parsed with ``xml.etree.ElementTree`` into a tree whose tag and
attribute names stay prefix-qualified, the way they were written in the
source: ``xlink:href`` is an attribute named ``xlink:href`` and a namespace
declaration such as ``xmlns:xlink`` is an ordinary attribute. Plugins can
therefore match, remove and add namespace declarations like any other
attribute, and ``serialize_svg`` writes the tree back verbatim.
"""

import re
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from xml.sax.saxutils import escape

from vjs_svg_sprite.constants import SVG_DOCTYPE, XML_DECLARATION, XML_NAMESPACE
from vjs_svg_sprite.exceptions import SvgParseError, chain_exception

XML_DECLARATION_RE = re.compile(r"^\s*<\?xml\s[^>]*\?>")
URL_REFERENCE_RE = re.compile(r"""url\(\s*(["']?)#([^)"'\s]+)\1\s*\)""")
HREF_ATTRIBUTES = ("href", "xlink:href")

# Elements whose whitespace-only text is significant
TEXT_ELEMENTS = frozenset({"text", "tspan", "textPath", "style", "script", "title", "desc"})


@dataclass
class SvgDocument:
    """A parsed SVG document.

    Attributes:
        root: Root element
        xml_declaration: XML declaration found in the source, or None
    """

    root: ET.Element
    xml_declaration: str | None = None

    def elements(self) -> Iterator[ET.Element]:
        """Iterate over every element, skipping comments and processing instructions."""
        return (node for node in self.root.iter() if is_element(node))

    def has_elements(self, *names: str) -> bool:
        """Whether the document contains an element with one of ``names``."""
        return any(node.tag in names for node in self.elements())


class _QualifiedTreeBuilder:
    """Parser target that keeps names prefix-qualified.

    ElementTree reports names as ``{uri}local``; this target maps them back
    to the prefixes declared in the document and turns the declarations
    themselves into ``xmlns``/``xmlns:prefix`` attributes.
    """

    def __init__(self) -> None:
        self._builder = ET.TreeBuilder(insert_comments=True, insert_pis=True)
        self._scopes: list[tuple[str | None, dict[str, str]]] = [(None, {XML_NAMESPACE: "xml"})]
        self._pending: list[tuple[str, str]] = []

    def start_ns(self, prefix: str, uri: str) -> None:
        self._pending.append((prefix, uri))

    def start(self, tag: str, attrib: dict[str, str]) -> ET.Element:
        default_uri, prefixes = self._scopes[-1]
        prefixes = dict(prefixes)
        attributes: dict[str, str] = {}
        for prefix, uri in self._pending:
            if prefix:
                prefixes[uri] = prefix
                attributes[f"xmlns:{prefix}"] = uri
            else:
                default_uri = uri
                attributes["xmlns"] = uri
        self._pending = []
        self._scopes.append((default_uri, prefixes))

        for name, value in attrib.items():
            attributes[self._qualify(name, None, prefixes)] = value
        return self._builder.start(self._qualify(tag, default_uri, prefixes), attributes)

    def end(self, tag: str) -> ET.Element:
        default_uri, prefixes = self._scopes.pop()
        return self._builder.end(self._qualify(tag, default_uri, prefixes))

    def data(self, data: str) -> None:
        self._builder.data(data)

    def comment(self, text: str) -> ET.Element:
        return self._builder.comment(text)

    def pi(self, target: str, text: str | None = None) -> ET.Element:
        return self._builder.pi(target, text)

    def close(self) -> ET.Element:
        return self._builder.close()

    @staticmethod
    def _qualify(name: str, default_uri: str | None, prefixes: dict[str, str]) -> str:
        if not name.startswith("{"):
            return name
        uri, local = name[1:].split("}", 1)
        if uri == default_uri:
            return local
        prefix = prefixes.get(uri)
        return f"{prefix}:{local}" if prefix else local


def parse_svg(content: str) -> SvgDocument:
    """Parse SVG markup into an SvgDocument.

    Args:
        content: SVG markup

    Returns:
        The parsed document. A DOCTYPE in the source is not retained.

    Raises:
        SvgParseError: If the markup is not well-formed XML.
    """
    declaration = None
    content = content.lstrip("\ufeff")
    match = XML_DECLARATION_RE.match(content)
    if match:
        declaration = match.group().strip()
        content = content[match.end():]

    parser = ET.XMLParser(target=_QualifiedTreeBuilder())
    try:
        parser.feed(content)
        root = parser.close()
    except ET.ParseError as e:
        line, column = e.position
        raise chain_exception(
            SvgParseError("Malformed SVG document", {"line": line, "column": column}), e
        ) from e

    return SvgDocument(root=root, xml_declaration=declaration)


def is_element(node: ET.Element) -> bool:
    """Whether a node is an element rather than a comment or processing instruction."""
    return isinstance(node.tag, str)


def is_comment(node: ET.Element) -> bool:
    """Whether a node is a comment."""
    return node.tag is ET.Comment


def child_elements(node: ET.Element) -> list[ET.Element]:
    """Return the element children of a node."""
    return [child for child in node if is_element(child)]


def remove_children(parent: ET.Element, predicate: Callable[[ET.Element], bool]) -> int:
    """Remove every direct child matching ``predicate``.

    Args:
        parent: Element whose children are filtered
        predicate: Selects children to remove

    Returns:
        Number of removed children.
    """
    removed = 0
    for child in list(parent):
        if predicate(child):
            parent.remove(child)
            removed += 1
    return removed


def remove_nodes(root: ET.Element, predicate: Callable[[ET.Element], bool]) -> int:
    """Remove every node below ``root`` matching ``predicate``."""
    return sum(remove_children(parent, predicate) for parent in list(root.iter()))


def replace_with_children(parent: ET.Element, node: ET.Element) -> None:
    """Replace ``node`` with its own children, keeping their position."""
    index = list(parent).index(node)
    parent.remove(node)
    for offset, child in enumerate(list(node)):
        parent.insert(index + offset, child)


def collect_references(root: ET.Element) -> set[str]:
    """Collect IDs referenced through ``url(#id)`` values and ``#id`` links."""
    referenced: set[str] = set()
    for node in root.iter():
        if not is_element(node):
            continue
        for name, value in node.attrib.items():
            if name in HREF_ATTRIBUTES and value.startswith("#"):
                referenced.add(value[1:])
            else:
                referenced.update(match.group(2) for match in URL_REFERENCE_RE.finditer(value))
    return referenced


def rename_references(root: ET.Element, mapping: dict[str, str]) -> None:
    """Rename IDs and every reference to them.

    Args:
        root: Subtree to rewrite
        mapping: Old ID to new ID
    """
    if not mapping:
        return

    def replace_url(match: re.Match[str]) -> str:
        target = mapping.get(match.group(2), match.group(2))
        return f"url({match.group(1)}#{target}{match.group(1)})"

    for node in root.iter():
        if not is_element(node):
            continue
        for name, value in list(node.attrib.items()):
            if name == "id" and value in mapping:
                node.set(name, mapping[value])
            elif name in HREF_ATTRIBUTES and value.startswith("#"):
                node.set(name, f"#{mapping.get(value[1:], value[1:])}")
            elif "url(" in value:
                node.set(name, URL_REFERENCE_RE.sub(replace_url, value))


def _escape_text(value: str) -> str:
    return escape(value)


def _escape_attribute(value: str) -> str:
    return escape(value, {'"': "&quot;"})


def _format_attributes(node: ET.Element) -> str:
    return "".join(f' {name}="{_escape_attribute(value)}"' for name, value in node.attrib.items())


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


class _Serializer:
    """Writes an SvgDocument tree back to markup."""

    def __init__(self, pretty: bool, indent: int) -> None:
        self.pretty = pretty
        self.indent = " " * indent
        self.parts: list[str] = []

    def write(self, node: ET.Element, depth: int) -> None:
        if node.tag is ET.Comment:
            self._open_line(depth)
            self.parts.append(f"<!--{node.text or ''}-->")
            return
        if node.tag is ET.ProcessingInstruction:
            self._open_line(depth)
            self.parts.append(f"<?{node.text or ''}?>")
            return

        self._open_line(depth)
        tag = str(node.tag)
        self.parts.append(f"<{tag}{_format_attributes(node)}")

        preserve = tag in TEXT_ELEMENTS or _has_text(node.text) or any(
            _has_text(child.tail) for child in node
        )
        if len(node) == 0 and not (preserve and node.text):
            self.parts.append("/>")
            return
        self.parts.append(">")

        if preserve:
            # Mixed content is written as-is, without indentation
            inner = _Serializer(pretty=False, indent=0)
            if node.text:
                inner.parts.append(_escape_text(node.text))
            for child in node:
                inner.write(child, 0)
                if child.tail:
                    inner.parts.append(_escape_text(child.tail))
            self.parts.extend(inner.parts)
        else:
            for child in node:
                self.write(child, depth + 1)
            self._open_line(depth)
        self.parts.append(f"</{tag}>")

    def _open_line(self, depth: int) -> None:
        if self.pretty and self.parts:
            self.parts.append("\n" + self.indent * depth)


def serialize_svg(
    document: SvgDocument,
    *,
    pretty: bool = False,
    indent: int = 4,
    final_newline: bool = False,
    xml_declaration: bool | None = None,
    doctype: bool = False,
) -> str:
    """Serialize a document to markup.

    Whitespace-only text between elements is dropped; text inside text
    content elements and mixed content is kept exactly.

    Args:
        document: Document to serialize
        pretty: Put every element on its own line
        indent: Spaces per nesting level when ``pretty`` is set
        final_newline: End the output with a newline
        xml_declaration: Force (True) or suppress (False) the XML declaration;
            None keeps the declaration of the source document, if any
        doctype: Write the SVG 1.1 DOCTYPE before the root element

    Returns:
        SVG markup.
    """
    serializer = _Serializer(pretty=pretty, indent=indent)
    if xml_declaration is None:
        if document.xml_declaration:
            serializer.parts.append(document.xml_declaration)
    elif xml_declaration:
        serializer.parts.append(XML_DECLARATION)
    if doctype:
        if serializer.parts and pretty:
            serializer.parts.append("\n")
        serializer.parts.append(SVG_DOCTYPE)

    serializer.write(document.root, 0)

    output = "".join(serializer.parts)
    if final_newline and not output.endswith("\n"):
        output += "\n"
    return output

