"""Parsing of slide parts into slide elements."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator
from xml.etree.ElementTree import Element

from .errors import ImageNotFoundError, ParseError, XmlParseError
from .textbody import parse_paragraph, parse_sp
from .types import (
    A_NAMESPACE,
    P_NAMESPACE,
    RELS_NAMESPACE,
    ImageReference,
    SlideElement,
    TableCell,
    TableElement,
    TableRow,
    UnknownElement,
)

TABLE_URI = "http://schemas.openxmlformats.org/drawingml/2006/table"


def _local_name(tag: object) -> str | None:
    if not isinstance(tag, str):
        return None
    return tag.rpartition("}")[2]


def _namespace(tag: object) -> str | None:
    if not isinstance(tag, str) or not tag.startswith("{"):
        return None
    return tag[1:].partition("}")[0]


def _is(node: Element, name: str, namespace: str | None) -> bool:
    return _local_name(node.tag) == name and _namespace(node.tag) == namespace


def _children(node: Element, name: str, namespace: str | None) -> Iterator[Element]:
    return (child for child in node if _is(child, name, namespace))


def _first_child(node: Element, name: str, namespace: str | None) -> Element | None:
    return next(_children(node, name, namespace), None)


def _first_descendant(
    node: Element, name: str, namespace: str | None
) -> Element | None:
    return next((n for n in node.iter() if _is(n, name, namespace)), None)


def parse_slide_xml(xml_data: bytes | str) -> list[SlideElement]:
    """Parse the XML of one slide into its elements, in document order."""
    if isinstance(xml_data, str):
        xml_data = xml_data.encode("utf-8")
    try:
        xml_data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError("slide data is not valid UTF-8") from exc

    try:
        root = ET.fromstring(xml_data)
    except ET.ParseError as exc:
        raise XmlParseError(exc) from exc

    ns = _namespace(root.tag)
    c_sld = _first_descendant(root, "cSld", ns)
    if c_sld is None:
        raise ParseError(f"No <p:cSld> tag was found for: {ns!r}")
    sp_tree = _first_child(c_sld, "spTree", ns)
    if sp_tree is None:
        raise ParseError(f"No <p:spTree> tag was found for: {ns!r}")

    elements: list[SlideElement] = []
    for child in sp_tree:
        if _namespace(child.tag) != P_NAMESPACE:
            continue
        name = _local_name(child.tag)
        if name == "sp":
            elements.append(parse_sp(child))
        elif name == "graphicFrame":
            table = parse_graphic_frame(child)
            if table is not None:
                elements.append(table)
        elif name == "pic":
            elements.append(parse_pic(child))
        else:
            elements.append(UnknownElement())
    return elements


def parse_graphic_frame(node: Element) -> TableElement | None:
    """Return the table held by a graphic frame, or None if it holds none."""
    graphic_data = next(
        (
            n
            for n in node.iter()
            if _is(n, "graphicData", A_NAMESPACE) and n.get("uri") == TABLE_URI
        ),
        None,
    )
    if graphic_data is None:
        return None
    tbl = _first_child(graphic_data, "tbl", A_NAMESPACE)
    if tbl is None:
        return None
    return parse_table(tbl)


def parse_table(tbl_node: Element) -> TableElement:
    """Parse an ``<a:tbl>`` node into a table."""
    return TableElement(
        rows=[parse_table_row(tr) for tr in _children(tbl_node, "tr", A_NAMESPACE)]
    )


def parse_table_row(tr_node: Element) -> TableRow:
    """Parse an ``<a:tr>`` node into a table row."""
    return TableRow(
        cells=[parse_table_cell(tc) for tc in _children(tr_node, "tc", A_NAMESPACE)]
    )


def parse_table_cell(tc_node: Element) -> TableCell:
    """Parse an ``<a:tc>`` node; the runs of all its paragraphs are joined."""
    runs = []
    tx_body = _first_child(tc_node, "txBody", A_NAMESPACE)
    if tx_body is not None:
        for p_node in _children(tx_body, "p", A_NAMESPACE):
            runs.extend(parse_paragraph(p_node, False))
    return TableCell(runs=runs)


def parse_pic(pic_node: Element) -> ImageReference:
    """Return the image reference of a picture; its target is left empty."""
    blip = _first_descendant(pic_node, "blip", A_NAMESPACE)
    if blip is None:
        raise ImageNotFoundError()
    embed = blip.get(f"{{{RELS_NAMESPACE}}}embed")
    if embed is None:
        embed = blip.get("r:embed")
    if embed is None:
        raise ImageNotFoundError()
    return ImageReference(id=embed, target="")