"""Parsing of text bodies: runs, paragraphs, plain text blocks and lists."""

from __future__ import annotations

from collections.abc import Iterator
from xml.etree.ElementTree import Element

from .errors import ParseError
from .types import (
    A_NAMESPACE,
    P_NAMESPACE,
    Formatting,
    ListElement,
    ListItem,
    Run,
    SlideElement,
    TextElement,
)

_BULLET_TAGS = frozenset({"buAutoNum", "buChar"})


def _local_name(tag: object) -> str | None:
    if not isinstance(tag, str):
        return None
    return tag.rpartition("}")[2]


def _namespace(tag: object) -> str | None:
    if not isinstance(tag, str) or not tag.startswith("{"):
        return None
    return tag[1:].partition("}")[0]


def _is(node: Element, name: str, namespace: str) -> bool:
    return _local_name(node.tag) == name and _namespace(node.tag) == namespace


def _children(node: Element, name: str, namespace: str) -> Iterator[Element]:
    return (child for child in node if _is(child, name, namespace))


def _first_child(node: Element, name: str, namespace: str) -> Element | None:
    return next(_children(node, name, namespace), None)


def _is_true(value: str) -> bool:
    return value == "1" or value.lower() == "true"


def parse_run(r_node: Element) -> Run:
    """Parse an ``<a:r>`` node into a run with its text and formatting."""
    formatting = Formatting()
    r_pr = _first_child(r_node, "rPr", A_NAMESPACE)
    if r_pr is not None:
        if (bold := r_pr.get("b")) is not None:
            formatting.bold = _is_true(bold)
        if (italic := r_pr.get("i")) is not None:
            formatting.italic = _is_true(italic)
        if (underline := r_pr.get("u")) is not None:
            formatting.underlined = underline != "none"
        if (lang := r_pr.get("lang")) is not None:
            formatting.lang = lang

    t_node = _first_child(r_node, "t", A_NAMESPACE)
    text = (t_node.text or "") if t_node is not None else ""
    return Run(text=text, formatting=formatting)


def parse_paragraph(p_node: Element, add_new_line: bool) -> list[Run]:
    """Parse the runs of an ``<a:p>`` node.

    When ``add_new_line`` is true the last run gets a trailing newline.
    """
    runs = [parse_run(r_node) for r_node in _children(p_node, "r", A_NAMESPACE)]
    if add_new_line and runs:
        runs[-1].text += "\n"
    return runs


def parse_list_properties(p_node: Element) -> tuple[int, bool]:
    """Return the list level and whether the paragraph carries a bullet marker."""
    level = 0
    is_ordered = False
    p_pr = _first_child(p_node, "pPr", A_NAMESPACE)
    if p_pr is not None:
        lvl = p_pr.get("lvl")
        if lvl is not None and lvl.isascii() and lvl.isdigit():
            level = int(lvl)
        is_ordered = any(
            _namespace(child.tag) == A_NAMESPACE
            and _local_name(child.tag) in _BULLET_TAGS
            for child in p_pr
        )
    return level, is_ordered


def parse_list(tx_body_node: Element) -> ListElement:
    """Parse every paragraph of a text body as a list item."""
    items = []
    for p_node in _children(tx_body_node, "p", A_NAMESPACE):
        level, is_ordered = parse_list_properties(p_node)
        runs = parse_paragraph(p_node, True)
        items.append(ListItem(level=level, is_ordered=is_ordered, runs=runs))
    return ListElement(items=items)


def parse_text(tx_body_node: Element) -> TextElement:
    """Parse every paragraph of a text body into one block of runs."""
    runs: list[Run] = []
    for p_node in _children(tx_body_node, "p", A_NAMESPACE):
        runs.extend(parse_paragraph(p_node, True))
    return TextElement(runs=runs)


def _looks_like_list(tx_body_node: Element) -> bool:
    for node in tx_body_node.iter():
        if not _is(node, "pPr", A_NAMESPACE):
            continue
        if node.get("lvl") is not None:
            return True
        if any(_local_name(child.tag) in _BULLET_TAGS for child in node):
            return True
    return False


def parse_sp(sp_node: Element) -> SlideElement:
    """Parse a ``<p:sp>`` shape into a list or a text element."""
    tx_body = _first_child(sp_node, "txBody", P_NAMESPACE)
    if tx_body is None:
        raise ParseError("shape has no text body")
    if _looks_like_list(tx_body):
        return parse_list(tx_body)
    return parse_text(tx_body)