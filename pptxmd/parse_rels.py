"""Reading image references from slide relationship parts."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from .errors import ParseError, XmlParseError
from .types import IMAGE_NAMESPACE, ImageReference


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def parse_slide_rels(xml_data: bytes) -> list[ImageReference]:
    """Return the image relationships declared in a slide's ``.rels`` data."""
    try:
        xml_data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError("relationship data is not valid UTF-8") from exc

    try:
        root = ET.fromstring(xml_data)
    except ET.ParseError as exc:
        raise XmlParseError(exc) from exc

    images = []
    for rel in root:
        if not isinstance(rel.tag, str) or _local_name(rel.tag) != "Relationship":
            continue
        if rel.get("Type") != IMAGE_NAMESPACE:
            continue
        rel_id = rel.get("Id")
        target = rel.get("Target")
        if rel_id is not None and target is not None:
            images.append(ImageReference(id=rel_id, target=target))
    return images