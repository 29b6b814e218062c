import pytest

from pptxmd.errors import ParseError, XmlParseError
from pptxmd.parse_rels import parse_slide_rels

RELS_WITH_IMAGES = b"""\xef\xbb\xbf<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId3" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/slideLayout" Target="../slideLayouts/slideLayout1.xml"/>
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="../media/image1.png"/>
  <Relationship Id="rId2" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="../media/image2.jpg"/>
</Relationships>
"""

RELS_WITHOUT_IMAGES = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/slideLayout" Target="../slideLayouts/slideLayout1.xml"/>
</Relationships>
"""


def normalize_test_string(value):
    return value.lstrip("\ufeff").replace("\r\n", "\n").replace("    ", "\t").strip()


def test_parse_slide_rels_with_images():
    images = parse_slide_rels(RELS_WITH_IMAGES)
    assert len(images) == 2
    assert images[0].id == "rId1"
    assert normalize_test_string(images[0].target) == normalize_test_string("../media/image1.png")
    assert images[1].id == "rId2"
    assert normalize_test_string(images[1].target) == normalize_test_string("../media/image2.jpg")


def test_parse_slide_rels_empty():
    assert parse_slide_rels(RELS_WITHOUT_IMAGES) == []


def test_relationship_without_target_is_skipped():
    data = (
        b'<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        b'<Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image"/>'
        b'<Relationship Id="rId2" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="../media/image2.jpg"/>'
        b"</Relationships>"
    )
    images = parse_slide_rels(data)
    assert [img.id for img in images] == ["rId2"]


def test_invalid_utf8_raises_parse_error():
    with pytest.raises(ParseError):
        parse_slide_rels(b"<Relationships>\xff\xfe</Relationships>")


def test_malformed_xml_raises_xml_error():
    with pytest.raises(XmlParseError):
        parse_slide_rels(b"<Relationships><Relationship></Relationships>")