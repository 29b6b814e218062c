import pytest

from pptxmd.errors import (
    ArchiveError,
    ConversionFailedError,
    ImageNotFoundError,
    ParseError,
    PptxError,
    RelationshipNotFoundError,
    SlideNotFoundError,
    XmlParseError,
)


@pytest.mark.parametrize(
    "cls",
    [
        ArchiveError,
        ConversionFailedError,
        ImageNotFoundError,
        ParseError,
        RelationshipNotFoundError,
        SlideNotFoundError,
        XmlParseError,
    ],
)
def test_all_errors_derive_from_base(cls):
    with pytest.raises(PptxError) as info:
        raise cls("detail text")
    assert type(info.value) is cls
    assert "detail text" in str(info.value)


@pytest.mark.parametrize(
    ("cls", "message"),
    [
        (SlideNotFoundError, "Slide not found"),
        (ImageNotFoundError, "Image not found"),
        (RelationshipNotFoundError, "Relationship not found"),
        (ConversionFailedError, "Conversion was not possible"),
    ],
)
def test_default_messages(cls, message):
    assert str(cls()) == message


def test_custom_message_overrides_default():
    assert str(ImageNotFoundError("missing blip")) == "missing blip"


@pytest.mark.parametrize(
    ("cls", "prefix"),
    [
        (ArchiveError, "Zip error"),
        (XmlParseError, "XML parse error"),
        (ParseError, "Parse error"),
    ],
)
def test_detail_is_prefixed(cls, prefix):
    err = cls("boom")
    assert str(err).startswith(prefix + ": ")
    assert str(err).endswith("boom")
    assert err.detail == "boom"


def test_detail_absent_gives_prefix_only():
    err = ParseError()
    assert str(err) == "Parse error"
    assert err.detail is None