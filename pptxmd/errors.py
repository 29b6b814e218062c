"""Exceptions raised while reading presentations and converting slides."""

from __future__ import annotations


class PptxError(Exception):
    """Base class for every error raised by this package."""

    default_message = "Unknown error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.default_message if message is None else message)


class _DetailedError(PptxError):
    """An error whose message is a fixed prefix followed by a detail."""

    prefix = "Error"

    def __init__(self, detail: object = None) -> None:
        self.detail = detail
        if detail is None:
            super().__init__(self.prefix)
        else:
            super().__init__(f"{self.prefix}: {detail}")


class ArchiveError(_DetailedError):
    """The presentation archive could not be opened or read."""

    prefix = "Zip error"


class XmlParseError(_DetailedError):
    """A part of the presentation is not well-formed XML."""

    prefix = "XML parse error"


class ParseError(_DetailedError):
    """A part of the presentation does not have the expected structure."""

    prefix = "Parse error"


class SlideNotFoundError(PptxError):
    """A requested slide does not exist in the presentation."""

    default_message = "Slide not found"


class ImageNotFoundError(PptxError):
    """An image element carries no usable image reference."""

    default_message = "Image not found"


class RelationshipNotFoundError(PptxError):
    """A referenced relationship does not exist."""

    default_message = "Relationship not found"


class ConversionFailedError(PptxError):
    """A slide could not be converted."""

    default_message = "Conversion was not possible"