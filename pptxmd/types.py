"""Data model of the elements found on a slide."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

P_NAMESPACE = "http://schemas.openxmlformats.org/presentationml/2006/main"
A_NAMESPACE = "http://schemas.openxmlformats.org/drawingml/2006/main"
RELS_NAMESPACE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
IMAGE_NAMESPACE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships/image"
)


@dataclass
class ImageReference:
    """Links a relationship id to the path of the image it points at."""

    id: str
    target: str = ""


@dataclass
class Formatting:
    """Character formatting of a text run."""

    bold: bool = False
    italic: bool = False
    underlined: bool = False
    lang: str = ""


@dataclass
class Run:
    """A stretch of text sharing one formatting."""

    text: str
    formatting: Formatting = field(default_factory=Formatting)

    def extract(self) -> str:
        """Return the plain text of the run."""
        return self.text

    def render_as_md(self) -> str:
        """Return the run as Markdown with emphasis and underline markup."""
        result = self.extract()
        has_new_line = result.endswith("\n")
        if has_new_line:
            result = result.replace("\n", "")

        fmt = self.formatting
        if fmt.bold and fmt.italic:
            result = f"***{result}***"
        else:
            if fmt.bold:
                result = f"**{result}**"
            if fmt.italic:
                result = f"_{result}_"

        if fmt.underlined:
            result = f"<u>{result}</u>"

        return result + "\n" if has_new_line else result


@dataclass
class TextElement:
    """A block of text made of runs."""

    runs: list[Run] = field(default_factory=list)


@dataclass
class TableCell:
    """One cell of a table."""

    runs: list[Run] = field(default_factory=list)


@dataclass
class TableRow:
    """One row of a table."""

    cells: list[TableCell] = field(default_factory=list)


@dataclass
class TableElement:
    """A table made of rows."""

    rows: list[TableRow] = field(default_factory=list)


@dataclass
class ListItem:
    """One entry of a list, with its nesting level."""

    level: int = 0
    is_ordered: bool = False
    runs: list[Run] = field(default_factory=list)


@dataclass
class ListElement:
    """A bulleted or numbered list."""

    items: list[ListItem] = field(default_factory=list)


@dataclass
class UnknownElement:
    """A shape-tree element that is not understood."""


SlideElement = Union[
    TextElement, TableElement, ImageReference, ListElement, UnknownElement
]