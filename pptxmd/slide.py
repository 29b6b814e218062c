"""A parsed slide and its conversion to Markdown."""

from __future__ import annotations

import base64
import io
import os
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from PIL import Image, UnidentifiedImageError

from .config import ImageHandlingMode, ParserConfig
from .errors import ConversionFailedError
from .types import (
    ImageReference,
    ListElement,
    SlideElement,
    TableElement,
    TextElement,
)

_SLIDE_NUMBER = re.compile(r"\+?[0-9]+")
_U32_LIMIT = 2**32


@dataclass
class ManualImage:
    """An image handed to the caller as base64 text with its reference."""

    base64_content: str
    img_ref: ImageReference


@dataclass
class Slide:
    """One slide of a presentation: its elements and the image data it uses."""

    rel_path: str
    slide_number: int
    elements: list[SlideElement] = field(default_factory=list)
    images: list[ImageReference] = field(default_factory=list)
    image_data: dict[str, bytes] = field(default_factory=dict)
    config: ParserConfig = field(default_factory=ParserConfig)

    def convert_to_md(self) -> str:
        """Render the slide as Markdown.

        Raises ConversionFailedError when an image cannot be encoded or linked.
        """
        parts = [f"<!-- Slide {self.slide_number} -->\n\n"]
        image_count = 0

        for element in self.elements:
            if isinstance(element, TextElement):
                parts.extend(run.render_as_md() for run in element.runs)
                parts.append("\n")
            elif isinstance(element, TableElement):
                parts.append(self._render_table(element))
            elif isinstance(element, ImageReference):
                mode = self.config.image_handling_mode
                if mode is ImageHandlingMode.MANUALLY:
                    parts.append("\n")
                    continue
                data = self.image_data.get(element.id)
                if data is not None:
                    if mode is ImageHandlingMode.IN_MARKDOWN:
                        parts.append(self._render_inline_image(element, data))
                    else:
                        image_count += 1
                        parts.append(self._save_image(element, data, image_count))
                        parts.append("\n")
                parts.append("\n")
            elif isinstance(element, ListElement):
                parts.append(self._render_list(element))

        return "".join(parts)

    @staticmethod
    def _render_table(table: TableElement) -> str:
        lines = []
        for index, row in enumerate(table.rows):
            texts = ["".join(run.extract() for run in cell.runs) for cell in row.cells]
            lines.append(f"| {' | '.join(texts)} |\n")
            if index == 0:
                lines.append(f"|{'|'.join(' --- ' for _ in texts)}|\n")
        lines.append("\n")
        return "".join(lines)

    @staticmethod
    def _render_list(list_element: ListElement) -> str:
        counters: list[int] = []
        previous_level = 0
        lines = []
        for item in list_element.items:
            item_text = "".join(run.extract() for run in item.runs)
            level = item.level
            if level >= len(counters):
                counters.extend([0] * (level + 1 - len(counters)))
            if level > previous_level:
                counters[level] = 0
            elif level < previous_level:
                del counters[level + 1:]
            counters[level] += 1
            previous_level = level

            indent = "\t" * level
            marker = f"{indent}{counters[level]}. " if item.is_ordered else f"{indent}- "
            lines.append(f"{marker}{item_text}\n")
        return "".join(lines)

    def _prepared_image(self, data: bytes) -> bytes:
        return self.compress_image(data) if self.config.compress_images else data

    def _render_inline_image(self, image_ref: ImageReference, data: bytes) -> str:
        encoded = base64.b64encode(self._prepared_image(data)).decode("ascii")
        image_name = image_ref.target.split("/")[-1]
        file_ext = image_name.split(".")[-1]
        return f"![{image_name}](data:image/{file_ext};base64,{encoded})"

    def _save_image(self, image_ref: ImageReference, data: bytes, number: int) -> str:
        payload = self._prepared_image(data)
        ext = "jpg" if self.config.compress_images else self.get_image_extension(
            image_ref.target
        )
        output_dir = self.config.image_output_path or Path(".")
        file_name = f"slide{self.slide_number}_image{number}_{image_ref.id}.{ext}"
        image_path = output_dir / file_name
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            image_path.write_bytes(payload)
        except OSError:
            pass
        url = self._path_to_file_url(image_path)
        return f"<a href={_quote(url)}>{file_name}</a>"

    @staticmethod
    def _path_to_file_url(path: Path) -> str:
        try:
            absolute = path.resolve(strict=True)
        except OSError as exc:
            raise ConversionFailedError(f"cannot locate saved image {path}") from exc
        path_str = str(absolute).replace("\\", "/")
        if os.name == "nt":
            path_str = path_str.removeprefix("//?/")
            return f"file:///{path_str}"
        return f"file://{path_str}"

    @staticmethod
    def extract_slide_number(path: str) -> int | None:
        """Return the number in a slide path such as ``ppt/slides/slide1.xml``."""
        filename = path.split("/")[-1]
        if not (filename.startswith("slide") and filename.endswith(".xml")):
            return None
        digits = filename[len("slide"):-len(".xml")]
        if len(filename) < len("slide") + len(".xml"):
            return None
        if not _SLIDE_NUMBER.fullmatch(digits):
            return None
        number = int(digits)
        return number if number < _U32_LIMIT else None

    def link_images(self) -> None:
        """Fill in the targets of image elements from the slide's relationships."""
        id_to_target = {ref.id: ref.target for ref in self.images}
        for element in self.elements:
            if isinstance(element, ImageReference) and element.id in id_to_target:
                element.target = id_to_target[element.id]

    def get_image_extension(self, path: str) -> str:
        """Return the file extension of an image path, or ``bin`` if it has none."""
        name = PurePosixPath(path).name
        stem, dot, ext = name.rpartition(".")
        if not dot or not stem:
            return "bin"
        return ext

    def compress_image(self, image_data: bytes) -> bytes:
        """Re-encode image data as JPEG at the configured quality."""
        try:
            with Image.open(io.BytesIO(image_data)) as img:
                img.load()
                if img.mode not in ("RGB", "L"):
                    img = img.convert("RGB")
                output = io.BytesIO()
                quality = max(1, min(100, self.config.quality))
                img.save(output, format="JPEG", quality=quality)
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise ConversionFailedError(f"image could not be compressed: {exc}") from exc
        return output.getvalue()

    def load_images_manually(self) -> list[ManualImage]:
        """Return the slide's images as base64 strings with their references."""
        images = []
        for element in self.elements:
            if not isinstance(element, ImageReference):
                continue
            data = self.image_data.get(element.id)
            if data is None:
                continue
            encoded = base64.b64encode(self._prepared_image(data)).decode("ascii")
            images.append(
                ManualImage(
                    base64_content=encoded,
                    img_ref=ImageReference(id=element.id, target=element.target),
                )
            )
        return images


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'