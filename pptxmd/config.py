"""Options that control how slides and their images are processed."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ImageHandlingMode(Enum):
    """How images are handled when a slide is exported."""

    IN_MARKDOWN = "in_markdown"
    """Embed images in the Markdown as base64 data URIs."""
    MANUALLY = "manually"
    """Leave image handling to the caller."""
    SAVE = "save"
    """Write images to a directory and link to them."""


def _check_quality(value: int) -> int:
    if not 0 <= value <= 255:
        raise ValueError(f"quality must be between 0 and 255, got {value}")
    return value


@dataclass
class ParserConfig:
    """Configuration of the presentation parser."""

    extract_images: bool = True
    compress_images: bool = True
    quality: int = 80
    image_handling_mode: ImageHandlingMode = ImageHandlingMode.IN_MARKDOWN
    image_output_path: Path | None = None

    def __post_init__(self) -> None:
        _check_quality(self.quality)
        if self.image_output_path is not None:
            self.image_output_path = Path(self.image_output_path)

    @staticmethod
    def builder() -> ParserConfigBuilder:
        """Return a builder that starts from the defaults."""
        return ParserConfigBuilder()


class ParserConfigBuilder:
    """Fluent builder for ParserConfig; unset fields take the defaults."""

    def __init__(self) -> None:
        self._extract_images: bool | None = None
        self._compress_images: bool | None = None
        self._quality: int | None = None
        self._image_handling_mode: ImageHandlingMode | None = None
        self._image_output_path: Path | None = None

    def extract_images(self, value: bool) -> ParserConfigBuilder:
        """Set whether images are extracted from slides."""
        self._extract_images = bool(value)
        return self

    def compress_images(self, value: bool) -> ParserConfigBuilder:
        """Set whether images are re-encoded as JPEG before use."""
        self._compress_images = bool(value)
        return self

    def quality(self, value: int) -> ParserConfigBuilder:
        """Set the JPEG quality used when compressing images."""
        self._quality = _check_quality(value)
        return self

    def image_handling_mode(self, value: ImageHandlingMode) -> ParserConfigBuilder:
        """Set how images are handled during export."""
        self._image_handling_mode = ImageHandlingMode(value)
        return self

    def image_output_path(self, path: str | os.PathLike[str]) -> ParserConfigBuilder:
        """Set the directory images are saved to in save mode."""
        self._image_output_path = Path(path)
        return self

    def build(self) -> ParserConfig:
        """Return the configuration, filling unset fields with defaults."""
        return ParserConfig(
            extract_images=True if self._extract_images is None else self._extract_images,
            compress_images=True if self._compress_images is None else self._compress_images,
            quality=80 if self._quality is None else self._quality,
            image_handling_mode=self._image_handling_mode or ImageHandlingMode.IN_MARKDOWN,
            image_output_path=self._image_output_path,
        )