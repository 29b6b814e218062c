"""Access to the slides stored in a presentation archive."""

from __future__ import annotations

import dataclasses
import os
import zipfile
import zlib
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor

from .config import ParserConfig
from .errors import ArchiveError
from .parse_rels import parse_slide_rels
from .parse_xml import parse_slide_xml
from .slide import Slide
from .types import ImageReference

_SLIDE_PREFIX = "ppt/slides/slide"
_SLIDE_SUFFIX = ".xml"


class PptxContainer:
    """An opened presentation archive and the paths of the slides it holds.

    Use :meth:`open` to create one. The container can be used as a context
    manager, which closes the underlying archive on exit.
    """

    def __init__(self, archive: zipfile.ZipFile, config: ParserConfig) -> None:
        self.config = config
        self._archive: zipfile.ZipFile | None = archive
        self.slide_paths: list[str] = sorted(
            name
            for name in archive.namelist()
            if name.startswith(_SLIDE_PREFIX) and name.endswith(_SLIDE_SUFFIX)
        )

    @property
    def slide_count(self) -> int:
        """Number of slide parts found in the archive."""
        return len(self.slide_paths)

    @staticmethod
    def open(
        path: str | os.PathLike[str], config: ParserConfig | None = None
    ) -> PptxContainer:
        """Open the presentation at ``path`` and index its slides.

        Raises ArchiveError if the file is not a readable zip archive and
        OSError if the file cannot be opened at all.
        """
        try:
            archive = zipfile.ZipFile(path)
        except zipfile.BadZipFile as exc:
            raise ArchiveError(exc) from exc
        return PptxContainer(archive, config if config is not None else ParserConfig())

    def close(self) -> None:
        """Close the underlying archive."""
        if self._archive is not None:
            self._archive.close()
            self._archive = None

    def __enter__(self) -> PptxContainer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def parse_all(self) -> list[Slide]:
        """Load and parse every slide, one after another."""
        return [self.load_slide(path) for path in list(self.slide_paths)]

    def parse_all_multi_threaded(self) -> list[Slide]:
        """Load every slide, parsing the slide XML in worker threads.

        All archive reads happen up front; unlike :meth:`parse_all`, an image
        that a relationship names but the archive lacks raises ArchiveError.
        """
        config = self.config
        raw: list[tuple[str, int, bytes, list[ImageReference]]] = []
        shared_images: dict[str, bytes] = {}

        for slide_path in list(self.slide_paths):
            slide_xml = self.read_file_from_archive(slide_path)
            rels_data = self._read_optional(self.get_slide_rels_path(slide_path))
            number = Slide.extract_slide_number(slide_path) or 0

            refs: list[ImageReference] = []
            if config.extract_images:
                if rels_data is not None:
                    refs = parse_slide_rels(rels_data)
                for ref in refs:
                    image_path = self.get_full_image_path(slide_path, ref.target)
                    data = self.read_file_from_archive(image_path)
                    shared_images.setdefault(ref.target, data)

            raw.append((slide_path, number, slide_xml, refs))

        def build(item: tuple[str, int, bytes, list[ImageReference]]) -> Slide:
            path, number, xml, refs = item
            elements = parse_slide_xml(xml)
            image_map: dict[str, bytes] = {}
            if config.extract_images:
                image_map = {
                    ref.id: shared_images[ref.target]
                    for ref in refs
                    if ref.target in shared_images
                }
            slide = Slide(
                rel_path=path,
                slide_number=number,
                elements=elements,
                images=refs,
                image_data=image_map,
                config=dataclasses.replace(config),
            )
            slide.link_images()
            return slide

        with ThreadPoolExecutor() as pool:
            return list(pool.map(build, raw))

    def iter_slides(self) -> Iterator[Slide]:
        """Return an iterator that loads the slides one at a time.

        If loading a slide raises, the iterator has already moved past it, so
        calling ``next`` again continues with the following slide.
        """
        return _SlideIterator(self)

    def load_slide(self, slide_path: str) -> Slide:
        """Load and parse the slide stored at ``slide_path`` in the archive.

        Images that cannot be read from the archive are left out silently.
        """
        slide_data = self.read_file_from_archive(slide_path)
        rels_data = self._read_optional(self.get_slide_rels_path(slide_path))

        number = Slide.extract_slide_number(slide_path) or 0
        elements = parse_slide_xml(slide_data)

        images: list[ImageReference] = []
        image_data: dict[str, bytes] = {}
        if self.config.extract_images:
            if rels_data is not None:
                images = parse_slide_rels(rels_data)
            for ref in images:
                image_path = self.get_full_image_path(slide_path, ref.target)
                try:
                    image_data[ref.id] = self.read_file_from_archive(image_path)
                except ArchiveError:
                    continue

        slide = Slide(
            rel_path=slide_path,
            slide_number=number,
            elements=elements,
            images=images,
            image_data=image_data,
            config=dataclasses.replace(self.config),
        )
        slide.link_images()
        return slide

    def read_file_from_archive(self, path: str) -> bytes:
        """Return the bytes of the archive member at ``path``."""
        if self._archive is None:
            raise ArchiveError("archive is closed")
        try:
            return self._archive.read(path)
        except KeyError as exc:
            raise ArchiveError(f"specified file not found in archive: {path}") from exc
        except (zipfile.BadZipFile, zlib.error) as exc:
            raise ArchiveError(exc) from exc

    def _read_optional(self, path: str) -> bytes | None:
        try:
            return self.read_file_from_archive(path)
        except ArchiveError:
            return None

    def get_slide_rels_path(self, slide_path: str) -> str:
        """Return the relationships part of a slide.

        ``ppt/slides/slide1.xml`` gives ``ppt/slides/_rels/slide1.xml.rels``.
        """
        directory, slash, name = slide_path.rpartition("/")
        if slash:
            return f"{directory}/_rels/{name}.rels"
        return f"{slide_path}.rels"

    @staticmethod
    def get_full_image_path(slide_path: str, target: str) -> str:
        """Resolve a relationship target against the slide it belongs to."""
        if target.startswith("../"):
            adjusted = target
            while adjusted.startswith("../"):
                adjusted = adjusted[len("../"):]
            return f"ppt/{adjusted}"
        slide_dir = slide_path.rpartition("/")[0]
        return f"{slide_dir}/{target}"


class _SlideIterator:
    """Iterates over a container's slides, loading each on demand."""

    def __init__(self, container: PptxContainer) -> None:
        self._container = container
        self._paths = list(container.slide_paths)
        self._index = 0

    def __iter__(self) -> _SlideIterator:
        return self

    def __next__(self) -> Slide:
        if self._index >= len(self._paths):
            raise StopIteration
        path = self._paths[self._index]
        self._index += 1
        return self._container.load_slide(path)