"""Command-line front end: convert a presentation to Markdown in several ways."""

from __future__ import annotations

import argparse
import base64
import sys
from collections.abc import Iterator
from pathlib import Path

from .config import ImageHandlingMode, ParserConfig
from .container import PptxContainer
from .errors import ConversionFailedError, PptxError
from .slide import ManualImage, Slide
from .types import UnknownElement

_MODES = ("markdown", "manual", "stream", "save", "elements")
_BUILDER_QUALITY = 75


def _quality(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from exc
    if not 0 <= value <= 100:
        raise argparse.ArgumentTypeError("quality must be between 0 and 100")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pptxmd",
        description="Convert the slides of a .pptx presentation to Markdown.",
    )
    parser.add_argument("path", nargs="?", help="presentation to read")
    parser.add_argument(
        "--mode",
        choices=_MODES,
        default="markdown",
        help=(
            "markdown: one Markdown file with embedded images; "
            "manual: also write images to --image-dir yourself; "
            "stream: one Markdown file per slide in --output-dir; "
            "save: images saved to --image-dir and linked; "
            "elements: print the parsed slide elements"
        ),
    )
    parser.add_argument(
        "-o", "--output", type=Path, default=Path("output.md"),
        help="Markdown file to write (markdown, manual and save modes)",
    )
    parser.add_argument(
        "--image-dir", type=Path, default=Path("extracted_images"),
        help="directory for images (manual and save modes)",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=Path("output_streaming"),
        help="directory for per-slide Markdown files (stream mode)",
    )
    parser.add_argument(
        "--quality", type=_quality, default=None,
        help="JPEG quality used when compressing images",
    )
    parser.add_argument(
        "--no-compress", action="store_true",
        help="keep images in their original format",
    )
    return parser


def _make_config(args: argparse.Namespace) -> ParserConfig:
    builder = (
        ParserConfig.builder()
        .extract_images(True)
        .compress_images(not args.no_compress)
    )
    if args.mode in ("stream", "elements"):
        if args.quality is not None:
            builder.quality(args.quality)
        return builder.build()

    builder.quality(_BUILDER_QUALITY if args.quality is None else args.quality)
    if args.mode == "markdown":
        builder.image_handling_mode(ImageHandlingMode.IN_MARKDOWN)
    elif args.mode == "manual":
        builder.image_handling_mode(ImageHandlingMode.MANUALLY)
    else:
        builder.image_handling_mode(ImageHandlingMode.SAVE)
        builder.image_output_path(args.image_dir)
    return builder.build()


def _markdown(slide: Slide) -> str | None:
    try:
        return slide.convert_to_md()
    except ConversionFailedError:
        return None


def _manual_images(slide: Slide) -> list[ManualImage]:
    try:
        return slide.load_images_manually()
    except ConversionFailedError:
        return []


def _stream(container: PptxContainer) -> Iterator[Slide]:
    """Yield slides one by one, reporting and skipping those that fail."""
    slides = container.iter_slides()
    while True:
        try:
            slide = next(slides)
        except StopIteration:
            return
        except PptxError as exc:
            print(f"Error processing slide: {exc}", file=sys.stderr)
            continue
        yield slide


def _run_convert(container: PptxContainer, output: Path, echo: bool) -> None:
    slides = container.parse_all()
    print(f"Found {len(slides)} slides")
    with output.open("w", encoding="utf-8") as md_file:
        for slide in slides:
            md_content = _markdown(slide)
            if md_content is None:
                continue
            if echo:
                print(md_content)
            print(md_content, file=md_file)
    print("All slides converted successfully!")


def _run_manual(container: PptxContainer, output: Path, image_dir: Path) -> None:
    slides = container.parse_all()
    print(f"Found {len(slides)} slides")
    image_dir.mkdir(parents=True, exist_ok=True)
    image_count = 1

    with output.open("w", encoding="utf-8") as md_file:
        for slide in slides:
            md_content = _markdown(slide)
            if md_content is not None:
                print(md_content, file=md_file)

            for image in _manual_images(slide):
                image_data = base64.b64decode(image.base64_content)
                ext = (
                    "jpg"
                    if slide.config.compress_images
                    else slide.get_image_extension(image.img_ref.target)
                )
                file_name = (
                    f"slide{slide.slide_number}_image{image_count}_{image.img_ref.id}"
                )
                output_path = image_dir / f"{file_name}.{ext}"
                output_path.write_bytes(image_data)
                print(f"Saved image to {output_path}")
                print(
                    f"![{file_name}](data:image/{ext};base64,{image.base64_content})",
                    file=md_file,
                )
                image_count += 1
    print("All slides converted successfully!")


def _run_stream(container: PptxContainer, output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    for slide in _stream(container):
        print(
            f"Processing slide {slide.slide_number} ({len(slide.elements)} elements)"
        )
        md_content = _markdown(slide)
        if md_content is None:
            continue
        output_path = output_dir / f"slide_{slide.slide_number}.md"
        output_path.write_text(md_content, encoding="utf-8")
        print(f"Saved slide {slide.slide_number} to {output_path}")
    print("All slides processed successfully!")


def _run_elements(container: PptxContainer) -> None:
    for slide in _stream(container):
        print(
            f"Processing slide {slide.slide_number} ({len(slide.elements)} elements)"
        )
        for element in slide.elements:
            if isinstance(element, UnknownElement):
                print("An Unknown element was found.\n")
            else:
                print(f"{element!r}\n")
    print("All slides processed successfully!")


def main(argv: list[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.path is None:
        parser.print_usage(sys.stderr)
        return 0

    print(f"Processing PPTX file: {args.path}")
    try:
        config = _make_config(args)
        with PptxContainer.open(args.path, config) as container:
            if args.mode == "markdown":
                _run_convert(container, args.output, echo=True)
            elif args.mode == "save":
                _run_convert(container, args.output, echo=False)
            elif args.mode == "manual":
                _run_manual(container, args.output, args.image_dir)
            elif args.mode == "stream":
                _run_stream(container, args.output_dir)
            else:
                _run_elements(container)
    except (PptxError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())