# pptxmd

Turn PowerPoint presentations (`.pptx`) into Markdown.

`pptxmd` opens a presentation, reads its slides and turns their content
into Markdown:

- text, with bold, italic and underlined runs
- bulleted and numbered lists, nested by indentation level
- tables, with the first row as the header
- pictures, embedded as base64 data, saved to a directory, or handed back
  to you to deal with yourself

Each slide's Markdown begins with a comment such as `<!-- Slide 1 -->`.

## Installation

```
pip install pptxmd
```

Pillow is the only dependency; it is used to re-encode pictures as JPEG.

## Command line

```
pptxmd presentation.pptx
```

Run without a path, `pptxmd` prints its usage line and exits.

`--mode` selects what the command does:

| Mode       | Effect |
|------------|--------|
| `markdown` | (default) Prints every slide's Markdown and writes it all to `--output` (`output.md`), pictures embedded as base64. |
| `save`     | Writes the Markdown to `--output`; pictures are saved in `--image-dir` (`extracted_images`) and linked with `<a href="file://...">` tags. |
| `manual`   | Writes the Markdown to `--output` without pictures, saves each picture in `--image-dir` as `slide<N>_image<M>_<id>.<ext>`, and appends a base64 image line for it to the Markdown file. |
| `stream`   | Loads slides one at a time and writes each to `--output-dir` (`output_streaming`) as `slide_<N>.md`. Slides that fail to load are reported and skipped. |
| `elements` | Prints the parsed elements of each slide instead of Markdown. |

Other options:

- `--quality N` — JPEG quality (0–100) for compressed pictures. The
  `markdown`, `save` and `manual` modes use 75 when it is not given; the
  `stream` and `elements` modes use the library default of 80.
- `--no-compress` — keep pictures in their original format.

The command exits with status 1 and an `Error:` message when the file
cannot be opened or a slide cannot be parsed.

## Library

```python
from pptxmd.config import ImageHandlingMode, ParserConfig
from pptxmd.container import PptxContainer

config = (
    ParserConfig.builder()
    .extract_images(True)
    .compress_images(True)
    .quality(75)
    .image_handling_mode(ImageHandlingMode.IN_MARKDOWN)
    .build()
)

with PptxContainer.open("presentation.pptx", config) as container:
    for slide in container.parse_all():
        print(slide.convert_to_md())
```

`ParserConfig` is a dataclass, so `ParserConfig(quality=60)` works as well;
fields left out take their defaults (`extract_images=True`,
`compress_images=True`, `quality=80`, `IN_MARKDOWN`, no output path).
`PptxContainer.open` uses the defaults when no config is given.

`PptxContainer` exposes `slide_paths` (the `ppt/slides/slide*.xml` parts,
sorted by name) and `slide_count`. Call `close()` or use it as a context
manager to release the archive.

### Loading slides

- `parse_all()` loads every slide in order.
- `iter_slides()` returns an iterator that loads one slide at a time; after
  an error, calling `next` again continues with the following slide.
- `parse_all_multi_threaded()` reads the archive first and then parses the
  slide XML in worker threads. Unlike the others, it raises `ArchiveError`
  when a relationship names a picture the archive does not contain; the
  other methods leave such pictures out.
- `load_slide(path)` loads a single slide by its archive path.

### Images

`ImageHandlingMode` decides what `Slide.convert_to_md()` does with pictures:

| Mode          | Effect |
|---------------|--------|
| `IN_MARKDOWN` | Embedded as `![name](data:image/<ext>;base64,...)` |
| `SAVE`        | Written to `image_output_path` (the current directory if unset) and linked with an `<a href="file://...">` tag |
| `MANUALLY`    | Left out of the Markdown; fetch them with `Slide.load_images_manually()`, which returns `ManualImage` objects holding `base64_content` and `img_ref` |

With `compress_images` on, every picture is re-encoded as JPEG at the
configured quality (clamped to 1–100). With `extract_images` off, no
picture data is read at all.

`Slide` also offers `compress_image(data)`, `get_image_extension(path)`,
`link_images()` and the static `extract_slide_number(path)`.

### Working with elements

Each `Slide` holds `elements`, a list of objects from `pptxmd.types`:
`TextElement`, `ListElement`, `TableElement`, `ImageReference` and
`UnknownElement`. Runs (`Run`) carry their text and a `Formatting` with
`bold`, `italic`, `underlined` and `lang`; `Run.render_as_md()` gives the
Markdown form of a single run.

The lower-level parsers are available too: `pptxmd.parse_xml.parse_slide_xml`
for a slide part, `pptxmd.parse_rels.parse_slide_rels` for its relationships,
and the text-body helpers in `pptxmd.textbody`.

### Errors

All failures raise subclasses of `pptxmd.errors.PptxError`:

- `ArchiveError` — the file is not a zip archive or a part is missing
  (a missing file raises `OSError`)
- `XmlParseError` — a part is not well-formed XML
- `ParseError` — a part is not UTF-8, or lacks the expected structure
- `ImageNotFoundError` — a picture has no embedded image reference
- `ConversionFailedError` — a picture cannot be compressed or linked

## Limitations

- Only shapes, tables and pictures in a slide's shape tree are read. Other
  elements (groups, connectors and the like) become `UnknownElement` and
  produce no Markdown; graphic frames that hold something other than a
  table are dropped.
- A shape without a text body makes the whole slide fail with `ParseError`.
- Speaker notes, layouts, masters and themes are not read.
- Slides are ordered by part name, so `slide10.xml` comes before
  `slide2.xml`.
- Every paragraph with a bullet marker is numbered as an ordered list.