import base64
import io
import zipfile

import pytest
from PIL import Image

from pptxmd.cli import main
from pptxmd.types import IMAGE_NAMESPACE

NS = (
    'xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main" '
    'xmlns:r="http://schemas.openxmlformats.org/officeDocument/2006/relationships"'
)

SLIDE_TEXT = (
    f"<p:sld {NS}><p:cSld><p:spTree>"
    "<p:sp><p:txBody><a:p><a:r><a:rPr b=\"1\"/><a:t>Hello</a:t></a:r></a:p>"
    "</p:txBody></p:sp>"
    "</p:spTree></p:cSld></p:sld>"
)

SLIDE_PIC = (
    f"<p:sld {NS}><p:cSld><p:spTree>"
    "<p:pic><p:blipFill><a:blip r:embed=\"rId2\"/></p:blipFill></p:pic>"
    "<p:cxnSp/>"
    "</p:spTree></p:cSld></p:sld>"
)

RELS = (
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    f'<Relationship Id="rId2" Type="{IMAGE_NAMESPACE}" Target="../media/image1.png"/>'
    "</Relationships>"
)


def _png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


PNG = _png_bytes()


def _make_pptx(path, extra_slides=None):
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("ppt/slides/slide1.xml", SLIDE_TEXT)
        archive.writestr("ppt/slides/slide2.xml", SLIDE_PIC)
        archive.writestr("ppt/slides/_rels/slide2.xml.rels", RELS)
        archive.writestr("ppt/media/image1.png", PNG)
        for name, data in (extra_slides or {}).items():
            archive.writestr(name, data)
    return path


@pytest.fixture
def pptx(tmp_path):
    return _make_pptx(tmp_path / "deck.pptx")


def test_no_arguments_prints_usage(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().err.lower()


def test_markdown_mode_writes_and_echoes(pptx, tmp_path, capsys):
    output = tmp_path / "out.md"
    assert main([str(pptx), "-o", str(output)]) == 0
    md = output.read_text(encoding="utf-8")
    assert "<!-- Slide 1 -->" in md
    assert "**Hello**" in md
    assert "data:image/png;base64," in md
    out = capsys.readouterr().out
    assert "Found 2 slides" in out
    assert "**Hello**" in out
    assert "All slides converted successfully!" in out


def test_markdown_mode_uncompressed_embeds_original_bytes(pptx, tmp_path):
    output = tmp_path / "out.md"
    assert main([str(pptx), "-o", str(output), "--no-compress"]) == 0
    md = output.read_text(encoding="utf-8")
    encoded = base64.b64encode(PNG).decode("ascii")
    assert f"![image1.png](data:image/png;base64,{encoded})" in md


def test_manual_mode_compressed_saves_jpeg(pptx, tmp_path):
    output = tmp_path / "out.md"
    image_dir = tmp_path / "images"
    assert main(
        [str(pptx), "--mode", "manual", "-o", str(output), "--image-dir", str(image_dir)]
    ) == 0
    saved = image_dir / "slide2_image1_rId2.jpg"
    with Image.open(saved) as img:
        assert img.format == "JPEG"
    md = output.read_text(encoding="utf-8")
    encoded = base64.b64encode(saved.read_bytes()).decode("ascii")
    assert f"![slide2_image1_rId2](data:image/jpg;base64,{encoded})" in md


def test_manual_mode_uncompressed_round_trips_bytes(pptx, tmp_path, capsys):
    output = tmp_path / "out.md"
    image_dir = tmp_path / "images"
    assert main(
        [
            str(pptx), "--mode", "manual", "--no-compress",
            "-o", str(output), "--image-dir", str(image_dir),
        ]
    ) == 0
    saved = image_dir / "slide2_image1_rId2.png"
    assert saved.read_bytes() == PNG
    assert f"Saved image to {saved}" in capsys.readouterr().out


def test_stream_mode_writes_one_file_per_slide(pptx, tmp_path, capsys):
    out_dir = tmp_path / "streamed"
    assert main([str(pptx), "--mode", "stream", "--output-dir", str(out_dir)]) == 0
    assert sorted(p.name for p in out_dir.iterdir()) == ["slide_1.md", "slide_2.md"]
    assert (out_dir / "slide_1.md").read_text(encoding="utf-8").startswith(
        "<!-- Slide 1 -->"
    )
    out = capsys.readouterr().out
    assert "Processing slide 2 (2 elements)" in out
    assert "All slides processed successfully!" in out


def test_stream_mode_skips_broken_slide(tmp_path, capsys):
    deck = _make_pptx(
        tmp_path / "deck.pptx", {"ppt/slides/slide3.xml": "<p:sld"}
    )
    out_dir = tmp_path / "streamed"
    assert main([str(deck), "--mode", "stream", "--output-dir", str(out_dir)]) == 0
    assert (out_dir / "slide_1.md").exists()
    assert (out_dir / "slide_2.md").exists()
    assert not (out_dir / "slide_3.md").exists()
    assert "Error processing slide" in capsys.readouterr().err


def test_save_mode_links_saved_images(pptx, tmp_path):
    output = tmp_path / "out.md"
    image_dir = tmp_path / "saved"
    assert main(
        [str(pptx), "--mode", "save", "-o", str(output), "--image-dir", str(image_dir)]
    ) == 0
    name = "slide2_image1_rId2.jpg"
    assert (image_dir / name).is_file()
    md = output.read_text(encoding="utf-8")
    assert '<a href="file://' in md
    assert f">{name}</a>" in md


def test_elements_mode_prints_elements(pptx, capsys):
    assert main([str(pptx), "--mode", "elements"]) == 0
    out = capsys.readouterr().out
    assert "Processing slide 1 (1 elements)" in out
    assert "ImageReference(id='rId2', target='../media/image1.png')" in out
    assert "An Unknown element was found." in out


def test_not_a_zip_file_fails(tmp_path, capsys):
    bogus = tmp_path / "bogus.pptx"
    bogus.write_bytes(b"not a zip archive")
    assert main([str(bogus)]) == 1
    assert "Error" in capsys.readouterr().err


def test_missing_file_fails(tmp_path, capsys):
    assert main([str(tmp_path / "missing.pptx")]) == 1
    assert "Error" in capsys.readouterr().err


def test_quality_out_of_range_is_rejected(pptx):
    with pytest.raises(SystemExit) as info:
        main([str(pptx), "--quality", "300"])
    assert info.value.code == 2