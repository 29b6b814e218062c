"""Parse PowerPoint presentations (.pptx) into Markdown."""

__version__ = "0.3.0"