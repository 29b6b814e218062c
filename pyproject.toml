[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pptxmd"
version = "0.3.0"
description = "Parse PowerPoint presentations (.pptx) into Markdown"
requires-python = ">=3.10"
keywords = ["pptx", "powerpoint", "markdown", "conversion", "parser"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: Markdown",
    "Topic :: Office/Business :: Office Suites",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pillow",
]

[project.scripts]
pptxmd = "pptxmd.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pptxmd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
