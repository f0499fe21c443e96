[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reelforge"
version = "0.1.0"
description = "Render videos from declarative JSON scripts: scenes, layers, WAV audio mixing and FFmpeg encoding."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["video", "rendering", "timeline", "compositing", "audio-mixing", "ffmpeg", "ppm", "wav"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Non-Linear Editor",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
reelforge = "reelforge.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["reelforge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
