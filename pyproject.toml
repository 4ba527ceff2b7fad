[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chromacore"
version = "1.6.0"
description = "Stream processors for chroma-based audio fingerprinting: downmixing, resampling and chroma feature extraction"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "fingerprint", "chroma", "resampling", "signal-processing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chromacore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
