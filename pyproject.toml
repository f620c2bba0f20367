[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mythos"
version = "0.1.0"
description = "Media library scanning helpers: movie and TV filename identification, video discovery, ffprobe parsing, server configuration and signing-secret handling"
requires-python = ">=3.11"
dependencies = []
keywords = ["media", "library", "scanner", "ffprobe", "tv", "movies"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mythos"]

[tool.pytest.ini_options]
addopts = "-ra"
