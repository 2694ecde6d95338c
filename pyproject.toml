[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "appimagelib"
version = "0.1.0"
description = "Pure Python helpers for inspecting AppImage files: ELF sizes and sections, type 2 digests, magic bytes and payload resources"
requires-python = ">=3.10"
dependencies = []
keywords = ["appimage", "elf", "md5", "xdg", "magic-bytes"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["appimagelib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
