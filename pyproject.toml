[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zxpico"
version = "0.36.0"
description = "ZX Spectrum peripheral emulation: AY sound chip, keyboards, key matrices, joysticks, mouse, settings and RGB scanline rendering"
requires-python = ">=3.10"
dependencies = []
keywords = ["zx-spectrum", "emulator", "ay-3-8912", "kempston", "sinclair", "joystick", "retro"]
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
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zxpico"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
