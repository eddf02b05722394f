[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ttyxfer"
version = "0.1.0"
description = "Send files over a serial line with XMODEM, plus a bounded vector, a console shell and in-memory peripheral register helpers"
requires-python = ">=3.10"
keywords = ["xmodem", "serial", "tty", "uart", "gpio"]
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
    "Topic :: Terminals :: Serial",
    "Topic :: Communications",
]
dependencies = [
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ttywrite = "ttyxfer.ttywrite:main"

[tool.hatch.build.targets.wheel]
packages = ["ttyxfer"]

[tool.pytest.ini_options]
addopts = "-ra"
