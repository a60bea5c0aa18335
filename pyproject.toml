[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mipsim"
version = "0.1.0"
description = "A small MIPS assembler and simulator with an interactive text menu"
requires-python = ">=3.10"
dependencies = []
keywords = ["mips", "assembler", "simulator", "emulator", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Software Development :: Assemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mipsim = "mipsim.menu:main"

[tool.hatch.build.targets.wheel]
packages = ["mipsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
