[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smartorganizer"
version = "0.1.0"
description = "Sort files into subfolders by extension or custom rules, with undo history"
requires-python = ">=3.10"
dependencies = []
keywords = ["files", "organizer", "sorting", "undo", "cli", "tkinter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: File Managers",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
smartorganizer = "smartorganizer.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["smartorganizer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
