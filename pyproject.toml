[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "autodevterm"
version = "0.1.0"
description = "Installable terminal modules (Starship, Oh My Zsh, YAML-defined modules), a dependency-resolving registry and text screens for a setup wizard"
requires-python = ">=3.10"
keywords = ["terminal", "setup", "dotfiles", "starship", "oh-my-zsh", "modules", "wizard"]
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
    "Topic :: System :: Installation/Setup",
    "Topic :: System :: Shells",
    "Topic :: Utilities",
]
dependencies = [
    "pyyaml",
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["autodevterm"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
