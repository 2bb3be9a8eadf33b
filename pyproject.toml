[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sitegen"
version = "0.13.0"
description = "Building blocks for a static site generator: shortcodes, tables of contents, code-block line highlighting, search index rows and link checking"
requires-python = ">=3.10"
keywords = ["static", "site", "generator", "shortcodes", "table-of-contents", "link-checker"]
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
    "Topic :: Internet :: WWW/HTTP :: Site Management",
    "Topic :: Text Processing :: Markup :: HTML",
]
dependencies = [
    "requests>=2.25",
    "jinja2>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["sitegen"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
