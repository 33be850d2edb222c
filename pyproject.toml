[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tremligeiro"
version = "1.0.0"
description = "Order service core for a fast-food point of sale: order lifecycle, checkout, payment requests, order events and framework-independent HTTP handlers."
requires-python = ">=3.10"
keywords = ["orders", "point-of-sale", "checkout", "restaurant", "events", "sqlalchemy"]
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
    "Topic :: Office/Business :: Financial :: Point-Of-Sale",
    "Topic :: Database",
    "Typing :: Typed",
]
dependencies = [
    "sqlalchemy>=2.0",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[tool.hatch.build.targets.wheel]
packages = ["tremligeiro"]

[tool.hatch.build.targets.sdist]
include = ["tremligeiro", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
ignore_missing_imports = true
