[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crstoolchain"
version = "2.0.0"
description = "Helpers for web application firewall rule sets: regex-assembly parsing, command-line evasion patterns, test renumbering and dictionary checks"
requires-python = ">=3.10"
dependencies = []
keywords = ["waf", "modsecurity", "regex", "rules", "toolchain", "security"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Text Processing :: Filters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["crstoolchain"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
