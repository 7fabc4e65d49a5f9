[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "promptsync"
version = "0.1.0"
description = "Render AI prompt packs as Cursor rules and Claude commands, and manage Promptsfile sources"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["prompts", "ai", "cursor", "claude", "front-matter", "promptsfile"]
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
    "Topic :: Software Development :: Code Generators",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
prompt-sync = "promptsync.project:main"

[tool.hatch.build.targets.wheel]
packages = ["promptsync"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
