[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "localchat"
version = "0.1.0"
description = "A small TCP chat server and terminal client with colourful, boxed console output"
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "tcp", "terminal", "console", "lan"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
localchat-server = "localchat.server_cli:main"
localchat-client = "localchat.client_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["localchat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
