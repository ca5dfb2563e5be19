[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "workbench"
version = "0.1.0"
description = "A collection of small tools: calculator, word counter, Bloom filter, dice roller, log colourizer, EBML/Matroska reader, TFTP, tiny servers and a shell."
requires-python = ">=3.10"
keywords = [
    "calculator",
    "bloom-filter",
    "dice",
    "ebml",
    "matroska",
    "tftp",
    "socks5",
    "shell",
    "websocket",
    "http",
]
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
    "Topic :: Utilities",
]
dependencies = [
    "termcolor",
    "websockets",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
workbench-calc = "workbench.calculator:main"
workbench-wc = "workbench.wordcount:main"
workbench-rolldice = "workbench.dice:main"
workbench-clog = "workbench.clog:main"
workbench-webserver = "workbench.webserver:main"
workbench-shell = "workbench.shell:main"
workbench-hello = "workbench.hello:main"
workbench-tftp = "workbench.tftp_transfer:main"
workbench-filestore = "workbench.filestore:main"
workbench-gameserver = "workbench.gameserver:main"
workbench-wisdom = "workbench.wisdom:main"

[tool.hatch.build.targets.wheel]
packages = ["workbench"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
