[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minihttpd"
version = "0.1.0"
description = "A small static-file HTTP/1.1 server that answers GET requests from a web root"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "static files", "web server", "keep-alive"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minihttpd = "minihttpd.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["minihttpd"]

[tool.pytest.ini_options]
addopts = "-ra"
