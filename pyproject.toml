[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wserve"
version = "0.1.0"
description = "A small multi-threaded static-file HTTP/1.0 server with a bounded, scheduling request buffer and a minimal client"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "web server", "static files", "thread pool", "scheduling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
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
wserver = "wserve.server:main"
wclient = "wserve.client:main"

[tool.hatch.build.targets.wheel]
packages = ["wserve"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
