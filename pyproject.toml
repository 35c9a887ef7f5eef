[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ticketbook"
version = "0.1.0"
description = "Concurrent in-memory ticket booking with an HTTP API and a load-simulation client"
requires-python = ">=3.10"
keywords = ["booking", "tickets", "http", "flask", "concurrency", "worker-pool"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ticketbook-server = "ticketbook.server:main"
ticketbook-client = "ticketbook.client:main"

[tool.hatch.build.targets.wheel]
packages = ["ticketbook"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
