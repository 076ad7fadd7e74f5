[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rcckit"
version = "1.0.0"
description = "Radio control container building blocks and a JSON-RPC mock of a Silvus radio"
requires-python = ">=3.10"
dependencies = []
keywords = ["radio", "json-rpc", "mock", "telemetry", "silvus"]
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
    "Topic :: Software Development :: Testing :: Mocking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
silvus-mock = "rcckit.mock_main:main"

[tool.hatch.build.targets.wheel]
packages = ["rcckit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
