[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "prommodel"
version = "0.1.0"
description = "Data model for monitoring metrics: labels, fingerprints, alerts, silences, timestamps and samples"
requires-python = ">=3.10"
dependencies = []
keywords = ["monitoring", "metrics", "labels", "fingerprint", "alerts", "silences", "histogram"]
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
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["prommodel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
