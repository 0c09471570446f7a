[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hearpro"
version = "0.1.0"
description = "Hearing-aid signal processing helpers: real FFTs, spectral compression, filterbank layouts, prescriptions and feedback-cancellation tuning support"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "hearing aid",
    "audio",
    "signal processing",
    "filterbank",
    "compression",
    "fft",
    "feedback cancellation",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hearpro"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
