[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "propatten"
version = "0.1.0"
description = "Radio-wave propagation attenuation models: rain, snow, gas, cloud, scintillation, ionosphere and troposcatter."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "propagation",
    "attenuation",
    "rain fade",
    "scintillation",
    "troposcatter",
    "ionosphere",
    "satellite link",
    "radio",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Communications",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["propatten"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
