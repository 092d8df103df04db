[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nekosys"
version = "0.1.0"
description = "Small desktop assistant core: JSON config, coloured logging, named broadcast channels, module launcher and a tiny web server."
requires-python = ">=3.11"
keywords = ["assistant", "modules", "config", "logging", "channels", "launcher"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]
dependencies = [
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
nekosys = "nekosys.main:main"

[tool.hatch.build.targets.wheel]
packages = ["nekosys"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
