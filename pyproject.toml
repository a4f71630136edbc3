[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "htkkit"
version = "0.1.0"
description = "Read, write and transform HTK feature files for speech processing"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["htk", "speech", "features", "mfcc", "asr", "phonemes"]
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
    "Topic :: Multimedia :: Sound/Audio :: Speech",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
txt2htk = "htkkit.txt2htk:main"
htk2txt = "htkkit.htk2txt:main"
htk2db = "htkkit.htk2db:main"
htk-stats = "htkkit.stats:main"
htk-ceps-dist = "htkkit.ceps_dist:main"
htkcat = "htkkit.htkcat:main"
htk-contract = "htkkit.contract:main"
htk-split = "htkkit.split:main"
htk-shuffle = "htkkit.shuffle:main"
htk-split-phn = "htkkit.split_phn:main"

[tool.hatch.build.targets.wheel]
packages = ["htkkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
