"""Read, write and transform HTK feature files, with command-line tools."""

__version__ = "0.1.0"