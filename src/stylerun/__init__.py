"""stylerun - declarative PostCSS runner invocations."""

__version__ = "0.1.0"
