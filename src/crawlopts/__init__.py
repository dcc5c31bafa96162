"""crawlopts - parse crawler command-line option strings into typed values."""

__version__ = "0.1.0"
