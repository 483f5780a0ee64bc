"""Query language and file finder for bibliographic records."""

__version__ = "0.1.0"
