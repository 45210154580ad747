"""Interview analysis report renderer."""

__version__ = "0.3.0"
