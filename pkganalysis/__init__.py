"""Building blocks for package behaviour analysis: strace parsing, ecosystems and result types."""

__version__ = "0.1.0"