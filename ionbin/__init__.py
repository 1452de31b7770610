"""Building blocks for binary Ion: decimals, primitive encodings, buffered containers and a stream parser."""

__version__ = "0.1.0"