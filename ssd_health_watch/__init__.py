"""SSD Health Watch - wear-level monitoring for SSDs behind USB bridges."""

__version__ = "1.0.0"
