"""Line-oriented full-text search over a directory of plain-text documents."""

__version__ = "0.1.0"
