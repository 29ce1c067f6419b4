"""imgconv - replace images in a directory tree with another raster format."""

__version__ = "1.0.0"
