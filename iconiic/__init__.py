"""Build multi-size .ico, .icns and zipped .png icon sets from source images."""

__version__ = "0.1.0"
