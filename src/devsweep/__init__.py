"""Developer cache cleaner: analyze and remove build, package and IDE caches."""

__version__ = "1.0.0"
