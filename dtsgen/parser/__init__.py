"""Java source parsing."""

from .java import JavaSourceParser, parse_java_source
from .scanning import split_top_level

__all__ = ["JavaSourceParser", "parse_java_source", "split_top_level"]
