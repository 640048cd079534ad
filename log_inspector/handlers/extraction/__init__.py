"""
Extraction and Filter Templating

- ValueExtractor / extract_first: first non-empty JMESPath value across messages
- substitute_placeholder: safe ``{{name}}`` splicing of an extracted value
- build_filter: JMESPath evaluation with literal fallback
"""

from .extractor import ValueExtractor, decode_message, extract_first, normalize_result
from .filter_builder import build_filter, substitute_placeholder

__all__ = [
    "ValueExtractor",
    "build_filter",
    "decode_message",
    "extract_first",
    "normalize_result",
    "substitute_placeholder",
]
