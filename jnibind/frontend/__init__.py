"""
Front end: reading Rust source into declarations.
"""

from .parser import ItemParser, parse_item, parse_attribute_args
from .expander import ExpansionResult, ExportSite, SourceExpander, expand_source

__all__ = [
    "ItemParser",
    "parse_item",
    "parse_attribute_args",
    "ExpansionResult",
    "ExportSite",
    "SourceExpander",
    "expand_source",
]
