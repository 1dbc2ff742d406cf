"""
hclgen: render Python values as HashiCorp Configuration Language.

    >>> from hclgen import block, expr
    >>> print(block("resource", ["azurerm_resource_group", "main"], {
    ...     "name": "my-rg",
    ...     "location": expr("var.location"),
    ... }))
    resource "azurerm_resource_group" "main" {
      name     = "my-rg"
      location = var.location
    }
"""
from typing import Any, Mapping, Optional, Sequence

from .data_and_types import (
    HclError, HclConfigError, HclCycleError, HclDocumentError, QuoteStyle,
    Value, HclNull, HclString, HclNumber, HclBool, Expression, HclList, HclMap,
    SerializerOptions, Block, Document,
)
from .serializer import HCLSerializer, escape_string, format_value
from .utils import is_expression, expr, to_value, to_map
from .document import serialize_document, parse_document, load_document
from .config import load_options

__version__ = "0.1.0"


def serialize(value: Any, options: Optional[SerializerOptions] = None) -> str:
    """Serialize a single value (typed or plain Python) to HCL."""
    return HCLSerializer(options).format_value(to_value(value), 0)

def attribute(key: str, value: Any, options: Optional[SerializerOptions] = None) -> str:
    """Serialize one `key = value` line."""
    return HCLSerializer(options).attribute(key, to_value(value))

def block(block_type: str, labels: Sequence[str], body: Mapping[str, Any],
          options: Optional[SerializerOptions] = None) -> str:
    """Serialize a block; mapping values in `body` become nested blocks."""
    for label in labels:
        if not isinstance(label, str):
            raise TypeError(f"Block labels must be strings, got {type(label).__name__}")
    return HCLSerializer(options).block(block_type, list(labels), to_map(body))


__all__ = [
    "serialize", "attribute", "block", "is_expression", "expr", "to_value", "to_map",
    "serialize_document", "parse_document", "load_document", "load_options",
    "format_value", "escape_string", "HCLSerializer",
    "Value", "HclNull", "HclString", "HclNumber", "HclBool", "Expression",
    "HclList", "HclMap", "SerializerOptions", "QuoteStyle", "Block", "Document",
    "HclError", "HclConfigError", "HclCycleError", "HclDocumentError",
]
