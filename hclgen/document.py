from collections.abc import Mapping
from pathlib import Path
from typing import Any, List, Optional, Union
import logging

from .data_and_types import Block, Document, SerializerOptions, HclDocumentError
from .serializer import HCLSerializer
from .utils import to_map, load_structured_file

logger = logging.getLogger(__name__)

DOCUMENT_KEYS = {"attributes", "blocks"}
BLOCK_KEYS = {"type", "labels", "body"}


def serialize_document(document: Document, options: Optional[SerializerOptions] = None) -> str:
    """
    Render a whole HCL file: top-level attributes first, then each block,
    separated by blank lines and ending with a newline.
    """
    serializer = HCLSerializer(options)
    sections = []

    if document.attributes.entries:
        sections.append("\n".join(
            serializer.attribute(key, value)
            for key, value in document.attributes.entries.items()
        ))

    for blk in document.blocks:
        logger.debug("Rendering block %s %s", blk.block_type, blk.labels)
        sections.append(serializer.block(blk.block_type, blk.labels, blk.body))

    if not sections:
        return ""
    return "\n\n".join(sections) + "\n"


def _get(data: Mapping, key: str, default: Any) -> Any:
    # a key left empty in YAML loads as None; treat it as missing
    value = data.get(key)
    return default if value is None else value

def parse_document(data: Any) -> Document:
    """Build a Document from parsed YAML/JSON data."""
    if data is None:
        return Document()
    if not isinstance(data, Mapping):
        raise HclDocumentError(f"Document must be a mapping, got {type(data).__name__}")

    unknown = set(data) - DOCUMENT_KEYS
    if unknown:
        raise HclDocumentError(f"Unknown document keys: {', '.join(sorted(map(str, unknown)))}")

    attributes = _get(data, "attributes", {})
    if not isinstance(attributes, Mapping):
        raise HclDocumentError("'attributes' must be a mapping")

    blocks = _get(data, "blocks", [])
    if not isinstance(blocks, list):
        raise HclDocumentError("'blocks' must be a list")

    try:
        return Document(
            attributes=to_map(attributes, "attributes"),
            blocks=[_parse_block(item, idx) for idx, item in enumerate(blocks)],
        )
    except TypeError as e:
        raise HclDocumentError(str(e)) from e

def _parse_block(data: Any, idx: int) -> Block:
    if not isinstance(data, Mapping):
        raise HclDocumentError(f"Block #{idx} must be a mapping, got {type(data).__name__}")

    unknown = set(data) - BLOCK_KEYS
    if unknown:
        raise HclDocumentError(f"Block #{idx} has unknown keys: {', '.join(sorted(map(str, unknown)))}")

    block_type = data.get("type")
    if not isinstance(block_type, str) or not block_type:
        raise HclDocumentError(f"Block #{idx} needs a non-empty string 'type'")

    labels = _get(data, "labels", [])
    if not isinstance(labels, list) or not all(isinstance(label, str) for label in labels):
        raise HclDocumentError(f"Block #{idx} ({block_type}) labels must be a list of strings")

    body = _get(data, "body", {})
    if not isinstance(body, Mapping):
        raise HclDocumentError(f"Block #{idx} ({block_type}) body must be a mapping")

    return Block(block_type=block_type, labels=list(labels), body=to_map(body, f"{block_type} body"))


def load_document(path: Union[str, Path]) -> Document:
    """Load a document description from a YAML or JSON file."""
    return parse_document(load_structured_file(path))
