from typing import List, Optional
import re

from .data_and_types import (
    SerializerOptions, QuoteStyle, Value, HclNull, HclString, HclNumber, HclBool,
    Expression, HclList, HclMap,
)

HEREDOC_MARKER = "EOF"

_IDENTIFIER = re.compile(r'[a-zA-Z_][a-zA-Z0-9_-]*')


def escape_string(value: str) -> str:
    """
    Escape a string for an HCL double-quoted literal.

    Backslash goes first so the backslashes added by the later
    substitutions are not escaped a second time.
    """
    return (value
            .replace('\\', '\\\\')
            .replace('"', '\\"')
            .replace('\n', '\\n')
            .replace('\r', '\\r')
            .replace('\t', '\\t'))

def is_valid_hcl_identifier(key: str) -> bool:
    """Check if a key is a valid HCL identifier."""
    return _IDENTIFIER.fullmatch(key) is not None

def format_number(n) -> str:
    if isinstance(n, int):
        return str(n)
    return repr(n)

def heredoc_marker(text: str) -> str:
    marker = HEREDOC_MARKER
    # the closing marker may be indented, so compare stripped lines
    lines = {line.strip() for line in text.split('\n')}
    while marker in lines:
        marker += "_"
    return marker


class HCLSerializer:
    """
    Renders typed HCL values, attributes and blocks.

    Holds nothing but its options, so one instance can be shared freely.
    Indentation is derived from the level passed to each call.
    """

    def __init__(self, options: Optional[SerializerOptions] = None):
        self.options = options or SerializerOptions()

    def padding(self, level: int) -> str:
        return " " * (self.options.indent * level)

    def format_value(self, value: Value, level: int = 0) -> str:
        if isinstance(value, HclNull):
            return "null"
        elif isinstance(value, Expression):
            return value.hcl
        elif isinstance(value, HclString):
            return self.format_string(value.text)
        elif isinstance(value, HclNumber):
            return format_number(value.n)
        elif isinstance(value, HclBool):
            return "true" if value.b else "false"
        elif isinstance(value, HclList):
            return self.format_list(value, level)
        elif isinstance(value, HclMap):
            return self.format_map(value, level)
        raise TypeError(f"Cannot format {type(value).__name__} as an HCL value")

    def format_string(self, text: str) -> str:
        if (self.options.quote_style is QuoteStyle.HEREDOC
                and text.endswith('\n') and '\r' not in text):
            marker = heredoc_marker(text)
            return f"<<{marker}\n{text}{marker}"
        return f'"{escape_string(text)}"'

    def format_list(self, value: HclList, level: int) -> str:
        if not value.items:
            return "[]"

        padding = self.padding(level + 1)
        result = "[\n"
        for item in value.items:
            # a heredoc closing marker can't be followed by the item comma
            if isinstance(item, HclString):
                text = f'"{escape_string(item.text)}"'
            else:
                text = self.format_value(item, level + 1)
            result += f"{padding}{text},\n"
        result += self.padding(level) + "]"
        return result

    def format_map_key(self, key: str) -> str:
        if self.options.quote_keys and not is_valid_hcl_identifier(key):
            return f'"{escape_string(key)}"'
        return key

    def format_map(self, value: HclMap, level: int) -> str:
        if not value.entries:
            return "{}"

        padding = self.padding(level + 1)
        keys = [self.format_map_key(key) for key in value.entries]
        width = max(len(key) for key in keys)

        lines = []
        for key, item in zip(keys, value.entries.values()):
            lines.append(f"{padding}{key.ljust(width)} = {self.format_value(item, level + 1)}")
        return "{\n" + "\n".join(lines) + "\n" + self.padding(level) + "}"

    def format_body(self, body: HclMap, level: int) -> List[str]:
        """Format block body entries at the given level, one string per entry"""
        # Nested-block keys count towards the alignment width as well.
        width = max(len(key) for key in body.entries)
        padding = self.padding(level)

        lines = []
        for key, value in body.entries.items():
            if isinstance(value, HclMap):
                lines.append(self.format_nested_block(key, value, level))
            else:
                lines.append(f"{padding}{key.ljust(width)} = {self.format_value(value, level)}")
        return lines

    def format_nested_block(self, block_type: str, body: HclMap, level: int) -> str:
        padding = self.padding(level)
        if not body.entries:
            return f"{padding}{block_type} {{}}"

        lines = self.format_body(body, level + 1)
        return f"{padding}{block_type} {{\n" + "\n".join(lines) + f"\n{padding}}}"

    def attribute(self, key: str, value: Value) -> str:
        return f"{key} = {self.format_value(value, 0)}"

    def block(self, block_type: str, labels: List[str], body: HclMap) -> str:
        if labels:
            quoted_labels = " ".join(f'"{escape_string(label)}"' for label in labels)
            header = f"{block_type} {quoted_labels} {{"
        else:
            header = f"{block_type} {{"

        if not body.entries:
            return f"{header}\n}}"

        return header + "\n" + "\n".join(self.format_body(body, 1)) + "\n}"


def format_value(value: Value, indent: int = 2, level: int = 0) -> str:
    """Format a typed value with the given indent width, starting at `level`."""
    return HCLSerializer(SerializerOptions(indent=indent)).format_value(value, level)
