from dataclasses import dataclass, field
from typing import Dict, List, Union
from enum import Enum
import math


class HclError(Exception):
    """Base class for hclgen errors"""
    pass

class HclConfigError(HclError, ValueError):
    """Raised for invalid serializer options or config files"""
    pass

class HclCycleError(HclError, ValueError):
    """Raised when a native value refers back to one of its own containers"""
    pass

class HclDocumentError(HclError, ValueError):
    """Raised when a document description is malformed"""
    pass


class QuoteStyle(Enum):
    DOUBLE = "double"
    HEREDOC = "heredoc"


@dataclass(frozen=True)
class HclNull:
    pass

@dataclass(frozen=True)
class HclString:
    text: str

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise TypeError(f"HclString expects a str, got {type(self.text).__name__}")

@dataclass(frozen=True)
class HclNumber:
    n: Union[int, float]

    def __post_init__(self):
        if isinstance(self.n, bool) or not isinstance(self.n, (int, float)):
            raise TypeError(f"HclNumber expects an int or float, got {type(self.n).__name__}")
        if isinstance(self.n, float) and not math.isfinite(self.n):
            raise ValueError(f"HCL has no literal for {self.n!r}")

@dataclass(frozen=True)
class HclBool:
    b: bool

    def __post_init__(self):
        if not isinstance(self.b, bool):
            raise TypeError(f"HclBool expects a bool, got {type(self.b).__name__}")

@dataclass(frozen=True)
class Expression:
    """Raw HCL text emitted as-is: references, interpolations, function calls"""
    hcl: str

    def __post_init__(self):
        if not isinstance(self.hcl, str):
            raise TypeError(f"Expression text must be a string, got {type(self.hcl).__name__}")

@dataclass
class HclList:
    items: List['Value'] = field(default_factory=list)

@dataclass
class HclMap:
    entries: Dict[str, 'Value'] = field(default_factory=dict)


Value = Union[HclNull, HclString, HclNumber, HclBool, Expression, HclList, HclMap]
VALUE_TYPES = (HclNull, HclString, HclNumber, HclBool, Expression, HclList, HclMap)


@dataclass
class SerializerOptions:
    indent: int = 2
    quote_style: QuoteStyle = QuoteStyle.DOUBLE
    quote_keys: bool = False

    def __post_init__(self):
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise HclConfigError(f"indent must be an integer, got {self.indent!r}")
        if self.indent <= 0:
            raise HclConfigError(f"indent must be positive, got {self.indent}")
        if not isinstance(self.quote_style, QuoteStyle):
            try:
                self.quote_style = QuoteStyle(self.quote_style)
            except ValueError:
                allowed = ", ".join(style.value for style in QuoteStyle)
                raise HclConfigError(f"quote_style must be one of {allowed}, got {self.quote_style!r}")
        if not isinstance(self.quote_keys, bool):
            raise HclConfigError(f"quote_keys must be a boolean, got {self.quote_keys!r}")


@dataclass
class Block:
    block_type: str
    labels: List[str] = field(default_factory=list)
    body: HclMap = field(default_factory=HclMap)

@dataclass
class Document:
    attributes: HclMap = field(default_factory=HclMap)
    blocks: List[Block] = field(default_factory=list)
