"""
Intermediate form of the compiled function body

The mode handlers append these nodes to the Output accumulator instead of
splicing strings; lib.unparse.Unparser turns them into JavaScript text.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .scan import Capture


@dataclass
class Script:
    """Script text copied through verbatim"""
    text: str


@dataclass
class Open:
    """Start of a string-append statement (out.html += ')"""


@dataclass
class Close:
    """End of a string-append statement (';)"""


@dataclass
class Text:
    """Literal markup text, escaped when unparsed"""
    text: str


@dataclass
class Newline:
    """
    Source line break

    Attributes:
        continued: Break falls inside an open string literal (markup
                   continuation), so the literal must be split around it
    """
    continued: bool = False


@dataclass
class Interpolation:
    """${expr}: expression concatenated into the markup string"""
    expr: str


@dataclass
class Inline:
    """
    Call-site reference to a hoisted helper

    Attributes:
        kind: Capture.POKE (event invocation) or Capture.GEEK (read)
        name: Generated helper name
    """
    kind: Capture
    name: str


@dataclass
class Outline:
    """
    Hoisted helper declaration

    Attributes:
        kind: Capture.POKE (callback) or Capture.GEEK (getter)
        name: Generated helper name
        body: Captured expression source
    """
    kind: Capture
    name: str
    body: str


@dataclass
class AttributeCall:
    """
    Attribute shorthand expansion

    Attributes:
        method: Attribute helper method ("$html", "$pop" or "$all")
        name: Attribute name, None for "$all"
    """
    method: str
    name: Optional[str] = None


Node = Union[Script, Open, Close, Text, Newline, Interpolation, Inline, AttributeCall]
