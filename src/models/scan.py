"""
Scan state model

Mutable per-compilation record of the lexical mode and the per-character
flags consulted by the mode handlers.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class Mode(Enum):
    """Lexical mode of the character scanner"""
    SCRIPT = "script"    # plain script lines, copied through
    MARKUP = "markup"    # inside an out.html += '...' string literal
    TAG = "tag"          # attribute reference context inside an opening tag


class Capture(Enum):
    """
    Markup interpolation operators

    Each value is the sigil that opens the capture when followed by '{'.
    """
    PEEK = "$"    # ${expr}: inline read
    POKE = "#"    # #{expr}: two-way/event binding
    GEEK = "?"    # ?{expr}: computed/read-only binding


@dataclass
class ScanState:
    """
    Scanner state for a single compilation

    Attributes:
        mode: Current lexical mode
        last: Index of the last character on the current line
        adds: Current line starts with '+'
        cont: String literal continues across the current line boundary
        peek: ${ capture is active
        poke: #{ capture is active
        geek: ?{ capture is active
        curl: Brace depth inside the active capture
        skip: Characters left to suppress from default emission
        spot: Body anchor recorded when entering markup (hoisting target)
        refs: Tag-mode reference marker
    """
    mode: Mode = Mode.SCRIPT
    last: int = -1
    adds: bool = False
    cont: bool = False
    peek: bool = False
    poke: bool = False
    geek: bool = False
    curl: int = 0
    skip: int = 0
    spot: int = 0
    refs: bool = False

    def is_script(self) -> bool:
        return self.mode is Mode.SCRIPT

    def is_markup(self) -> bool:
        return self.mode is Mode.MARKUP

    def script_enter(self) -> None:
        self.mode = Mode.SCRIPT

    def markup_enter(self, spot: int) -> None:
        self.mode = Mode.MARKUP
        self.spot = spot

    def tag_enter(self) -> None:
        """Switch to tag mode (no pipeline stage does this on its own)"""
        self.mode = Mode.TAG
        self.refs = False

    @property
    def capture(self) -> Optional[Capture]:
        """The active capture operator, if any"""
        if self.peek:
            return Capture.PEEK
        if self.poke:
            return Capture.POKE
        if self.geek:
            return Capture.GEEK
        return None

    def capture_open(self, kind: Capture) -> None:
        """
        Start a capture: set its flag, reset brace depth, consume sigil and '{'

        Args:
            kind: Capture operator to open
        """
        self.peek = kind is Capture.PEEK
        self.poke = kind is Capture.POKE
        self.geek = kind is Capture.GEEK
        self.curl = 0
        self.skip = 2

    def capture_close(self) -> None:
        """End the active capture and consume the closing '}'"""
        self.peek = self.poke = self.geek = False
        self.curl = 0
        self.skip = 1
