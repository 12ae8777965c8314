"""
Scanner driver for the character compiler

Walks the source line by line and character by character, signalling
line-start, per-character and line-end events to a compiler, and answers
position and lookahead/lookbehind queries about the current character.

The pass is single and forward-only. Handlers that need to consume more
than one character set ScanState.skip; the scanner still visits every
character so the handlers see them, but the compiler's generic emission
step leaves skipped characters out of the output.
"""

from typing import TYPE_CHECKING

from ..models.scan import ScanState
from .output import Output

if TYPE_CHECKING:
    from .compiler import Compiler


class Scanner:
    """
    Line/character iterator with position predicates

    Attributes:
        line: Current line (without its newline)
        index: Position of the current character in line
        line_number: 1-based number of the current line
    """

    def __init__(self) -> None:
        self.line = ""
        self.index = -1
        self.line_number = 0

    def run(self, compiler: "Compiler", source: str, state: ScanState, output: Output) -> None:
        """
        Scan source, driving the compiler's newline/nextchar/endline hooks

        Args:
            compiler: Mode dispatcher receiving the events
            source: Text to scan
            state: Scan state for this compilation
            output: Output accumulator for this compilation
        """
        for line_number, line in enumerate(source.replace("\r\n", "\n").split("\n"), start=1):
            self.line = line
            self.index = -1
            self.line_number = line_number
            compiler.newline(line, self, state, output)
            for index, c in enumerate(line):
                self.index = index
                compiler.nextchar(c, self, state, output)
            compiler.endline(line, self, state, output)

    def char_isFirst(self) -> bool:
        """Current character is the first one on its line"""
        return self.index == 0

    def char_isLast(self) -> bool:
        """Current character is the last one on its line"""
        return self.index == len(self.line) - 1

    def text_isAhead(self, text: str) -> bool:
        """Text immediately after the current character equals text"""
        start = self.index + 1
        return self.line[start:start + len(text)] == text

    def text_isBehind(self, text: str) -> bool:
        """Text immediately before the current character equals text"""
        start = self.index - len(text)
        return start >= 0 and self.line[start:self.index] == text

    def line_ahead(self) -> str:
        """Remainder of the current line after the current character"""
        return self.line[self.index + 1:]
