"""
Output accumulator for the character compiler

Collects the compiled body as a list of intermediate nodes, the capture
buffer for injected expressions, and the hoisted outlines together with
the body anchor they belong in front of.
"""

from typing import List, Optional, Tuple

from ..models.nodes import Node, Outline, Script, Text


class Output:
    """
    Compiled body under construction

    Attributes:
        body: Body nodes in emission order (append-only, except text_trim())
        temp: Capture buffer, None unless a #{ or ?{ or ${ capture is active
        outlines: (anchor, outline) pairs in creation order, where anchor is
                  the index into body the outline is hoisted in front of
    """

    def __init__(self, preamble: str = "") -> None:
        self.body: List[Node] = [Script(preamble)] if preamble else []
        self.temp: Optional[str] = None
        self.outlines: List[Tuple[int, Outline]] = []

    def anchor(self) -> int:
        """Current body position, usable as a hoisting anchor"""
        return len(self.body)

    def node_append(self, node: Node) -> None:
        self.body.append(node)

    def script_append(self, text: str) -> None:
        """Append script text, merging with a trailing Script node"""
        if self.body and isinstance(self.body[-1], Script):
            self.body[-1].text += text
        else:
            self.body.append(Script(text))

    def text_append(self, text: str) -> None:
        """Append markup text, merging with a trailing Text node"""
        if self.body and isinstance(self.body[-1], Text):
            self.body[-1].text += text
        else:
            self.body.append(Text(text))

    def text_trim(self) -> bool:
        """
        Remove the last character of trailing markup text

        Used when a '-' written just before '@' turns out to be the
        attribute pop marker.

        Returns:
            True if a character was removed
        """
        if not self.body or not isinstance(self.body[-1], Text):
            return False
        node = self.body[-1]
        node.text = node.text[:-1]
        if not node.text:
            self.body.pop()
        return True

    def temp_flush(self) -> str:
        """Return the capture buffer and reset it"""
        temp = self.temp or ""
        self.temp = None
        return temp

    def outline_insert(self, anchor: int, outline: Outline) -> None:
        """Hoist an outline in front of the node at anchor"""
        self.outlines.append((anchor, outline))
