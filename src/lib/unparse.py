"""
Unparser for the compiled function body

Serializes the intermediate nodes collected by Output into JavaScript
source. This is the only place where markup text is quoted, so escaping
rules live in escape() and nowhere else.

Generated code relies on these runtime collaborators:
    out.html           string accumulator
    out.write ()       finalize and return the rendered result
    att.$html (name)   render a shorthand attribute
    att.$pop (name)    suppress a shorthand attribute
    att.$all ()        render all pending shorthand attributes
    edb.$set (fn, ctx) register a callback, returns an opaque name
    edb.$run (e, name) invoke a registered two-way callback with an event
    edb.$get (name)    invoke a registered computed callback
"""

from typing import Dict, List, Tuple

from ..models.scan import Capture
from ..models.nodes import (
    AttributeCall,
    Close,
    Inline,
    Interpolation,
    Newline,
    Node,
    Open,
    Outline,
    Script,
    Text,
)


OPEN = "out.html += '"
CLOSE = "';"

# Hoisted declaration templates, keyed by capture kind
OUTLINES: Dict[Capture, str] = {
    Capture.POKE: "var {name} = edb.$set(function(value, checked) {{\n{body};\n}}, this);",
    Capture.GEEK: "var {name} = edb.$set(function() {{\nreturn {body};\n}}, this);",
}

# Call-site templates; these sit inside an attribute value of the markup string
INLINES: Dict[Capture, str] = {
    Capture.POKE: "edb.$run(event,&quot;' + {name} + '&quot;);",
    Capture.GEEK: "edb.$get(&quot;' + {name} + '&quot;);",
}

_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\r": "\\r",
}


def escape(text: str) -> str:
    r"""
    Escape markup text for a single-quoted JavaScript string literal

    Example:
        >>> escape("it's")
        "it\\'s"
    """
    return "".join(_ESCAPES.get(c, c) for c in text)


class Unparser:
    """
    Linearizes body nodes and hoisted outlines into function body text
    """

    def node_unparse(self, node: Node) -> str:
        """Render a single body node"""
        if isinstance(node, Script):
            return node.text
        if isinstance(node, Text):
            return escape(node.text)
        if isinstance(node, Open):
            return OPEN
        if isinstance(node, Close):
            return CLOSE
        if isinstance(node, Newline):
            return "' +\n'" if node.continued else "\n"
        if isinstance(node, Interpolation):
            return "' + (" + node.expr + ") + '"
        if isinstance(node, Inline):
            return INLINES[node.kind].format(name=node.name)
        if isinstance(node, AttributeCall):
            if node.name is None:
                return "' + att." + node.method + " () + '"
            return "' + att." + node.method + " ( '" + node.name + "' ) + '"
        raise TypeError(f"Cannot unparse {type(node).__name__}")

    def outline_unparse(self, outline: Outline) -> str:
        """Render a hoisted declaration"""
        return OUTLINES[outline.kind].format(name=outline.name, body=outline.body)

    def unparse(self, body: List[Node], outlines: List[Tuple[int, Outline]]) -> str:
        """
        Render the complete body in one pass

        Outlines are emitted, one per line, in front of the node at their
        anchor. Outlines sharing an anchor keep creation order.

        Args:
            body: Body nodes in emission order
            outlines: (anchor, outline) pairs in creation order

        Returns:
            Function body text
        """
        hoisted: Dict[int, List[Outline]] = {}
        for anchor, outline in outlines:
            hoisted.setdefault(anchor, []).append(outline)

        parts: List[str] = []
        for index in range(len(body) + 1):
            for outline in hoisted.get(index, []):
                parts.append(self.outline_unparse(outline) + "\n")
            if index < len(body):
                parts.append(self.node_unparse(body[index]))
        return "".join(parts)
