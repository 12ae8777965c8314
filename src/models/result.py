"""
Compilation result model

The immutable bundle returned by FunctionCompiler.compile().
"""

from dataclasses import dataclass
from typing import Tuple

from .instructions import Instruction


@dataclass(frozen=True)
class Result:
    """
    Compiled function body plus its signature

    Attributes:
        source: Compiled function body (JavaScript statements)
        params: Formal parameter names in declaration order (duplicates kept)
        instructions: Processing instructions extracted from the template

    Example:
        For template '<?param name="title"?>\\n<h1>${title}</h1>':
        Result(
            source="var out = $function.$out, ...\\nreturn out.write ();",
            params=("title",),
            instructions=(Instruction(tag="param", attributes={"name": "title"}),)
        )
    """
    source: str
    params: Tuple[str, ...] = ()
    instructions: Tuple[Instruction, ...] = ()

    def function_source(self) -> str:
        """
        Render the complete function (signature and body) for debugging

        The trailing empty line of the body is dropped so the closing brace
        sits directly below the last statement.

        Returns:
            JavaScript function expression as text
        """
        lines = self.source.split("\n")
        if lines and not lines[-1]:
            lines.pop()
        args = "( " + ", ".join(self.params) + " )" if self.params else "()"
        return "function " + args + " {\n" + "\n".join(lines) + "\n}"

    def source_highlight(self) -> str:
        """
        Render function_source() as syntax-highlighted HTML

        Returns:
            HTML fragment with inline styles
        """
        from ..lib.lexer import javascript_highlight
        return javascript_highlight(self.function_source())
