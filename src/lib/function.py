"""
Function compiler for EDBML templates

Runs the template through a fixed sequence of source-to-source stages and
bundles the compiled function body with its parameter list:

    1. comments_strip       remove <!-- --> and /* */ spans
    2. nesting_validate     reject templates containing templates
    3. instructions_extract apply and remove <?pragma?> instructions
    4. directives_apply     directive hook (passthrough by default)
    5. header_define        declare out, att and hoisted definitions
    6. function_compile     character-level compilation

Example:
    >>> result = FunctionCompiler().compile('<?param name="title"?>\\n<h1>${title}</h1>')
    >>> result.params
    ('title',)
"""

import re
from typing import Any, Callable, Dict, List, Optional

from ..config import AppSettings
from ..models.result import Result
from ..models.state import CompileState, pipeline
from .compiler import Compiler
from .errors import NestedTemplateError
from .instructions import InstructionRegistry
from .log import LOG, state_connectToLogger


# An EDBML script element inside the template. The browser cannot parse
# nested scripts, so any such element counts as nesting.
NESTING_PATTERN = re.compile(r"<script.*type=[\"']?text/edbml[\"']?.*>([\s\S]+?)")

COMMENT_DELIMITERS = [("<!--", "-->"), ("/*", "*/")]


def comments_stripout(text: str, opener: str, closer: str) -> str:
    """
    Remove every opener...closer span from text

    Spans do not nest: the first closer after an opener ends the span. An
    opener without a closer, and everything after it, is left untouched.

    Args:
        text: Source text
        opener: Opening delimiter (e.g., "<!--")
        closer: Closing delimiter (e.g., "-->")

    Returns:
        Text with the delimited spans removed, all other text byte-identical

    Example:
        >>> comments_stripout("a<!-- b -->c", "<!--", "-->")
        'ac'
    """
    result = []
    pos = 0

    while pos < len(text):
        if text[pos] == opener[0] and text.startswith(opener[1:], pos + 1):
            end = text.find(closer, pos + len(opener))
            if end == -1:
                # Unmatched opener, keep the rest as is
                result.append(text[pos:])
                break
            pos = end + len(closer)
        else:
            result.append(text[pos])
            pos += 1

    return ''.join(result)


class FunctionCompiler(Compiler):
    """
    Compiles EDBML source to an invocable function body

    Attributes:
        registry: Processing instruction registry
        sequence: Compile stages, run in order by compile()
    """

    def __init__(
        self,
        verbosity: int = 1,
        settings: Optional[AppSettings] = None,
        registry: Optional[InstructionRegistry] = None,
    ) -> None:
        super().__init__(verbosity=verbosity, settings=settings)
        self.registry = registry or InstructionRegistry()
        self.sequence: List[Callable[[CompileState], CompileState]] = [
            self.comments_strip,
            self.nesting_validate,
            self.instructions_extract,
            self.directives_apply,
            self.header_define,
            self.function_compile,
        ]

    def compile(self, source: str, directives: Optional[Dict[str, Any]] = None) -> Result:
        """
        Compile template source to a function body

        Args:
            source: EDBML template text
            directives: Script tag attributes (name -> value), passed to the
                        directive hook

        Returns:
            Result with the compiled body, parameter names and instructions

        Raises:
            NestedTemplateError: If the template contains another template
        """
        state = CompileState(
            source=source,
            directives=dict(directives or {}),
            verbosity=3 if self.settings.debug_mode else self.verbosity,
        )
        state_connectToLogger(state)
        LOG(f"Compiling template ({len(source)} characters)...", level=2)

        final = pipeline(state, *self.sequence)

        LOG(f"Compiled function with {len(final.params)} parameter(s)", level=2)
        return Result(
            source=final.source,
            params=tuple(final.params),
            instructions=tuple(final.instructions),
        )

    # Stages ..................................................................

    def comments_strip(self, inputstate: CompileState) -> CompileState:
        """
        Strip HTML comments and block comments

        With settings.comments_coupled (the default) nothing is stripped
        unless the source contains an HTML comment opener, block comments
        included.
        """
        state = inputstate.copy()

        if self.settings.comments_coupled and "<!--" not in state.source:
            LOG("No HTML comment marker, comments left in place", level=3)
            return state

        for opener, closer in COMMENT_DELIMITERS:
            state.source = comments_stripout(state.source, opener, closer)
        return state

    def nesting_validate(self, inputstate: CompileState) -> CompileState:
        """
        Confirm no nested EDBML scripts

        Raises:
            NestedTemplateError: If an EDBML script element is found
        """
        match = NESTING_PATTERN.search(inputstate.source)
        if match:
            lineno = inputstate.source.count("\n", 0, match.start()) + 1
            raise NestedTemplateError(lineno=lineno)
        return inputstate

    def instructions_extract(self, inputstate: CompileState) -> CompileState:
        """Extract and evaluate processing instructions, then remove them"""
        state = inputstate.copy()
        state.params = list(state.params)
        state.instructions = list(state.instructions)

        for instruction in self.registry.instructions_find(state.source):
            state.instructions.append(instruction)
            self.registry.instruction_apply(instruction, state)

        state.source = self.registry.instructions_clean(state.source)
        LOG(f"Extracted {len(state.instructions)} instruction(s)", level=2)
        return state

    def directives_apply(self, inputstate: CompileState) -> CompileState:
        """Handle directives. Nothing by default."""
        return inputstate

    def header_define(self, inputstate: CompileState) -> CompileState:
        """Declare out, att and collected names, followed by function definitions"""
        state = inputstate.copy()

        names = []
        if "out" not in state.params:
            names.append(f"out = {self.settings.output_binding}")
        names.append(f"att = {self.settings.attribute_helper}")
        names.extend(state.head.declarations)

        header = "var " + ", ".join(names) + ";\n"
        for definition in state.head.functiondefs:
            header += definition + "\n"

        state.source = header + state.source
        return state

    def function_compile(self, inputstate: CompileState) -> CompileState:
        """Compile the header-augmented source character by character"""
        state = inputstate.copy()
        state.source = self.body_compile(state.source)
        LOG(f"Compiled body:\n{state.source}", level=3)
        return state
