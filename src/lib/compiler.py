"""
Character compiler for EDBML

Compiles the hybrid markup+script template language into the statements
of a JavaScript function body. Lines starting with '<' are markup and
become string appends to out.html; every other line is script and is
copied through. Inside markup:

    ${expr}     peek: expr is concatenated into the string
    #{expr}     poke: expr becomes a hoisted callback, referenced by name
    ?{expr}     geek: expr becomes a hoisted getter, referenced by name
    @name       render a shorthand attribute (-@name suppresses it)
    @@          render all pending shorthand attributes
    +           at line end (or line start) continues the markup string

Mode handlers are plain functions selected from HANDLERS by the current
Mode. They run for every character, including characters a previous
handler marked as skipped; Compiler.nextchar() then emits the character
unless it was skipped.

Example:
    >>> Compiler().body_compile("<p>${title}</p>")
    "'use strict';\\nout.html += '<p>' + (title) + '</p>';\\n\\nreturn out.write ();"
"""

import re
from typing import Callable, Dict, Optional

from ..config import appsettings, AppSettings
from ..models.scan import Capture, Mode, ScanState
from ..models.nodes import AttributeCall, Close, Inline, Interpolation, Newline, Open, Outline
from .log import LOG
from .output import Output
from .scanner import Scanner
from .unparse import Unparser


# Qualified attribute name (class, id, data-x, ng.model) not starting with a digit
ATTRIBUTE_NAME = re.compile(r"[A-Za-z_.\-][A-Za-z0-9_.\-]*")

SIGILS: Dict[str, Capture] = {capture.value: capture for capture in Capture}


class Compiler:
    """
    Mode dispatcher and code generator

    Owns the unique-name counter used for hoisted helpers. The counter is
    shared by every compilation run through the same instance and never
    reset, so names stay unique across calls. Use one instance per
    concurrent compilation.

    Attributes:
        keyindex: Next counter value to issue
        verbosity: Logging verbosity for compilations started here
        settings: Code generation settings
    """

    def __init__(self, verbosity: int = 1, settings: Optional[AppSettings] = None) -> None:
        self.keyindex = 1
        self.verbosity = verbosity
        self.settings = settings or appsettings

    def name_next(self) -> str:
        """Issue the next unique helper name"""
        name = self.settings.name_make(self.keyindex)
        self.keyindex += 1
        return name

    def body_compile(self, script: str) -> str:
        """
        Compile template text to function body statements

        Args:
            script: Template text (header already prepended)

        Returns:
            Function body ending in a return of the finalized output
        """
        scanner = Scanner()
        state = ScanState()
        output = Output("'use strict';\n" if self.settings.strict_mode else "")
        scanner.run(self, script, state, output)
        if state.capture is not None:
            LOG(f"Warning: unterminated {state.capture.value}{{ capture at end of template", level=1)
            output.temp_flush()
        if state.is_markup():
            output.node_append(Close())
        output.script_append("\nreturn out.write ();")
        return Unparser().unparse(output.body, output.outlines)

    # Scanner events ..........................................................

    def newline(self, line: str, scanner: Scanner, state: ScanState, output: Output) -> None:
        """Line begins"""
        state.last = len(line) - 1
        state.adds = line[:1] == "+"
        state.cont = state.cont or (state.is_markup() and state.adds)
        if state.capture is not None and line[:1] == "<":
            # generated lines never start with markup
            output.temp += " "

    def endline(self, line: str, scanner: Scanner, state: ScanState, output: Output) -> None:
        """Line ends"""
        if state.capture is not None:
            # expression spans lines
            output.temp += "\n"
        elif state.is_markup() and not state.cont:
            output.node_append(Close())
            output.node_append(Newline())
            state.script_enter()
        else:
            output.node_append(Newline(continued=state.is_markup()))
        state.cont = False

    def nextchar(self, c: str, scanner: Scanner, state: ScanState, output: Output) -> None:
        """Next char"""
        HANDLERS[state.mode](self, c, scanner, state, output)
        if state.skip <= 0:
            if state.capture is not None:
                output.temp += c
            elif state.is_markup():
                output.text_append(c)
            elif state.is_script():
                output.script_append(c)
        state.skip = max(0, state.skip - 1)

    # Captures ................................................................

    def capture_open(self, kind: Capture, state: ScanState, output: Output) -> None:
        state.capture_open(kind)
        output.temp = ""

    def capture_close(self, state: ScanState, output: Output) -> None:
        """Flush the capture buffer as an interpolation or an outline/inline combo"""
        kind = state.capture
        expr = output.temp_flush()
        state.capture_close()
        if kind is Capture.PEEK:
            output.node_append(Interpolation(expr))
        else:
            self.combo_inject(kind, expr, state, output)

    def combo_inject(self, kind: Capture, expr: str, state: ScanState, output: Output) -> None:
        """
        Hoist a helper declaration at the markup anchor and reference it here

        Args:
            kind: Capture.POKE or Capture.GEEK
            expr: Captured expression source (helper body)
            state: Scan state carrying the anchor (spot)
            output: Output accumulator
        """
        name = self.name_next()
        output.outline_insert(state.spot, Outline(kind=kind, name=name, body=expr))
        output.node_append(Inline(kind=kind, name=name))
        LOG(f"Injected {name} ({kind.name.lower()}) at anchor {state.spot}", level=3)

    # Attribute shorthand .....................................................

    def attribute_expand(self, scanner: Scanner, state: ScanState, output: Output) -> None:
        """
        Expand @ notation in markup

        @name renders the attribute, -@name pops it (the '-' already written
        is taken back), @@ renders all pending attributes.
        """
        if state.capture is not None:
            if scanner.text_isBehind("#{"):
                LOG(
                    f"Warning: attribute shorthand inside #{{}} is not implemented "
                    f"(line {scanner.line_number}, column {scanner.index + 1})",
                    level=1,
                )
            return
        if scanner.text_isBehind("@"):
            # second half of @@
            return
        if scanner.text_isAhead("@"):
            output.node_append(AttributeCall(method="$all"))
            state.skip = 2
            return
        match = ATTRIBUTE_NAME.match(scanner.line_ahead())
        if not match:
            LOG(f"Warning: '@' without attribute name on line {scanner.line_number}", level=1)
            return
        name = match.group(0)
        popped = scanner.text_isBehind("-")
        if popped:
            output.text_trim()
        output.node_append(AttributeCall(method="$pop" if popped else "$html", name=name))
        state.skip = len(name) + 1


# Mode handlers ...............................................................

def script_compile(compiler: Compiler, c: str, scanner: Scanner, state: ScanState, output: Output) -> None:
    """Compile character as script"""
    if c == "<" and scanner.char_isFirst():
        state.markup_enter(output.anchor())
        output.node_append(Open())
    # '@' is reserved for the macro layer


def markup_compile(compiler: Compiler, c: str, scanner: Scanner, state: ScanState, output: Output) -> None:
    """Compile character as markup"""
    capturing = state.capture is not None
    if c == "{":
        if capturing:
            state.curl += 1
    elif c == "}":
        if capturing:
            state.curl -= 1
            if state.curl == 0:
                compiler.capture_close(state, output)
    elif c in SIGILS:
        if not capturing and scanner.text_isAhead("{"):
            compiler.capture_open(SIGILS[c], state, output)
    elif c == "+":
        if capturing:
            return
        if scanner.char_isFirst():
            state.skip = 1 if state.adds else 0
        elif scanner.char_isLast():
            state.cont = True
            state.skip = 1
    elif c == "@":
        compiler.attribute_expand(scanner, state, output)


def tag_compile(compiler: Compiler, c: str, scanner: Scanner, state: ScanState, output: Output) -> None:
    """Compile character inside an opening tag (nothing is emitted in this mode)"""
    if c == "$":
        if scanner.text_isAhead("{"):
            state.refs = True
            state.skip = 2
    elif c == ">":
        state.script_enter()
        state.skip = 1


HANDLERS: Dict[Mode, Callable[[Compiler, str, Scanner, ScanState, Output], None]] = {
    Mode.SCRIPT: script_compile,
    Mode.MARKUP: markup_compile,
    Mode.TAG: tag_compile,
}
