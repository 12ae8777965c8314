"""
Compile state model and pipeline helper

Defines CompileState dataclass for the functional pipeline pattern and
the pipeline() helper for composing source-to-source stages.
"""

from typing import Any, Callable, Dict, List, TypeVar
from dataclasses import dataclass, field

from .instructions import Instruction


CS = TypeVar("CS", bound="CompileState")


@dataclass
class Header:
    """
    Function header collected while compiling

    Attributes:
        declarations: Extra variable names declared next to 'out' and 'att'
                      (insertion ordered, each name once)
        functiondefs: Function definition strings emitted after the declarations
    """
    declarations: Dict[str, bool] = field(default_factory=dict)
    functiondefs: List[str] = field(default_factory=list)


@dataclass
class CompileState:
    """
    Central state container for the compilation pipeline (state bus pattern).

    This dataclass carries the running source text through the stages of
    FunctionCompiler, with each stage rewriting the source and/or adding
    fields as the compilation progresses.

    Pipeline stages and their state additions:
        - Initial: source, directives, verbosity
        - comments_strip: (source rewritten)
        - nesting_validate: (no additions, raises on nested templates)
        - instructions_extract: instructions, params (pragmas removed from source)
        - directives_apply: (source passed through)
        - header_define: (header prepended to source)
        - body_compile: (source replaced by the compiled function body)

    Attributes:
        source: Running template text, replaced by each stage
        directives: Mapping of script tag attributes (name -> value)
        verbosity: Logging verbosity level (0-3)
        params: Formal parameter names, in declaration order
        instructions: Extracted processing instructions, in source order
        head: Declarations and function definitions for the header
    """

    source: str = field(default="")
    directives: Dict[str, Any] = field(default_factory=dict)
    verbosity: int = field(default=1)

    params: List[str] = field(default_factory=list)
    instructions: List[Instruction] = field(default_factory=list)
    head: Header = field(default_factory=Header)

    def copy(self: CS) -> CS:
        """
        Creates a shallow copy of the CompileState instance.

        Returns:
            A new CompileState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: CompileState, *stages: Callable[[CompileState], CompileState]
) -> CompileState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (CompileState) -> CompileState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting CompileState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final CompileState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            comments_strip,
            nesting_validate,
            body_compile
        )

    This is equivalent to:
        body_compile(nesting_validate(comments_strip(initial_state)))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
