"""
Compiler diagnostics through Loguru.

Template problems never stop a compilation (only a nested template does),
so they are reported here instead. The character handlers run far below
FunctionCompiler.compile() and never see the CompileState; its verbosity
reaches them through a context variable bound once per compilation.

EDBML verbosity levels and the loguru severity each is emitted at:
    1  WARNING  template problems the compiler worked around: unknown
                pragma, pragma lacking attributes, '@' with no name,
                '@' inside #{...}, capture left open at end of template
    2  INFO     stage progress in FunctionCompiler
    3  DEBUG    helper injection trace, applied pragmas, compiled body dump
"""

from loguru import logger
from typing import Any, Dict, Optional
from contextvars import ContextVar
import sys

_compile_state: ContextVar[Optional[Any]] = ContextVar('compile_state', default=None)

SEVERITY: Dict[int, str] = {1: "WARNING", 2: "INFO", 3: "DEBUG"}

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <7}</level> │ "
    "<magenta>edbml</magenta> "
    "<cyan>{function}</cyan>:<cyan>{line}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """Bind the CompileState whose verbosity gates LOG() from here on"""
    _compile_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Report a compiler diagnostic when the bound state's verbosity reaches level.

    Nothing is logged before state_connectToLogger() has been called.

    Args:
        message: Diagnostic text
        level: EDBML verbosity level (1, 2 or 3), see module docstring
        **kwargs: Passed on to loguru

    Example:
        LOG("Warning: '@' without attribute name on line 4", level=1)
        LOG("Injected $edb2 (poke) at anchor 0", level=3)
    """
    state = _compile_state.get()
    if state is None or getattr(state, 'verbosity', 0) < level:
        return
    logger.log(SEVERITY.get(level, "DEBUG"), message, **kwargs)
