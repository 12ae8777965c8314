"""
edbml - EDBML template compiler

Compiles the hybrid markup+script EDBML template language into the body
of a JavaScript function, compiled once and invoked repeatedly.
"""

__version__ = "1.0.0"

from .lib import FunctionCompiler, Compiler, InstructionRegistry, NestedTemplateError, LOG, state_connectToLogger
from .models import Result, Instruction

__all__ = [
    "FunctionCompiler",
    "Compiler",
    "InstructionRegistry",
    "NestedTemplateError",
    "Result",
    "Instruction",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
