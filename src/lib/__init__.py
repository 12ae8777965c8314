"""
edbml library - scanner, mode dispatcher and function compiler
"""

from .compiler import Compiler
from .function import FunctionCompiler
from .instructions import InstructionRegistry
from .errors import EdbmlError, NestedTemplateError
from .log import LOG, state_connectToLogger

__all__ = [
    "Compiler",
    "FunctionCompiler",
    "InstructionRegistry",
    "EdbmlError",
    "NestedTemplateError",
    "LOG",
    "state_connectToLogger",
]
