"""
Models package for edbml

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import CompileState, Header, pipeline
from .scan import Mode, Capture, ScanState
from .instructions import Instruction, InstructionSpec, InstructionCategory
from .result import Result

__all__ = [
    "CompileState",
    "Header",
    "pipeline",
    "Mode",
    "Capture",
    "ScanState",
    "Instruction",
    "InstructionSpec",
    "InstructionCategory",
    "Result",
]
