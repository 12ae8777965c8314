"""
Processing instruction models

Defines extracted pragmas (<?param name="x"?>) and the specification
used by InstructionRegistry to apply their side effects.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, Dict, List


class InstructionCategory(Enum):
    """
    Categories of processing instructions

    Used for organization and documentation of the registry.
    """
    SIGNATURE = "signature"    # <?param?>


@dataclass
class Instruction:
    """
    A processing instruction extracted from template source

    Attributes:
        tag: Instruction name (e.g., "param")
        attributes: Attribute name to value mapping

    Example:
        For source '<?param name="user"?>':
        Instruction(tag="param", attributes={"name": "user"})
    """
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class InstructionSpec:
    """
    Specification for a processing instruction

    Attributes:
        name: Instruction tag this spec handles
        category: Category for organization
        description: Human-readable description
        handler: Side effect function (instruction, state) -> None
        required: Attribute names the instruction must carry
        examples: Example usage strings
    """
    name: str
    category: InstructionCategory
    description: str
    handler: Callable
    required: List[str] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)

    def missing(self, instruction: Instruction) -> List[str]:
        """Return required attribute names absent from an instruction"""
        return [name for name in self.required if name not in instruction.attributes]
