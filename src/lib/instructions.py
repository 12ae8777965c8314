"""
Processing instruction registry

Finds <?tag attr="value"?> pragmas in template source, applies their side
effects to the CompileState, and removes them from the source.

Uses InstructionSpec for metadata and validation.
"""

import re
from typing import Dict, List, Optional

from ..models.instructions import Instruction, InstructionCategory, InstructionSpec
from ..models.state import CompileState
from .log import LOG


PI_PATTERN = re.compile(r"<\?\s*([A-Za-z_][\w.\-]*)(.*?)\?>", re.DOTALL)
ATTRIBUTE_PATTERN = re.compile(r"([A-Za-z_][\w.:\-]*)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")


class InstructionRegistry:
    """
    Registry of processing instruction specifications and handlers

    Maps instruction tags to InstructionSpec objects containing metadata
    and side effect handlers.
    """

    def __init__(self) -> None:
        """Initialize the registry and register all built-in instructions"""
        self.specs: Dict[str, InstructionSpec] = {}
        self.signatureInstructions_register()

    def register(self, spec: InstructionSpec) -> None:
        """Register an instruction specification"""
        self.specs[spec.name] = spec

    def get(self, name: str) -> Optional[InstructionSpec]:
        """Get instruction specification by tag, None if unknown"""
        return self.specs.get(name)

    def signatureInstructions_register(self) -> None:
        """Register instructions that shape the compiled function signature"""

        def param_handler(instruction: Instruction, state: CompileState) -> None:
            """Handle <?param name="x"?> - declare a formal parameter"""
            state.params.append(instruction.attributes["name"])

        self.register(InstructionSpec(
            name="param",
            category=InstructionCategory.SIGNATURE,
            description="Declare a formal parameter of the compiled function",
            handler=param_handler,
            required=["name"],
            examples=['<?param name="user"?>'],
        ))

    def instructions_find(self, source: str) -> List[Instruction]:
        """
        Parse all processing instructions in source order

        Args:
            source: Template text

        Returns:
            List of Instruction objects (empty if the source has none)

        Example:
            >>> InstructionRegistry().instructions_find('<?param name="a"?>x')
            [Instruction(tag='param', attributes={'name': 'a'})]
        """
        instructions = []
        for match in PI_PATTERN.finditer(source):
            attributes = {}
            for attribute in ATTRIBUTE_PATTERN.finditer(match.group(2)):
                value = attribute.group(2)
                if value is None:
                    value = attribute.group(3)
                attributes[attribute.group(1)] = value
            instructions.append(Instruction(tag=match.group(1), attributes=attributes))
        return instructions

    def instructions_clean(self, source: str) -> str:
        """Remove all processing instructions from source"""
        return PI_PATTERN.sub("", source)

    def instruction_apply(self, instruction: Instruction, state: CompileState) -> None:
        """
        Apply an instruction's side effect to the compile state

        Unknown instructions and instructions missing required attributes
        are logged and otherwise ignored.

        Args:
            instruction: Extracted instruction
            state: Compile state to mutate
        """
        spec = self.get(instruction.tag)
        if spec is None:
            LOG(f"Warning: Unknown instruction '<?{instruction.tag}?>' ignored", level=1)
            return
        missing = spec.missing(instruction)
        if missing:
            LOG(
                f"Warning: Instruction '<?{instruction.tag}?>' lacks attribute(s) {', '.join(missing)}",
                level=1,
            )
            return
        spec.handler(instruction, state)
        LOG(f"Applied instruction <?{instruction.tag}?> {instruction.attributes}", level=3)
