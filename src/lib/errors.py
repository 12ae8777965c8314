"""
Exception classes for edbml.

Template rejections derive from SyntaxError so callers can handle them
the same way as any other parse failure.
"""


class EdbmlError(SyntaxError):
    """Base exception for all edbml compile errors."""

    pass


class NestedTemplateError(EdbmlError):
    """
    Template contains another EDBML template.

    Raised by the validation stage; the compilation is aborted and no
    Result is produced.
    """

    def __init__(self, message: str = "Nested EDBML dysfunction", lineno: int | None = None) -> None:
        self.message = message
        location = f"line {lineno}: " if lineno is not None else ""
        super().__init__(f"{location}{message}")
        self.lineno = lineno
