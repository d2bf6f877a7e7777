"""Error types raised by the analysis pipeline.

Every error is fatal to the run that raised it: no partial results are
returned and the result cache is left as it was.
"""


class AnalysisError(RuntimeError):
    """Base class for failures that abort an analysis run."""


class GoSyntaxError(AnalysisError):
    """Raised when a Go source file cannot be parsed."""

    def __init__(self, filename: str, line: int, column: int, detail: str = "syntax error"):
        self.filename = filename
        self.line = line
        self.column = column
        self.detail = detail
        super().__init__(f"{filename}:{line}:{column}: {detail}")


class TraversalError(AnalysisError):
    """Raised when the file system cannot be walked or a file cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
