from typing import List, Optional, Sequence


class DiagramError(Exception):
    pass


class ConfigurationError(DiagramError):
    pass


class LayoutOverflowError(DiagramError):
    pass


class GraphResolutionError(DiagramError):
    def __init__(self, errors: Sequence[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors))


class ParseError(DiagramError):
    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class PathInvariantError(DiagramError):
    pass
