import sys
from typing import List, Optional, TextIO, Tuple


class MiniError(Exception):
    """Base class for exceptions raised by the minilang toolchain."""


class ParseError(MiniError):
    """Raised by the parser at the first syntax error."""
    def __init__(self, line: int, message: str):
        super().__init__(f"{line}:{message}")
        self.line = line
        self.message = message


class ErrorReporter:
    """Writes diagnostics as ``[filename:]line:message`` lines.

    Every lexical, syntax, semantic and runtime diagnostic goes through a
    reporter. The filename prefix is only written when the program was read
    from a file. Reported diagnostics are also kept in `messages` so that
    callers can inspect them after a run.
    """
    def __init__(self, filename: Optional[str] = None, stream: Optional[TextIO] = None):
        self.filename = filename
        self.stream = stream
        self.messages: List[Tuple[int, str]] = []

    @property
    def count(self) -> int:
        return len(self.messages)

    def format(self, line: int, message: str) -> str:
        prefix = f"{self.filename}:" if self.filename else ''
        return f"{prefix}{line}:{message}"

    def error(self, line: int, message: str):
        self.messages.append((line, message))
        # resolve stdout lazily so pytest's capsys sees the output
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(self.format(line, message) + '\n')
