"""Result and failure types shared by the compiler invokers and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


class CompileFailed(Exception):
    """Raised by a compiler invoker when compilation reports errors."""

    def __init__(self, arguments: Sequence[str], message: str) -> None:
        super().__init__(message)
        self.arguments = tuple(arguments)
        self.message = message

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class CompileResult:
    """Outcome of one orchestrated compilation: success, or failure with a diagnostic."""

    message: str | None = None

    @classmethod
    def success(cls) -> "CompileResult":
        return cls()

    @classmethod
    def failure(cls, message: str) -> "CompileResult":
        return cls(message=message or "Compilation failed.")

    @property
    def succeeded(self) -> bool:
        return self.message is None


@dataclass(slots=True)
class ProcessResult:
    arguments: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def diagnostics(self) -> str:
        return "\n".join(text.rstrip() for text in (self.stdout, self.stderr) if text.strip())
