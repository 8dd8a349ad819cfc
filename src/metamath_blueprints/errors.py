from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    IO = "I/O Error"
    DECODE = "TOML Decoding Error"
    VALIDATION = "Error"
    TEMPLATE = "Template Error"
    LAYOUT = "Layout Error"
    WATCH = "Watch Error"


class BlueprintError(Exception):
    """The single failure type raised by the build and watch pipeline.

    `kind` tags the failure class; `message` is meant for humans only.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"

    @classmethod
    def io(cls, path: object, exc: OSError) -> BlueprintError:
        reason = exc.strerror or str(exc)
        return cls(ErrorKind.IO, f"{reason}: {path}")

    @classmethod
    def invalid(cls, message: str) -> BlueprintError:
        return cls(ErrorKind.VALIDATION, message)
