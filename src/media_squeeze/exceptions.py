"""Custom exceptions for media_squeeze chains.

Using typed exceptions keeps error messages actionable and lets callers (and
tests) assert on a specific failure cause instead of parsing strings.

Exception Hierarchy:
    MediaSqueezeError (base)
    ├── ValidationError - Operation parameter out of range (build time)
    ├── FormatError - Input buffer is an encoded container, not raw PCM
    ├── ExternalProcessError - ffmpeg could not be spawned or exited non-zero
    └── UnknownOperationError - Executor received an operation it cannot dispatch
"""

from typing import Optional


class MediaSqueezeError(Exception):
    """Base exception for all media_squeeze errors.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
    """

    def __init__(self, message: str, suggestion: Optional[str] = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        parts = [f"[media_squeeze] {self.message}"]
        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")
        return " ".join(parts)


class ValidationError(MediaSqueezeError, ValueError):
    """Raised when an operation parameter is rejected while building a chain.

    The offending append never extends the chain; the chain the method was
    called on stays usable.

    Example:
        >>> raise ValidationError(
        ...     message="Speed rate must be greater than 0 and at most 4.0, got 9",
        ...     parameter="rate",
        ... )
    """

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.parameter = parameter
        super().__init__(message=message, suggestion=suggestion)


class FormatError(MediaSqueezeError, ValueError):
    """Raised when the input buffer carries a known container signature.

    Attributes:
        container: Detected container kind ("wav", "mp4", "mp3") or None when the
            input was not bytes-like at all
    """

    def __init__(
        self,
        message: str,
        container: Optional[str] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.container = container
        super().__init__(message=message, suggestion=suggestion)


class ExternalProcessError(MediaSqueezeError, RuntimeError):
    """Raised when an external process fails to start or exits with an error.

    Attributes:
        command: Executable that was invoked
        returncode: Process exit code, None if the process never started
        stderr: Diagnostic text captured from the process's error channel
    """

    def __init__(
        self,
        message: str,
        command: str = "ffmpeg",
        returncode: Optional[int] = None,
        stderr: str = "",
        suggestion: Optional[str] = None,
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        if stderr and stderr not in message:
            message = f"{message}: {stderr}"
        super().__init__(message=message, suggestion=suggestion)


class UnknownOperationError(MediaSqueezeError, RuntimeError):
    """Raised when a chain executor has no handler for an operation kind.

    Build-time validation only ever queues known operations, so reaching this
    indicates a programming error.
    """

    def __init__(self, kind: object, chain: str = "chain") -> None:
        self.kind = kind
        super().__init__(message=f"Unknown operation for {chain}: {kind!r}")
