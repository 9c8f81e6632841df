"""Exception hierarchy for peergen.

All exceptions inherit from :class:`PeergenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`peergen.exit_codes`.
The top-level error handler in :func:`peergen.app.main` catches
``PeergenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Malformed targets and missing build output are *not* errors: they are
reported as diagnostics and processing continues.

Subclass hierarchy::

    PeergenError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ProjectModelError   (exit 7)
    +-- FileAccessError     (exit 8)
    +-- ConfigError         (exit 1)
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from peergen.exit_codes import (
    EXIT_FILE_ACCESS,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PROJECT_MODEL_ERROR,
)


class PeergenError(Exception):
    """Base exception for all peergen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`peergen.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(PeergenError):
    """Raised for invalid CLI arguments such as unknown option names."""

    exit_code = EXIT_INVALID_USAGE


class ProjectModelError(PeergenError):
    """Raised when the host project model cannot be loaded or fails validation."""

    exit_code = EXIT_PROJECT_MODEL_ERROR


class FileAccessError(PeergenError):
    """Raised when a filesystem operation fails and the run must abort.

    Carries the failing ``path`` and ``operation`` so the message printed at
    the invocation boundary is enough to diagnose the problem.

    Args:
        path: The file or directory the operation was applied to.
        operation: Short verb phrase, e.g. ``"read"`` or ``"create link"``.
        reason: The underlying error, usually an :class:`OSError`.
    """

    exit_code = EXIT_FILE_ACCESS

    def __init__(
        self,
        path: Union[str, Path],
        operation: str,
        reason: object = None,
    ):
        self.path = Path(path)
        self.operation = operation
        message = f"Cannot {operation} {self.path}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigError(PeergenError):
    """Raised for configuration problems (invalid JSON, unknown convention keys)."""

    exit_code = EXIT_GENERIC_FAILURE
