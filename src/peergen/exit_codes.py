"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~peergen.exceptions.PeergenError` subclass.
Integration builds can inspect the exit code to determine the failure
class without parsing stderr.

Example::

    $ peergen init --project missing.json
    $ echo $?
    7   # EXIT_PROJECT_MODEL_ERROR -- the project model could not be read
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or unknown options."""

EXIT_PROJECT_MODEL_ERROR = 7
"""The host project model could not be loaded or validated."""

EXIT_FILE_ACCESS = 8
"""A filesystem operation (read, write, link, remove) failed."""
