# topmark:header:start
#
#   project      : MediaConf
#   file         : exit_codes.py
#   file_relpath : src/mediaconf/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the MediaConf CLI.

MediaConf follows the BSD `sysexits` convention so other tooling can interpret
failures consistently.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the MediaConf CLI.

    Attributes:
        SUCCESS: Successful execution.
        FAILURE: Generic failure.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: I/O error reading a file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Invalid configuration document, repository or service manifest.
            Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
