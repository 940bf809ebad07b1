# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Logging interface for versiongate.

Library modules report what they decided (and why) through this interface
instead of printing directly, so the decision engine stays usable from an
updater daemon, a CLI, or a test without changes.

Output levels:
- Step: Always printed (progress of a multi-step CLI command)
- Verbose: Only printed when verbose mode is enabled
- Debug: Only printed when debug mode is enabled (implies verbose)

Example:
    Configure the global logger once at startup:
        ```python
        from versiongate.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=True))
        ```

    Use in library code:
        ```python
        from versiongate.logging import get_global_logger

        logger = get_global_logger()
        logger.verbose("DECISION", "Version is below minimum allowed")
        logger.debug("ROLLOUT", "digest=... cursor=...")
        ```

Note:
    The default global logger is silent, so evaluating a requirement
    document prints nothing unless a caller opts in.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class Logger(Protocol):
    """Protocol for logger implementations."""

    def step(self, step: int, total: int, message: str) -> None:
        """Print a step indicator.

        Args:
            step: Current step number (1-based).
            total: Total number of steps.
            message: Step description.
        """
        ...

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message.

        Args:
            prefix: Message prefix (e.g., "DECISION", "FETCH").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message.

        Args:
            prefix: Message prefix (e.g., "ROLLOUT", "DOCUMENT").
            message: Log message.
        """
        ...


class DefaultLogger:
    """Logger that writes "[PREFIX] message" lines, honoring verbose and debug flags.

    Output goes to stdout unless another text stream is given, e.g.
    sys.stderr for an updater whose stdout is reserved for results.
    """

    def __init__(
        self,
        verbose: bool = False,
        debug: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self._verbose = verbose or debug
        self._debug = debug
        self._stream = stream

    def _write(self, line: str) -> None:
        print(line, file=self._stream if self._stream is not None else sys.stdout)

    def step(self, step: int, total: int, message: str) -> None:
        self._write(f"[{step}/{total}] {message}")

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            self._write(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            self._write(f"[{prefix}] {message}")


class SilentLogger:
    """Logger that suppresses all output."""

    def step(self, step: int, total: int, message: str) -> None:
        pass

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(
    verbose: bool = False, debug: bool = False, stream: TextIO | None = None
) -> Logger:
    """Create a logger with the given verbosity.

    Args:
        verbose: If True, print verbose messages.
        debug: If True, print debug messages (implies verbose).
        stream: Text stream to write to (default: stdout).

    Returns:
        A new DefaultLogger.
    """
    return DefaultLogger(verbose=verbose, debug=debug, stream=stream)


def get_global_logger() -> Logger:
    """Return the logger used by library functions (silent by default)."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Replace the logger used by library functions.

    Args:
        logger: Logger instance to install globally.

    Note:
        The CLI calls this once per command. Long-running updaters should
        call it once at startup, next to building their BuildInfo.
    """
    global _global_logger
    _global_logger = logger
