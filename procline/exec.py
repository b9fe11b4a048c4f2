"""
Execution result - what a finished process left behind.
"""

from dataclasses import dataclass
from typing import Optional

__all__ = [
    'Output',
]


@dataclass(frozen=True)
class Output:
    """
    Result from a command execution.

    Attributes:
        status: Exit status of the process (negative if terminated by signal)
        stdout: Standard output as string
        stderr: Standard error as string
    """
    status: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.status == 0

    @property
    def signal(self) -> Optional[int]:
        """Signal number that terminated the process, or None."""
        return -self.status if self.status < 0 else None

    @property
    def exit_code(self) -> Optional[int]:
        """Exit code for a normal exit, or None if killed by a signal."""
        return self.status if self.status >= 0 else None
