"""
Run options - how the child process is set up.
"""

import codecs
import dataclasses
import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from .constants import DEFAULT_ENCODING, DEFAULT_ERRORS

__all__ = ['RunOptions']


@dataclass(frozen=True)
class RunOptions:
    """
    Configuration applied to a child process before it is spawned.

    Attributes:
        working_dir: Child's current directory (default: inherit)
        env: Variables added to / overriding the child's environment
        clear_env: Start the child from an empty environment before ``env``
        encoding: Encoding used to decode stdout and stderr
        errors: Codec error handler ("strict" reports undecodable output,
            "replace" substitutes it)

    Usage:
        opts = RunOptions(working_dir="/tmp", env={"LANG": "C"})
        lossy = opts.replace(errors="replace")
    """
    working_dir: Optional[Union[str, os.PathLike]] = None
    env: Optional[Mapping[str, str]] = None
    clear_env: bool = False
    encoding: str = DEFAULT_ENCODING
    errors: str = DEFAULT_ERRORS

    def __post_init__(self):
        try:
            codecs.lookup(self.encoding)
            codecs.lookup_error(self.errors)
        except LookupError as e:
            raise ValueError(str(e)) from e
        if self.working_dir is not None and "\0" in os.fsdecode(self.working_dir):
            raise ValueError(f"working directory contains NUL: {self.working_dir!r}")
        if self.env is not None:
            for name, value in self.env.items():
                if not isinstance(name, str) or not isinstance(value, str):
                    raise ValueError(
                        f"environment entries must be strings: {name!r}={value!r}"
                    )
                if not name or "=" in name or "\0" in name:
                    raise ValueError(f"invalid environment variable name: {name!r}")
                if "\0" in value:
                    raise ValueError(f"environment value for {name!r} contains NUL")
            # Frozen: bypass __setattr__ to store a private read-only copy
            object.__setattr__(self, "env", MappingProxyType(dict(self.env)))

    def replace(self, **changes) -> "RunOptions":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def child_env(self) -> Optional[Dict[str, str]]:
        """
        Build the environment handed to the child.

        Returns:
            None when the parent environment is inherited unchanged,
            otherwise the complete environment mapping.
        """
        if not self.clear_env and not self.env:
            return None
        base = {} if self.clear_env else dict(os.environ)
        if self.env:
            base.update(self.env)
        return base
