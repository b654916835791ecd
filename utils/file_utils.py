from __future__ import annotations

import os
from pathlib import Path

__all__: list[str] = ["FileUtils"]


class FileUtils:
    """Path helpers for configuration, log and data files."""

    @staticmethod
    def resolve_path(path: str | Path, *, strict: bool = False) -> Path:
        """Convert a user-supplied path to an absolute path.

        Expands environment variables and ``~``; relative paths are resolved against the current
        working directory.

        Args:
            path (str | Path): The input path (e.g., "~/logs/$APP_ENV/pivotchat.log").
            strict (bool): Raise if the path does not exist. Defaults to False.

        Returns:
            Path: The absolute path.
        """
        expanded: str = os.path.expandvars(str(path))
        user_expanded: Path = Path(expanded).expanduser()

        if user_expanded.is_absolute():
            return user_expanded.resolve(strict=strict)
        return (Path.cwd() / user_expanded).resolve(strict=strict)
