"""Passthrough copy for lucydocs.

Files and directories registered with ``SiteConfig.add_passthrough_copy`` are
copied into the output exactly as they are, without any processing.
"""

from __future__ import annotations

import shutil
from collections.abc import Iterable
from pathlib import Path


class PassthroughCopier:
    """Copies registered paths from the project into the output directory.

    Attributes:
        project_root: Root directory of the project.
        output_dir: Directory where copies are written.
    """

    def __init__(self, project_root: Path, output_dir: Path):
        self.project_root = project_root
        self.output_dir = output_dir

    def run(self, paths: Iterable[str]) -> list[Path]:
        """Copy each path, keeping its location relative to the project root.

        Missing paths are skipped.

        Args:
            paths: Project-relative file or directory paths.

        Returns:
            Destination paths that were written.
        """
        copied: list[Path] = []
        for rel in paths:
            source = self.project_root / rel
            dest = self.output_dir / rel
            if source.is_dir():
                shutil.copytree(source, dest, dirs_exist_ok=True)
            elif source.is_file():
                dest.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source, dest)
            else:
                continue
            copied.append(dest)
        return copied
