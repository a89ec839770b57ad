import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Generator

logger = logging.getLogger(__name__)

class DiscoveryError(Exception):
    """Raised when a user-specified root directory cannot be traversed."""

    def __init__(self, root: Path, reason: str):
        super().__init__(f"Failed to collect files from {root}: {reason}")
        self.root = root
        self.reason = reason

@dataclass
class DiscoveryResult:
    targets: List[Path] = field(default_factory=list)
    missing_paths: List[Path] = field(default_factory=list)
    failed_roots: List[Path] = field(default_factory=list)

class FileScanner:
    """Scans for audio files by extension, optionally recursing into subdirectories."""

    def __init__(self, extensions: List[str]):
        self.extensions = [(ext if ext.startswith(".") else f".{ext}").lower() for ext in extensions]

    def matches(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.extensions

    def scan(self, root_dir: Path, recursive: bool = True) -> Generator[Path, None, None]:
        """Scans the directory and yields audio file paths.

        Raises DiscoveryError if root_dir itself cannot be listed. Unreadable
        entries below the root are skipped.
        """
        # List the root up front so a bad root fails before anything is yielded
        try:
            with os.scandir(root_dir) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise DiscoveryError(root_dir, str(e)) from e

        if not recursive:
            for entry in entries:
                try:
                    if not entry.is_file():
                        continue
                except OSError:
                    continue
                file_path = Path(entry.path)
                if self.matches(file_path):
                    yield file_path
            return

        def on_walk_error(err: OSError):
            logger.debug(f"Skipping unreadable entry: {err}")

        for root, dirs, files in os.walk(str(root_dir), onerror=on_walk_error, followlinks=False):
            root_path = Path(root)

            # Ensure deterministic traversal: sort directories and files
            dirs.sort()
            files.sort()

            for file_name in files:
                file_path = root_path / file_name
                if self.matches(file_path):
                    yield file_path

    def collect(self, paths: Iterable[Path], recursive: bool = False) -> DiscoveryResult:
        """Expands user paths into probe targets.

        Files are taken as given (any extension), directories are scanned,
        missing paths are reported and skipped. A root that fails to scan
        contributes nothing but does not stop the other roots.
        """
        result = DiscoveryResult()
        for path in paths:
            path = Path(path)
            if path.is_file():
                result.targets.append(path)
            elif path.is_dir():
                try:
                    result.targets.extend(list(self.scan(path, recursive=recursive)))
                except DiscoveryError as e:
                    logger.error(str(e))
                    result.failed_roots.append(path)
            else:
                logger.warning(f"Path does not exist: {path}")
                result.missing_paths.append(path)
        return result
