"""Storage volume enumeration for drive-letter filesystems.

Windows-like hosts expose each mounted volume as a separate root
(``C:\\``, ``D:\\``, ...). Single-rooted hosts have nothing to enumerate,
so volume_enumerator_for_host() returns None there instead of a stub.
"""

import logging
import os
import string
from pathlib import Path
from typing import Callable, Iterable, Optional

from gocross.discovery.host import HostFamily, detect_host_family

logger = logging.getLogger(__name__)

DRIVE_LETTERS = string.ascii_uppercase


class DriveLetterVolumeEnumerator:
    """Lists the roots of drive-letter volumes that currently exist."""

    def __init__(
        self,
        letters: Iterable[str] = DRIVE_LETTERS,
        root_exists: Callable[[str], bool] = os.path.isdir,
    ):
        """Initialize the enumerator.

        Args:
            letters: Candidate volume letters, in enumeration order
            root_exists: Predicate deciding whether a root like ``C:\\`` resolves
        """
        self.letters = tuple(letters)
        self._root_exists = root_exists

    def list_volume_roots(self) -> list[Path]:
        """Return the existing volume roots in letter order."""
        roots: list[Path] = []
        for letter in self.letters:
            root = f"{letter}:\\"
            try:
                if self._root_exists(root):
                    roots.append(Path(root))
            except OSError as e:
                # Unready drives (empty card readers, stale network maps) raise here
                logger.debug(f"Skipping volume {root}: {e}")
        return roots


def volume_enumerator_for_host(host_family: Optional[HostFamily] = None) -> Optional[DriveLetterVolumeEnumerator]:
    """Return a volume enumerator, or None on single-rooted hosts."""
    if host_family is None:
        host_family = detect_host_family()
    if host_family is HostFamily.WINDOWS:
        return DriveLetterVolumeEnumerator()
    return None
