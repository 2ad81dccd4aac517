"""Lock file recording when the pump was powered on."""
import enum
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from pumpswitch.safety.errors import LockFileError

logger = logging.getLogger(__name__)


class LockStatus(enum.Enum):
    """Outcome of reading the lock file."""
    ABSENT = "absent"
    VALID = "valid"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class LockRecord:
    """Result of a lock file read."""
    status: LockStatus
    started_at: Optional[datetime] = None
    reason: Optional[str] = None


class LockStore:
    """Persist a single "pump running since T" marker as a Unix timestamp."""

    def __init__(self, path: str):
        """
        Initialize lock store.

        Args:
            path: Lock file path
        """
        self.path = path

    def read(self) -> LockRecord:
        """
        Read the lock file.

        Returns:
            LockRecord with ABSENT, VALID (with started_at) or CORRUPT (with reason)
        """
        try:
            with open(self.path, 'r') as f:
                content = f.read()
        except FileNotFoundError:
            return LockRecord(LockStatus.ABSENT)
        except OSError as e:
            return LockRecord(LockStatus.CORRUPT, reason=f"cannot read {self.path}: {e}")

        try:
            timestamp = int(content.strip())
            started_at = datetime.fromtimestamp(timestamp, timezone.utc)
        except (ValueError, OverflowError, OSError):
            return LockRecord(LockStatus.CORRUPT, reason=f"invalid timestamp in {self.path}: {content!r}")

        return LockRecord(LockStatus.VALID, started_at=started_at)

    def write(self, started_at: datetime):
        """
        Write the start time, replacing any previous record.

        Args:
            started_at: Aware power-on time (stored as Unix seconds)
        """
        try:
            with open(self.path, 'w') as f:
                f.write(f"{int(started_at.timestamp())}")
        except OSError as e:
            raise LockFileError(f"cannot write lock file {self.path}: {e}") from e

    def clear(self):
        """Remove the lock file; a missing file is not an error."""
        try:
            os.remove(self.path)
        except FileNotFoundError:
            logger.debug(f"Lock file {self.path} already absent")
        except OSError as e:
            raise LockFileError(f"cannot remove lock file {self.path}: {e}") from e
