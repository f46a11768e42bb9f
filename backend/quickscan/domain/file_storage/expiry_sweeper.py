"""
Expiry Sweeper

On-demand scan of the local upload directory that deletes files older
than a cutoff. Works directly on the filesystem; it does not know about
the file registry.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional, Union

from .entities import StorageType

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """
    Deletes local files whose modification time is strictly older than
    now - max_age_hours.

    Only meaningful when the active backend is the local filesystem; for
    any other backend every sweep is a no-op returning 0.
    """

    def __init__(
        self,
        storage_type: StorageType,
        upload_dir: Optional[Union[str, Path]],
        clock: Callable[[], float] = time.time,
    ):
        self.storage_type = storage_type
        self.upload_dir = Path(upload_dir) if upload_dir else None
        self._clock = clock

    def sweep(self, max_age_hours: float) -> int:
        """
        Delete expired files from the upload directory.

        Args:
            max_age_hours: Age threshold in hours

        Returns:
            Number of files deleted
        """
        if self.storage_type is not StorageType.TEMPORARY:
            return 0

        if self.upload_dir is None or not self.upload_dir.is_dir():
            logger.debug("Upload directory does not exist, nothing to sweep")
            return 0

        cutoff = self._clock() - max_age_hours * 3600
        deleted_count = 0

        for item in self.upload_dir.iterdir():
            try:
                if not item.is_file():
                    continue
                if item.stat().st_mtime < cutoff:
                    item.unlink()
                    deleted_count += 1
                    logger.debug(f"Removed expired upload: {item.name}")
            except OSError as e:
                logger.warning(f"Failed to remove expired upload {item}: {e}")

        logger.info(f"Expiry sweep removed {deleted_count} file(s) older than {max_age_hours}h")
        return deleted_count
