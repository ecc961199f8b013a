"""Fixed-interval polling of vendor-side file processing."""
from __future__ import annotations

import logging
import time
from typing import Callable

from esign_agents.contracts import FileStatusClass, FileStatusInfo, classify_file_status
from esign_agents.errors import FileProcessingFailed, FileProcessingTimeout
from esign_agents.esign_client import EsignClient

logger = logging.getLogger(__name__)


def wait_until_ready(
    client: EsignClient,
    file_id: str,
    max_attempts: int = 30,
    interval: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> FileStatusInfo:
    """Polls the file status until it can be used in a sign flow.

    Returns on upload-complete or convert-complete, raises
    FileProcessingFailed on a failed status and FileProcessingTimeout once
    ``max_attempts`` polls saw only transient statuses. No backoff, no jitter.
    """
    for attempt in range(1, max_attempts + 1):
        info = client.get_file_status(file_id)
        logger.info(
            "File status poll %d/%d: file_id=%s status=%s",
            attempt,
            max_attempts,
            file_id,
            info.fileStatus,
        )

        status_class = classify_file_status(info.fileStatus)
        if status_class is FileStatusClass.SUCCESS:
            return info
        if status_class is FileStatusClass.FAILURE:
            raise FileProcessingFailed(file_id, info.fileStatus)

        sleep(interval)

    raise FileProcessingTimeout(file_id, max_attempts)
