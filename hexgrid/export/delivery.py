"""
Delivery collaborators for exported files.

The exporter produces bytes; a delivery decides where they end up. Every
delivery exposes ``deliver(payload, filename, content_type)`` and raises
ExportIOError when the payload cannot be stored or sent. Nothing here is
retried by the core; HttpUploadDelivery retries at the HTTP session level.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..common import config, get_logger, TimedLogger, ExportIOError

logger = get_logger("export.delivery")


class Delivery(Protocol):
    def deliver(self, payload: bytes, filename: str, content_type: str) -> None:
        ...


@dataclass
class DeliveredFile:
    """A payload captured by MemoryDelivery."""

    filename: str
    content_type: str
    payload: bytes


class FileSystemDelivery:
    """Writes exports into a directory on local disk."""

    def __init__(self, output_dir: Optional[str] = None):
        self.output_dir = Path(output_dir or config.export.output_dir)
        self.logger = logger
        self.last_path: Optional[Path] = None

    def deliver(self, payload: bytes, filename: str, content_type: str) -> None:
        output_path = self.output_dir / filename

        with TimedLogger(self.logger, f"write_export: {output_path}"):
            try:
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_bytes(payload)
            except OSError as e:
                raise ExportIOError(filename, str(e)) from e

        self.last_path = output_path
        self.logger.info(
            f"Export saved to {output_path}",
            extra={"bytes": len(payload), "content_type": content_type},
        )


class MemoryDelivery:
    """Keeps delivered payloads in memory."""

    def __init__(self):
        self.deliveries: List[DeliveredFile] = []

    @property
    def last(self) -> Optional[DeliveredFile]:
        return self.deliveries[-1] if self.deliveries else None

    def deliver(self, payload: bytes, filename: str, content_type: str) -> None:
        self.deliveries.append(DeliveredFile(filename, content_type, payload))


class HttpUploadDelivery:
    """Uploads exports to an HTTP endpoint as multipart form data."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[int] = None,
        max_retries: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize upload delivery.

        Args:
            url: Endpoint receiving the file (default: config)
            timeout: Request timeout in seconds
            max_retries: Maximum retry attempts for 429/5xx responses
            session: Pre-built requests session
        """
        self.url = url or config.export.upload_url
        self.timeout = timeout or config.export.timeout_seconds
        self.max_retries = (
            max_retries if max_retries is not None else config.export.max_retries
        )
        self.logger = logger

        if not self.url or not self.url.startswith(("http://", "https://")):
            raise ValueError(f"Invalid upload URL: {self.url}")

        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """Create requests session with retry strategy."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
            backoff_factor=config.export.backoff_factor,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def deliver(self, payload: bytes, filename: str, content_type: str) -> None:
        with TimedLogger(self.logger, f"upload_export: {filename}", url=self.url):
            try:
                response = self.session.post(
                    self.url,
                    files={"file": (filename, payload, content_type)},
                    timeout=self.timeout,
                )
                response.raise_for_status()
            except requests.RequestException as e:
                raise ExportIOError(filename, str(e)) from e

        self.logger.info(
            f"Export uploaded to {self.url}",
            extra={"status_code": response.status_code, "bytes": len(payload)},
        )
