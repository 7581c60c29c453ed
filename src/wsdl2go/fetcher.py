"""Reads WSDL/XSD resources from disk or downloads them over HTTP(S)."""

from typing import Optional, Tuple

import requests
from requests.auth import HTTPBasicAuth

from .config import DEFAULT_FETCH_TIMEOUT
from .exceptions import FetchError
from .location import Location
from .logger import LogLevel, create_logger


class ResourceFetcher:
    """Fetches raw bytes for a Location. Failures raise FetchError, no retries."""

    def __init__(
        self,
        ignore_tls: bool = False,
        auth: Optional[Tuple[str, str]] = None,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        session: Optional[requests.Session] = None,
        log_level: LogLevel = LogLevel.INFO,
    ):
        self.ignore_tls = ignore_tls
        self.auth = HTTPBasicAuth(*auth) if auth else None
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.logger = create_logger(level=log_level, component="fetcher")

    def close(self) -> None:
        """Release pooled HTTP connections of a session created here."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def fetch(self, location: Location) -> bytes:
        if location.is_url:
            return self._download(location)
        return self._read(location)

    def _read(self, location: Location) -> bytes:
        self.logger.info("Reading", file=location.path)
        try:
            with open(location.path, "rb") as f:
                return f.read()
        except OSError as e:
            raise FetchError(location, e.strerror or str(e)) from e

    def _download(self, location: Location) -> bytes:
        self.logger.info("Downloading", url=location.url, verifyTLS=not self.ignore_tls)
        try:
            response = self.session.get(
                location.url,
                auth=self.auth,
                verify=not self.ignore_tls,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise FetchError(location, str(e)) from e

        if response.status_code != 200:
            raise FetchError(location, f"received response code {response.status_code}")

        return response.content
