"""
Shared HTTP transport for all BMC connections.

Wraps `requests` with:
- Two cached sessions (authenticated / unauthenticated)
- Retry with exponential backoff and jitter
- Classification of transport failures into bmcbridge errors
"""

import json
import logging
import random
import re
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

import requests
from requests.auth import HTTPBasicAuth
from urllib3 import disable_warnings
from urllib3.exceptions import InsecureRequestWarning

from .config import ConnectionDefaults
from .errors import ConnectionError, TimeoutError

disable_warnings(InsecureRequestWarning)
logger = logging.getLogger(__name__)

PASSWORD_PATTERN = re.compile(r'("password"\s*:\s*")([^"]*)(")', re.IGNORECASE)


def redact(text: Optional[str]) -> Optional[str]:
    """Mask password values in a JSON body before it is logged"""
    if not text:
        return text
    return PASSWORD_PATTERN.sub(r'\1[FILTERED]\3', text)


def backoff_delay(attempt: int, base_delay: float) -> float:
    """
    Delay before retry number `attempt` (1-based).

    base_delay * floor(attempt ** 1.5), plus up to 50% random jitter.
    """
    interval = base_delay * int(attempt ** 1.5)
    return interval + random.uniform(0, 0.5 * interval)


@dataclass(frozen=True)
class ConnectionDescriptor:
    """
    Immutable connection settings for one BMC.

    Attributes:
        host: BMC hostname or IP
        port: TCP port
        use_ssl: Use https when True
        verify_ssl: Verify the BMC certificate
        username: Basic auth username
        password: Basic auth password
        host_header: Optional Host header override
        retry_count: Retries after the first attempt
        retry_delay: Base delay in seconds for backoff
    """
    host: str
    port: int = ConnectionDefaults.PORT
    use_ssl: bool = ConnectionDefaults.USE_SSL
    verify_ssl: bool = ConnectionDefaults.VERIFY_SSL
    username: Optional[str] = None
    password: Optional[str] = None
    host_header: Optional[str] = None
    retry_count: int = ConnectionDefaults.RETRY_COUNT
    retry_delay: float = ConnectionDefaults.RETRY_DELAY

    @property
    def base_url(self) -> str:
        protocol = "https" if self.use_ssl else "http"
        return f"{protocol}://{self.host}:{self.port}"

    def __repr__(self) -> str:
        return (f"ConnectionDescriptor(host={self.host!r}, port={self.port}, "
                f"use_ssl={self.use_ssl}, username={self.username!r})")


class HttpClient:
    """
    Executes HTTP requests against a BMC base URL.

    Not thread-safe: use one HttpClient per concurrent session.
    """

    WITH_AUTH = "with_auth"
    WITHOUT_AUTH = "without_auth"

    def __init__(self, descriptor: ConnectionDescriptor):
        self.descriptor = descriptor
        self._sessions: Dict[str, requests.Session] = {}

    @property
    def host(self) -> str:
        return self.descriptor.host

    @property
    def port(self) -> int:
        return self.descriptor.port

    @property
    def base_url(self) -> str:
        return self.descriptor.base_url

    def get(self, path: str, headers: Optional[Dict[str, str]] = None, **options) -> requests.Response:
        return self.request("GET", path, headers=headers, **options)

    def post(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None, **options) -> requests.Response:
        return self.request("POST", path, body=body, headers=headers, **options)

    def put(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None, **options) -> requests.Response:
        return self.request("PUT", path, body=body, headers=headers, **options)

    def patch(self, path: str, body: Any = None, headers: Optional[Dict[str, str]] = None, **options) -> requests.Response:
        return self.request("PATCH", path, body=body, headers=headers, **options)

    def delete(self, path: str, headers: Optional[Dict[str, str]] = None, **options) -> requests.Response:
        return self.request("DELETE", path, headers=headers, **options)

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        auth: bool = True,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """
        Execute a request with retry and failure classification.

        Args:
            method: HTTP method
            path: Path relative to the BMC base URL (e.g. /redfish/v1)
            body: dict/list (sent as JSON) or raw str/bytes
            headers: Extra request headers
            auth: Send basic auth credentials
            timeout: Per-request timeout override in seconds

        Returns:
            The final response. A retryable status that persists through every
            attempt is returned rather than raised.

        Raises:
            ConnectionError: Connection refused, unreachable host or TLS failure
            TimeoutError: Deadline exceeded on every attempt
        """
        method = method.upper()
        url = f"{self.base_url}{path}"
        data = self._encode_body(body)
        request_timeout = self._timeouts(timeout)
        session = self._session(auth)

        retryable = method in ConnectionDefaults.RETRY_METHODS
        max_attempts = self.descriptor.retry_count + 1 if retryable else 1

        attempt = 0
        while True:
            attempt += 1
            logger.debug(f"{method} {url} (attempt {attempt}/{max_attempts})")
            if data and logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Request body: {redact(data if isinstance(data, str) else repr(data))}")

            try:
                response = session.request(method, url, data=data, headers=headers, timeout=request_timeout)
            except requests.exceptions.SSLError as e:
                raise ConnectionError(self._ssl_failure_message(e)) from e
            except requests.exceptions.Timeout as e:
                if attempt < max_attempts:
                    self._wait_before_retry(attempt, max_attempts, f"timeout: {e}")
                    continue
                raise TimeoutError(
                    f"Request to {self.host} timed out after {attempt} attempt(s): {e}",
                    attempts=attempt,
                ) from e
            except requests.exceptions.ConnectionError as e:
                if attempt < max_attempts:
                    self._wait_before_retry(attempt, max_attempts, f"connection failed: {e}")
                    continue
                raise ConnectionError(
                    f"Failed to connect to {self.host}:{self.port} after {attempt} attempt(s): {e}",
                    attempts=attempt,
                ) from e

            if response.status_code in ConnectionDefaults.RETRY_STATUSES and attempt < max_attempts:
                self._wait_before_retry(attempt, max_attempts, f"HTTP {response.status_code}")
                continue

            logger.debug(f"{method} {url} -> HTTP {response.status_code}")
            return response

    def probe_plaintext(self) -> bool:
        """
        Check whether the port answers plain HTTP.

        Diagnostic only: used to explain a TLS failure, never to retry the
        original request without TLS.
        """
        url = f"http://{self.host}:{self.port}/"
        try:
            requests.get(url, timeout=ConnectionDefaults.PROBE_TIMEOUT, allow_redirects=False)
            return True
        except requests.exceptions.RequestException:
            return False

    def reset(self):
        """Close and drop cached sessions; they are rebuilt on next use"""
        for session in self._sessions.values():
            session.close()
        self._sessions = {}

    @staticmethod
    def json(response: requests.Response) -> Any:
        """Decode a response body as JSON, raising ValueError on bad payloads"""
        if not response.text:
            raise ValueError(f"Empty response body (HTTP {response.status_code})")
        return response.json()

    def _session(self, auth: bool) -> requests.Session:
        cache_key = self.WITH_AUTH if auth else self.WITHOUT_AUTH
        session = self._sessions.get(cache_key)
        if session is None:
            session = requests.Session()
            session.verify = self.descriptor.verify_ssl
            session.headers.update({
                "Accept": "application/json",
                "Content-Type": "application/json",
                "Connection": "keep-alive",
            })
            if self.descriptor.host_header:
                session.headers["Host"] = self.descriptor.host_header
            if auth and self.descriptor.username and self.descriptor.password:
                session.auth = HTTPBasicAuth(self.descriptor.username, self.descriptor.password)
            self._sessions[cache_key] = session
        return session

    @staticmethod
    def _timeouts(timeout: Optional[float]) -> Tuple[float, float]:
        """Return (connect, read) timeouts for requests"""
        if timeout:
            return min(timeout / 2, 5), timeout
        return ConnectionDefaults.OPEN_TIMEOUT, ConnectionDefaults.REQUEST_TIMEOUT

    @staticmethod
    def _encode_body(body: Any) -> Union[str, bytes, None]:
        if body is None:
            return None
        if isinstance(body, (dict, list)):
            return json.dumps(body)
        return body

    def _wait_before_retry(self, attempt: int, max_attempts: int, reason: str):
        delay = backoff_delay(attempt, self.descriptor.retry_delay)
        logger.warning(f"Retry {attempt}/{max_attempts - 1} for {self.host} ({reason}), waiting {delay:.2f}s")
        time.sleep(delay)

    def _ssl_failure_message(self, error: Exception) -> str:
        message = f"SSL error connecting to {self.host}:{self.port}: {error}"
        if self.descriptor.use_ssl and self.probe_plaintext():
            message += " (port answers plain HTTP; try use_ssl=False)"
        return message
