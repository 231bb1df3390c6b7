"""Synchronous HTTP connection to an Activeledger node.

A Connection is built once per node. Construction checks that the node is
reachable and, when encryption is requested, fetches and caches the node's
public encryption key. After that it only sends transactions.

Example:
    >>> from activeledger import Connection, Transaction
    >>>
    >>> with Connection("http://localhost:5260") as connection:
    ...     response = connection.send_transaction(Transaction(tx_json))
    >>>
    >>> # Encrypted transactions (node key fetched once, here)
    >>> connection = Connection("http://localhost:5260", encrypt=True)
"""

from __future__ import annotations

import json
from types import TracebackType
from typing import Optional
from urllib.parse import urlparse

import httpx

from activeledger.config import ConnectionConfig
from activeledger.connection.encryption import NodeKeyData, encrypt_payload
from activeledger.connection.transaction import Transaction
from activeledger.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TIMEOUT,
    ENCRYPT_HEADER,
    STATUS_PATH,
)
from activeledger.errors import (
    EncryptionCode,
    EncryptionError,
    HttpCode,
    HttpError,
    ResponseCode,
    ResponseError,
    UrlCode,
    UrlError,
)
from activeledger.observability import get_logger, is_debug_mode

logger = get_logger(__name__)

# Encryption algorithm nodes currently publish keys for
NODE_ENCRYPTION = "rsa"


def _validate_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
        raise UrlError(UrlCode.INVALID, details={"url": url})
    return url


class Connection:
    """Connection to a single Activeledger node.

    Immutable after construction. A connection that fails to construct is
    never returned; build a new one to retry.

    Attributes:
        url: Node URL transactions are POSTed to
        encrypt: Whether transactions are encrypted before sending
        node_key_data: Cached node encryption key (None unless encrypt)
    """

    def __init__(
        self,
        url: str,
        encrypt: bool = False,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Connect to the node at ``url``.

        Args:
            url: Base URL of the node (e.g. "http://localhost:5260")
            encrypt: Encrypt transactions with the node's public key
            timeout: Per-request timeout in seconds
            chunk_size: Plaintext bytes per RSA-OAEP block when encrypting
            transport: Optional custom transport (for testing), e.g. httpx.MockTransport

        Raises:
            UrlError: If the URL is not an http(s) URL with a host.
            EncryptionError: If encrypt is set and the node key cannot be fetched.
            ResponseError: If encrypt is set and the status endpoint does not return 2xx.
            HttpError: If the reachability probe fails.
        """
        self._url = _validate_url(url)
        self._encrypt = encrypt
        self._chunk_size = chunk_size
        self._client = httpx.Client(timeout=timeout, transport=transport)

        try:
            self._node_key_data = self._get_node_key_data() if encrypt else None
            self._test_connection()
        except Exception:
            self._client.close()
            raise

        logger.info("connection.ready", url=self._url, encrypt=encrypt)

    @classmethod
    def from_config(
        cls, config: ConnectionConfig, transport: httpx.BaseTransport | None = None
    ) -> Connection:
        return cls(
            config.url,
            config.encrypt,
            timeout=config.timeout_seconds,
            chunk_size=config.chunk_size,
            transport=transport,
        )

    @property
    def url(self) -> str:
        return self._url

    @property
    def encrypt(self) -> bool:
        return self._encrypt

    @property
    def node_key_data(self) -> Optional[NodeKeyData]:
        return self._node_key_data

    @property
    def status_url(self) -> str:
        return f"{self._url.rstrip('/')}{STATUS_PATH}"

    def send_transaction(self, tx: Transaction) -> str:
        """Send a transaction to the node and return the raw response body.

        Raises:
            EncryptionError: If encrypting and the key data is missing or unusable.
            HttpError: If the POST could not be completed.
            ResponseError: If the node did not return 2xx (NOT_SUCCESS) or the
                body could not be read (NO_BODY).
        """
        post_data = tx.data
        headers: dict[str, str] = {}

        if self._encrypt:
            if self._node_key_data is None:
                raise EncryptionError(EncryptionCode.KEY_DATA_MISSING)
            post_data = encrypt_payload(self._node_key_data, post_data, self._chunk_size)
            headers[ENCRYPT_HEADER] = "1"

        if is_debug_mode():
            logger.debug("transaction.sending", url=self._url, payload=post_data)

        try:
            content = post_data.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise HttpError(HttpCode.POST, details={"url": self._url}) from exc

        try:
            with self._client.stream(
                "POST", self._url, content=content, headers=headers
            ) as response:
                if not response.is_success:
                    logger.warning(
                        "transaction.rejected",
                        url=self._url,
                        status_code=response.status_code,
                    )
                    raise ResponseError(
                        ResponseCode.NOT_SUCCESS,
                        details={"status_code": response.status_code},
                    )
                try:
                    response.read()
                except httpx.HTTPError as exc:
                    raise ResponseError(ResponseCode.NO_BODY) from exc
                body = response.text
        except httpx.HTTPError as exc:
            logger.warning("transaction.post_failed", url=self._url, error=str(exc))
            raise HttpError(HttpCode.POST, details={"url": self._url}) from exc

        logger.info(
            "transaction.sent",
            url=self._url,
            encrypted=self._encrypt,
            status_code=response.status_code,
            bytes_sent=len(content),
        )
        return body

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _get_node_key_data(self) -> NodeKeyData:
        """Fetch the node's encryption PEM from its status endpoint."""
        try:
            with self._client.stream("GET", self.status_url) as response:
                if not response.is_success:
                    raise ResponseError(
                        ResponseCode.NOT_SUCCESS, details={"status_code": response.status_code}
                    )
                try:
                    body = response.read()
                except httpx.HTTPError as exc:
                    raise EncryptionError(EncryptionCode.KEY_DATA_RESPONSE) from exc
        except httpx.HTTPError as exc:
            raise EncryptionError(
                EncryptionCode.KEY_DATA_REQUEST, details={"url": self.status_url}
            ) from exc

        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise EncryptionError(EncryptionCode.KEY_DATA_PARSE) from exc

        pem = data.get("pem") if isinstance(data, dict) else None
        if not isinstance(pem, str):
            raise EncryptionError(EncryptionCode.KEY_DATA_PARSE)

        logger.debug("connection.node_key_fetched", url=self.status_url)
        return NodeKeyData(encryption=NODE_ENCRYPTION, pem=pem)

    def _test_connection(self) -> None:
        try:
            self._client.get(self.status_url)
        except httpx.HTTPError as exc:
            logger.warning("connection.unreachable", url=self.status_url, error=str(exc))
            raise HttpError(HttpCode.GET, details={"url": self.status_url}) from exc
