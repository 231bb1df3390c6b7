"""Shared pytest fixtures for Activeledger SDK tests.

Key generation is comparatively slow for RSA, so keys used read-only are
generated once per session. Node interactions go through httpx.MockTransport.
"""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional

import httpx
import pytest
import structlog
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

import activeledger.observability.logging as sdk_logging
from activeledger.connection import Connection
from activeledger.connection.encryption import NodeKeyData
from activeledger.constants import STATUS_PATH
from activeledger.key import EllipticCurve, RSA

NODE_URL = "http://localhost:5260"

# Response body as returned by a node for a successful onboard
NODE_RESPONSE = (
    '{"$umid":"abc123",'
    '"$summary":{"total":1,"vote":1,"commit":1},'
    '"$streams":{"new":[{"id":"x","name":"activeledger"}],"updated":[]}}'
)


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Undo root logger and structlog changes made by configure_logging or the CLI."""
    root = logging.getLogger()
    level = root.level
    monkeypatch.setattr(sdk_logging, "_logging_configured", False)
    monkeypatch.setattr(sdk_logging, "_handler", None)
    yield
    if sdk_logging._handler is not None:
        root.removeHandler(sdk_logging._handler)
    root.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture(scope="session")
def rsa_key() -> RSA:
    return RSA.generate("rsa-identity")


@pytest.fixture(scope="session")
def ec_key() -> EllipticCurve:
    return EllipticCurve.generate("ec-identity")


@pytest.fixture(params=["rsa", "ec"])
def any_key(request: pytest.FixtureRequest, rsa_key: RSA, ec_key: EllipticCurve) -> Any:
    """Each key variant in turn; tests using it must hold for both."""
    return rsa_key if request.param == "rsa" else ec_key


@pytest.fixture(params=[RSA.generate, EllipticCurve.generate], ids=["rsa", "ec"])
def generate_key(request: pytest.FixtureRequest) -> Callable[[str], Any]:
    """Key generation function for each variant."""
    return request.param


@pytest.fixture(scope="session")
def node_private_key() -> rsa.RSAPrivateKey:
    """The node's encryption keypair (only the node holds the private half)."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def node_pem_b64(node_private_key: rsa.RSAPrivateKey) -> str:
    """Node public key PEM, base64-encoded as served on the status endpoint."""
    pem = node_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(pem).decode("ascii")


@pytest.fixture
def node_key_data(node_pem_b64: str) -> NodeKeyData:
    return NodeKeyData(encryption="rsa", pem=node_pem_b64)


@pytest.fixture
def decrypt_chunks(node_private_key: rsa.RSAPrivateKey) -> Callable[[str], bytes]:
    """Decrypt a ``|``-joined encrypted payload the way the node does."""

    def _decrypt(payload: str) -> bytes:
        oaep = padding.OAEP(
            mgf=padding.MGF1(algorithm=hashes.SHA1()),
            algorithm=hashes.SHA1(),
            label=None,
        )
        return b"".join(
            node_private_key.decrypt(base64.b64decode(part), oaep)
            for part in payload.split("|")
        )

    return _decrypt


@dataclass
class NodeStub:
    """In-memory Activeledger node behind an httpx.MockTransport.

    A fresh response is built for every request.

    Attributes:
        status_code: Status returned by GET /a/status
        status_body: Body returned by GET /a/status
        post_status: Status returned for a POSTed transaction
        post_body: Body returned for a POSTed transaction
        status_stream: Replaces status_body with a custom body stream when set
        post_stream: Replaces post_body with a custom body stream when set
        fail_status: Raise a connection error for GET /a/status
        fail_post: Raise a connection error for POST
        requests: Every request received, in order
    """

    status_body: str
    status_code: int = 200
    post_status: int = 200
    post_body: str = NODE_RESPONSE
    status_stream: Optional[httpx.SyncByteStream] = None
    post_stream: Optional[httpx.SyncByteStream] = None
    fail_status: bool = False
    fail_post: bool = False
    requests: list[httpx.Request] = field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET" and request.url.path == STATUS_PATH:
            if self.fail_status:
                raise httpx.ConnectError("Connection refused", request=request)
            if self.status_stream is not None:
                return httpx.Response(self.status_code, stream=self.status_stream)
            return httpx.Response(self.status_code, text=self.status_body)
        if request.method == "POST":
            if self.fail_post:
                raise httpx.ConnectError("Connection reset", request=request)
            if self.post_stream is not None:
                return httpx.Response(self.post_status, stream=self.post_stream)
            return httpx.Response(self.post_status, text=self.post_body)
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def posts(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]


@pytest.fixture
def node(node_pem_b64: str) -> NodeStub:
    """A reachable node that publishes its encryption key."""
    body = json.dumps({"status": "alive", "pem": node_pem_b64})
    return NodeStub(status_body=body)


@pytest.fixture
def node_url() -> str:
    return NODE_URL


@pytest.fixture
def node_response() -> str:
    return NODE_RESPONSE


@pytest.fixture
def connect(node: NodeStub) -> Iterator[Callable[..., Connection]]:
    """Open a Connection to the stub node; closed at teardown."""
    opened: list[Connection] = []

    def _connect(encrypt: bool = False, **kwargs: Any) -> Connection:
        connection = Connection(NODE_URL, encrypt, transport=node.transport, **kwargs)
        opened.append(connection)
        return connection

    yield _connect
    for connection in opened:
        connection.close()
