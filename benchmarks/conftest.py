"""Benchmark fixtures and configuration."""

import base64
import json

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from activeledger.connection.encryption import NodeKeyData
from activeledger.key import EllipticCurve, RSA


@pytest.fixture(scope="session")
def bench_rsa_key() -> RSA:
    """Pre-generated RSA key (avoids keygen in hot path)."""
    return RSA.generate("bench-rsa")


@pytest.fixture(scope="session")
def bench_ec_key() -> EllipticCurve:
    """Pre-generated secp256k1 key (avoids keygen in hot path)."""
    return EllipticCurve.generate("bench-ec")


@pytest.fixture(scope="session")
def bench_node_key_data() -> NodeKeyData:
    """Node encryption key as served on /a/status."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return NodeKeyData(encryption="rsa", pem=base64.b64encode(pem).decode("ascii"))


@pytest.fixture
def bench_transport(bench_node_key_data: NodeKeyData) -> httpx.MockTransport:
    """Node stub answering status probes and transaction POSTs."""
    status = json.dumps({"status": "alive", "pem": bench_node_key_data.pem})

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, text=status)
        return httpx.Response(200, text='{"$umid":"bench"}')

    return httpx.MockTransport(handler)


@pytest.fixture
def sample_tx_body() -> dict:
    """Onboarding transaction body of typical size."""
    return {
        "$namespace": "default",
        "$contract": "onboard",
        "$i": {
            "bench-identity": {
                "type": "rsa",
                "publicKey": "-----BEGIN PUBLIC KEY-----\n"
                + "A" * 392
                + "\n-----END PUBLIC KEY-----",
            }
        },
    }
