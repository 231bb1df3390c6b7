"""Benchmarks for key, signing and transaction encryption operations.

Measures performance of:
- RSA-2048 vs secp256k1 key generation
- Signing and verification of a compact transaction body
- Chunked RSA-OAEP encryption as payload size grows
- build_transaction + send_transaction against a stub node

Run with: pytest benchmarks/benchmark_keys.py --benchmark-only -v
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from activeledger.connection import Connection, build_transaction, encrypt_payload
from activeledger.connection.encryption import NodeKeyData
from activeledger.connection.transaction import to_json
from activeledger.key import EllipticCurve, RSA


class TestKeyGeneration:
    """Benchmarks for keypair generation (including PEM export)."""

    def test_generate_rsa(self, benchmark: Any) -> None:
        key = benchmark.pedantic(RSA.generate, args=("bench",), rounds=5, iterations=1)
        assert key.name == "bench"

    def test_generate_ec(self, benchmark: Any) -> None:
        key = benchmark(EllipticCurve.generate, "bench")
        assert key.name == "bench"


class TestSigning:
    """Benchmarks for detached signing; the provider key is reloaded from PEM each call."""

    @pytest.mark.parametrize("variant", ["rsa", "ec"])
    def test_sign(
        self,
        benchmark: Any,
        variant: str,
        bench_rsa_key: RSA,
        bench_ec_key: EllipticCurve,
        sample_tx_body: dict,
    ) -> None:
        key = bench_rsa_key if variant == "rsa" else bench_ec_key
        data = to_json(sample_tx_body)

        signature = benchmark(key.sign, data)
        assert key.verify(data, signature) is True

    @pytest.mark.parametrize("variant", ["rsa", "ec"])
    def test_verify(
        self,
        benchmark: Any,
        variant: str,
        bench_rsa_key: RSA,
        bench_ec_key: EllipticCurve,
        sample_tx_body: dict,
    ) -> None:
        key = bench_rsa_key if variant == "rsa" else bench_ec_key
        data = to_json(sample_tx_body)
        signature = key.sign(data)

        assert benchmark(key.verify, data, signature) is True


class TestEncryption:
    """Benchmarks for chunked payload encryption (one RSA block per 100 bytes)."""

    @pytest.mark.parametrize("size", [100, 1_000, 10_000])
    def test_encrypt_payload(
        self, benchmark: Any, size: int, bench_node_key_data: NodeKeyData
    ) -> None:
        payload = "x" * size

        result = benchmark(encrypt_payload, bench_node_key_data, payload)
        assert len(result.split("|")) == size // 100


class TestSubmission:
    """End-to-end build + send against an in-memory node."""

    @pytest.mark.parametrize("encrypt", [False, True], ids=["plain", "encrypted"])
    def test_build_and_send(
        self,
        benchmark: Any,
        encrypt: bool,
        bench_ec_key: EllipticCurve,
        bench_transport: httpx.MockTransport,
        sample_tx_body: dict,
    ) -> None:
        with Connection(
            "http://localhost:5260", encrypt, transport=bench_transport
        ) as connection:

            def do_send() -> str:
                tx = build_transaction(sample_tx_body, [bench_ec_key], selfsign=True)
                return connection.send_transaction(tx)

            assert benchmark(do_send) == '{"$umid":"bench"}'
