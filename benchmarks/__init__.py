"""Activeledger SDK performance benchmarks.

Benchmark categories:
- RSA and secp256k1 key generation
- Detached transaction signing and verification
- Chunked RSA-OAEP payload encryption
- Transaction submission over a stubbed node transport

Run benchmarks with:
    pytest benchmarks/benchmark_keys.py --benchmark-only
"""
