"""Constants for the Activeledger SDK.

This module defines SDK-wide constants used across the codebase.
"""

# RSA key generation
RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537

# Elliptic curve used for EC identities on Activeledger
EC_CURVE_NAME = "secp256k1"

# Node endpoints
STATUS_PATH = "/a/status"
"""Path served by every node; returns node status and its encryption PEM."""

ENCRYPT_HEADER = "X-Activeledger-Encrypt"
"""Header telling the receiving node to decrypt the body before processing."""

# Transaction encryption
DEFAULT_CHUNK_SIZE = 100
"""Plaintext bytes per RSA-OAEP block.

Fixed rather than derived from the node key size. A 2048-bit key with
OAEP/SHA-1 accepts at most 214 bytes per block, so 100 is safely under
the limit for 2048-bit node keys only.
"""

CHUNK_SEPARATOR = "|"

# Default per-request timeout in seconds
DEFAULT_TIMEOUT = 60.0
