"""Import keys from JSON key files.

The file must have the structure written by activeledger.key.exporter:

    {
        "name": "",
        "type": "rsa" | "ec",
        "pem": {"private": "", "public": ""}
    }

Example:
    >>> from activeledger.key import importer
    >>> rsa_key = importer.import_rsa("/path/to/key.json")
    >>> ec_key = importer.import_ec("/path/to/ec.json")
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union, cast

from pydantic import ValidationError

from activeledger.errors import ImportCode, KeyImportError
from activeledger.key.ec import EllipticCurve
from activeledger.key.models import KeyFile, KeyType, PemPair
from activeledger.key.rsa import RSA
from activeledger.observability import get_logger, sanitize_for_logging

logger = get_logger(__name__)

AnyKey = Union[RSA, EllipticCurve]

_VARIANTS: dict[KeyType, type[RSA] | type[EllipticCurve]] = {
    KeyType.RSA: RSA,
    KeyType.EC: EllipticCurve,
}


def key_from_pem(name: str, pem: PemPair, key_type: KeyType | str) -> AnyKey:
    """Build the key variant matching ``key_type`` from a PemPair.

    Raises KeyImportError(TYPE_MISMATCH) if the tag names no known variant.
    """
    try:
        variant = _VARIANTS[KeyType(key_type)]
    except ValueError as exc:
        raise KeyImportError(
            ImportCode.TYPE_MISMATCH, details={"type": str(key_type)}
        ) from exc
    return variant.from_pem(name, pem)


def parse_key_document(data: Any, expected: KeyType | None = None) -> AnyKey:
    """Build a key from an already-decoded key file document.

    Args:
        data: Decoded JSON of a key file.
        expected: Variant the caller asked for. None accepts whatever the file declares.

    Raises:
        KeyImportError: READ_FILE if fields are missing or malformed,
            TYPE_MISMATCH if the file's type differs from ``expected``.
    """
    try:
        key_file = KeyFile.model_validate(data)
    except ValidationError as exc:
        logger.warning(
            "key.import_rejected",
            document=sanitize_for_logging(data) if isinstance(data, dict) else type(data).__name__,
            errors=exc.error_count(),
        )
        raise KeyImportError(
            ImportCode.READ_FILE, details={"errors": exc.error_count()}
        ) from exc

    if expected is not None and key_file.type != KeyType(expected).value:
        raise KeyImportError(
            ImportCode.TYPE_MISMATCH,
            details={"expected": KeyType(expected).value, "actual": key_file.type},
        )

    pem = PemPair(private=key_file.pem.private, public=key_file.pem.public)
    return key_from_pem(key_file.name, pem, key_file.type)


def import_key(path: str | Path, expected: KeyType | None = None) -> AnyKey:
    """Import a key file from ``path``.

    Raises:
        KeyImportError: OPEN_FILE if the file cannot be opened, READ_FILE if it
            cannot be read or is not a valid key document, TYPE_MISMATCH if the
            key type differs from ``expected``.
    """
    path = Path(path)
    try:
        handle = path.open("r", encoding="utf-8")
    except OSError as exc:
        raise KeyImportError(ImportCode.OPEN_FILE, details={"path": str(path)}) from exc

    with handle:
        try:
            contents = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise KeyImportError(ImportCode.READ_FILE, details={"path": str(path)}) from exc

    try:
        data = json.loads(contents)
    except json.JSONDecodeError as exc:
        raise KeyImportError(ImportCode.READ_FILE, details={"path": str(path)}) from exc

    key = parse_key_document(data, expected)
    logger.debug("key.imported", key_type=key.key_type.value, key_name=key.name, path=str(path))
    return key


def import_rsa(path: str | Path) -> RSA:
    # import_key rejects any file whose type is not "rsa"
    return cast(RSA, import_key(path, KeyType.RSA))


def import_ec(path: str | Path) -> EllipticCurve:
    return cast(EllipticCurve, import_key(path, KeyType.EC))
