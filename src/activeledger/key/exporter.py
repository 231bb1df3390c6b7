"""Export keys to JSON key files readable by activeledger.key.importer."""

from __future__ import annotations

import json
from pathlib import Path

from activeledger.errors import ExportCode, KeyExportError
from activeledger.key.models import Key, KeyFile, KeyFilePem
from activeledger.observability import get_logger

logger = get_logger(__name__)

# Restrict key files to owner read/write only
KEY_FILE_MODE = 0o600


def key_to_document(key: Key) -> KeyFile:
    pem = key.get_pem()
    return KeyFile(
        name=key.name,
        type=key.key_type.value,
        pem=KeyFilePem(private=pem.private, public=pem.public),
    )


def key_to_json(key: Key) -> str:
    """Serialize ``key`` to key file JSON. Raises KeyExportError(JSON) on failure."""
    document = key_to_document(key)
    try:
        return json.dumps(document.model_dump(), indent=2)
    except (TypeError, ValueError) as exc:
        raise KeyExportError(ExportCode.JSON) from exc


def export_key(key: Key, path: str | Path) -> Path:
    """Write ``key`` as a key file (mode 0600) and return the path written.

    Raises:
        KeyExportError: JSON if serialization fails, OPEN_FILE if the file
            cannot be created, WRITE_FILE if writing fails.
        StringifyError: if the stored PEM is not valid UTF-8.
    """
    contents = key_to_json(key)
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = path.open("w", encoding="utf-8")
    except OSError as exc:
        raise KeyExportError(ExportCode.OPEN_FILE, details={"path": str(path)}) from exc

    with handle:
        try:
            handle.write(contents)
        except OSError as exc:
            raise KeyExportError(ExportCode.WRITE_FILE, details={"path": str(path)}) from exc

    try:
        path.chmod(KEY_FILE_MODE)
    except OSError as exc:
        logger.warning(
            "key_file.permissions_not_set",
            path=str(path),
            recommended=oct(KEY_FILE_MODE),
            error=str(exc),
        )
    logger.debug("key.exported", key_type=key.key_type.value, key_name=key.name, path=str(path))
    return path
