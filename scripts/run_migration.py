"""
Generic migration runner script
Usage: python -m scripts.run_migration <migration_file.json>

A migration file holds a list of operations applied in order:

    {"op": "seed", "collection": "lawyers", "documents": {"<id>": {...}}}
        create each document that does not exist yet

    {"op": "patch", "collection": "lawyers", "defaults": {"isActive": true}}
        add the default fields missing from every existing document

The value "@now" is replaced by the current UTC time. After the run, the
document count of every touched collection is printed. Any error aborts
the run with exit status 1; operations already applied stay applied.
"""

import asyncio
import json
import logging
import sys
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, Dict, List

from lawconsult.services.firebase_service import firebase_service

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

NOW_TOKEN = "@now"


class MigrationError(ValueError):
    pass


def _resolve(value: Any, now: datetime) -> Any:
    if value == NOW_TOKEN:
        return now
    if isinstance(value, dict):
        return {k: _resolve(v, now) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve(v, now) for v in value]
    return value


def load_migration(path: Path) -> List[Dict[str, Any]]:
    """Read and validate a migration file, returning its operations."""
    if not path.exists():
        raise MigrationError(f"Migration file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        content = json.load(f)

    operations = content.get("operations") if isinstance(content, dict) else None
    if not isinstance(operations, list):
        raise MigrationError("Migration file must contain an 'operations' list")
    for i, op in enumerate(operations, 1):
        if op.get("op") not in ("seed", "patch"):
            raise MigrationError(f"Operation {i}: unknown op {op.get('op')!r}")
        if not op.get("collection"):
            raise MigrationError(f"Operation {i}: missing collection")
    return operations


async def seed(collection: str, documents: Dict[str, Dict[str, Any]], now: datetime) -> int:
    created = 0
    for doc_id, data in documents.items():
        path = f"{collection}/{doc_id}"
        if await firebase_service.get_document(path) is not None:
            continue
        await firebase_service.set_document(path, _resolve(data, now))
        created += 1
    logger.info("Seeded %d/%d documents into %s", created, len(documents), collection)
    return created


async def patch(collection: str, defaults: Dict[str, Any], now: datetime) -> int:
    patched = 0
    for doc_id, data in await firebase_service.stream_collection(collection):
        missing = {k: _resolve(v, now) for k, v in defaults.items() if k not in data}
        if missing:
            await firebase_service.update_document(f"{collection}/{doc_id}", missing)
            patched += 1
    logger.info("Patched %d documents in %s", patched, collection)
    return patched


async def run_migration(migration_file_path: str) -> Dict[str, int]:
    """Apply a migration file; returns the document count per touched collection."""
    migration_file = Path(migration_file_path)
    logger.info("Reading migration file: %s", migration_file)
    operations = load_migration(migration_file)
    logger.info("Found %d operations to apply", len(operations))

    now = datetime.now(UTC)
    touched = []
    for i, op in enumerate(operations, 1):
        collection = op["collection"]
        logger.info("Applying operation %d/%d (%s %s)...", i, len(operations), op["op"], collection)
        if op["op"] == "seed":
            await seed(collection, op.get("documents", {}), now)
        else:
            await patch(collection, op.get("defaults", {}), now)
        if collection not in touched:
            touched.append(collection)

    counts = {}
    for collection in touched:
        counts[collection] = await firebase_service.count_collection(collection)
        print(f"{collection}: {counts[collection]} documents")
    return counts


def main(argv: List[str]) -> int:
    if len(argv) < 2:
        logger.error("Usage: python -m scripts.run_migration <migration_file.json>")
        return 1
    try:
        asyncio.run(run_migration(argv[1]))
    except Exception as e:
        logger.error("Migration failed: %s", e)
        return 1
    logger.info("Migration completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
