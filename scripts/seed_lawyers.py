"""
Seed a development database with the sample directory and demo accounts.

Usage: python -m scripts.seed_lawyers [--force]

Existing documents are left alone unless --force is given.
"""

import argparse
import asyncio
import logging

from lawconsult.data.sample_data import SAMPLE_LAWYERS, SAMPLE_REVIEWS, sample_consultations
from lawconsult.models.consultation import consultation_model_to_firestore
from lawconsult.models.lawyer import lawyer_model_to_firestore
from lawconsult.models.review import review_model_to_firestore
from lawconsult.models.user import User, UserRole, user_model_to_firestore
from lawconsult.services.firebase_service import firebase_service
from lawconsult.utils.security import hash_password

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

DEMO_PASSWORD = "Password123"


def demo_users() -> list[User]:
    """Demo client and admin accounts plus one account per sample lawyer, keyed by lawyer id."""
    password_hash = hash_password(DEMO_PASSWORD)
    users = [
        User(uid="client1", name="Demo Client", email="client@example.com",
             role=UserRole.CLIENT, password_hash=password_hash),
        User(uid="admin", name="Administrator", email="admin@example.com",
             role=UserRole.ADMIN, password_hash=password_hash),
    ]
    for lawyer in SAMPLE_LAWYERS:
        users.append(User(uid=lawyer.id, name=lawyer.name,
                          email=f"lawyer{lawyer.id}@example.com",
                          role=UserRole.LAWYER, password_hash=password_hash))
    return users


async def _put(path: str, data: dict, force: bool) -> bool:
    if not force and await firebase_service.get_document(path) is not None:
        return False
    await firebase_service.set_document(path, data)
    return True


async def seed(force: bool = False) -> dict:
    written = {"lawyers": 0, "reviews": 0, "consultations": 0, "users": 0}

    for lawyer in SAMPLE_LAWYERS:
        written["lawyers"] += await _put(f"lawyers/{lawyer.id}", lawyer_model_to_firestore(lawyer), force)
    for review in SAMPLE_REVIEWS:
        written["reviews"] += await _put(f"reviews/{review.id}", review_model_to_firestore(review), force)
    for consultation in sample_consultations():
        written["consultations"] += await _put(
            f"consultations/{consultation.id}", consultation_model_to_firestore(consultation), force)
    for user in demo_users():
        written["users"] += await _put(f"users/{user.uid}", user_model_to_firestore(user), force)

    for collection, count in written.items():
        logger.info("%s: %d documents written", collection, count)
    return written


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--force", action="store_true", help="overwrite existing documents")
    args = parser.parse_args()
    asyncio.run(seed(force=args.force))
