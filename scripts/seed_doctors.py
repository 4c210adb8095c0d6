#!/usr/bin/env python3
"""Script to load the sample doctors into Firestore.

Existing documents with the same ids are left alone unless --force is
given.

Usage:
    python scripts/seed_doctors.py --preview
    python scripts/seed_doctors.py
    python scripts/seed_doctors.py --force
    python scripts/seed_doctors.py --collection doctors_staging
"""
import os
import sys
import argparse
from datetime import datetime, timezone

# Add parent directory to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from careforme.core.config import get_config
from careforme.core.logging import get_logger, setup_logging
from careforme.repositories.doctor_repository import DoctorRepository
from careforme.services.normalizer import normalize_record
from careforme.utils.firebase import get_firestore_client

# Load environment variables
load_dotenv()

logger = get_logger(__name__)

SAMPLE_DOCTORS = {
    "doc1": {
        "name": "Dr. Sarah Johnson",
        "specialty": "Cardiology",
        "city": "New York",
        "address": "123 Medical Ave, New York, NY 10001",
        "email": "sarah.johnson@careforme.com",
        "phone": "+1 (212) 555-1234",
        "latitude": 40.7128,
        "longitude": -74.0060,
        "profilePicture": "https://randomuser.me/api/portraits/women/1.jpg",
        "bio": "Experienced cardiologist with over 10 years of practice.",
        "rating": 4.8,
        "reviewCount": 156,
        "availableDays": ["Monday", "Tuesday", "Wednesday", "Friday"],
        "isAvailable": True,
        "suspended": False,
    },
    "doc2": {
        "name": "Dr. Michael Chen",
        "specialty": "Dermatology",
        "city": "San Francisco",
        "address": "456 Health St, San Francisco, CA 94105",
        "email": "michael.chen@careforme.com",
        "phone": "+1 (415) 555-5678",
        "latitude": 37.7749,
        "longitude": -122.4194,
        "profilePicture": "https://randomuser.me/api/portraits/men/2.jpg",
        "bio": "Board-certified dermatologist specializing in skin cancer prevention.",
        "rating": 4.9,
        "reviewCount": 203,
        "availableDays": ["Monday", "Tuesday", "Thursday", "Friday"],
        "isAvailable": True,
        "suspended": False,
    },
    "doc3": {
        "name": "Dr. Emily Rodriguez",
        "specialty": "Pediatrics",
        "city": "Chicago",
        "address": "789 Child Care Blvd, Chicago, IL 60601",
        "email": "emily.rodriguez@careforme.com",
        "phone": "+1 (312) 555-9012",
        "latitude": 41.8781,
        "longitude": -87.6298,
        "profilePicture": "https://randomuser.me/api/portraits/women/3.jpg",
        "bio": "Dedicated pediatrician with a focus on newborn care and child development.",
        "rating": 4.7,
        "reviewCount": 178,
        "availableDays": ["Tuesday", "Wednesday", "Thursday", "Friday"],
        "isAvailable": True,
        "suspended": False,
    },
}


def main():
    """Main entry point for the seed script."""
    parser = argparse.ArgumentParser(
        description="Load sample doctors into Firestore"
    )
    parser.add_argument(
        "--collection",
        type=str,
        default=None,
        help="Target collection (defaults to DOCTORS_COLLECTION)"
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show what would be written without writing anything"
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite documents that already exist"
    )

    args = parser.parse_args()

    config = get_config()
    setup_logging(config)

    repository = DoctorRepository(
        db=get_firestore_client(config),
        collection_name=args.collection or config.doctors_collection
    )

    logger.info(
        "Starting doctor seeding",
        extra={"collection": repository.collection_name, "preview_mode": args.preview}
    )

    created_at = datetime.now(timezone.utc).isoformat()
    written = skipped = 0

    print(f"\n{'PREVIEW MODE - ' if args.preview else ''}Seeding {len(SAMPLE_DOCTORS)} doctor(s) "
          f"into '{repository.collection_name}'")
    print("=" * 60)

    for doctor_id, data in SAMPLE_DOCTORS.items():
        exists = repository.get(doctor_id) is not None
        if exists and not args.force:
            print(f"  - {doctor_id}: {data['name']} already exists, skipping")
            skipped += 1
            continue

        record = normalize_record({**data, "createdAt": created_at}, doctor_id)
        if args.preview:
            print(f"  - {doctor_id}: {record.name} ({record.specialty}, {record.city}) would be "
                  f"{'overwritten' if exists else 'created'}")
            continue

        repository.put(doctor_id, record.to_dict())
        written += 1
        print(f"  ✓ {doctor_id}: {record.name}")

    print("=" * 60)

    if args.preview:
        print("\n✓ Preview complete. Nothing was written.")
        return

    print(f"\n✓ Wrote {written} doctor(s), skipped {skipped}")
    logger.info("Doctor seeding complete", extra={"written": written, "skipped": skipped})


if __name__ == "__main__":
    main()
