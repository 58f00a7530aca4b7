"""Seed the remote teachers service with demo records through its public API.

Usage:
  python -m scripts.seed_demo_teachers
  python -m scripts.seed_demo_teachers --force     # seed even if teachers exist
  python -m scripts.seed_demo_teachers --api-url http://staging:8000/api/teachers
"""
import argparse
import asyncio
import os
import sys
from datetime import date

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import settings
from app.schemas.teacher import TeacherCreate
from app.services.teacher_api import TeacherApiClient

DEMO_TEACHERS = [
    ("Sarah Chen", date(1985, 3, 14), 6),
    ("James Wilson", date(1978, 11, 2), 4),
    ("Priya Sharma", date(1990, 7, 23), 8),
    ("Michael Torres", date(1969, 1, 30), 3),
    ("Jennifer Kim", date(1995, 5, 9), 5),
    ("Jane Doe", date(1990, 1, 1), 5),
    ("John Doe", date(1982, 9, 17), 12),
]


async def seed(api_url: str, force: bool = False) -> int:
    async with TeacherApiClient(base_url=api_url) as client:
        existing = await client.get_all_teachers()
        if not existing.ok:
            print(f"Could not reach {api_url}: {existing.reason}")
            return 1
        if existing.value and not force:
            print(f"Service already has {len(existing.value)} teachers. Use --force to seed anyway.")
            return 0

        created = 0
        for full_name, date_of_birth, classes in DEMO_TEACHERS:
            result = await client.create_teacher(TeacherCreate(
                full_name=full_name,
                date_of_birth=date_of_birth,
                number_of_classes=classes,
            ))
            if result.ok:
                created += 1
                print(f"  created #{result.value.id} {full_name}")
            else:
                print(f"  failed  {full_name}: {result.reason}")

        print("=" * 60)
        print(f"  {created}/{len(DEMO_TEACHERS)} demo teachers created")
        print("=" * 60)
        return 0 if created == len(DEMO_TEACHERS) else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the teachers service with demo data.")
    parser.add_argument("--force", action="store_true", help="Seed even if teachers already exist.")
    parser.add_argument("--api-url", default=settings.teachers_api_url, help="Teachers API base URL")
    args = parser.parse_args()
    sys.exit(asyncio.run(seed(args.api_url, force=args.force)))
