"""
Seed script to populate the database with demo measurements.
Run from backend/: python seed.py [days]
"""
import sys
import os
import random
from datetime import datetime, timedelta, timezone
sys.path.insert(0, os.path.dirname(__file__))

from pressure_tracker import create_app, init_database


def seed(days=30):
    app = create_app()
    init_database(app)
    store = app.extensions['measurement_store']

    with app.app_context():
        if store.list(1):
            print("  Measurements already exist, skipping.")
            return

        now = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)
        rng = random.Random(42)
        for day in range(days):
            # Morning and evening readings
            for hour in (8, 20):
                measured_at = (now - timedelta(days=day)).replace(hour=hour)
                store.insert({
                    'systolic': rng.randint(105, 175),
                    'diastolic': rng.randint(65, 105),
                    'pulse': rng.choice([None, rng.randint(55, 95)]),
                    'measured_at': measured_at,
                })
        print(f"Measurements seeded: {len(store.list(500))} total.")

    print("\nDone.")


if __name__ == "__main__":
    seed(int(sys.argv[1]) if len(sys.argv) > 1 else 30)
