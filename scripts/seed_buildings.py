#!/usr/bin/env python3
"""
Building Seed Script

Loads campus buildings from a JSON file into the buildings table.
Existing buildings are matched on code and updated.

Usage: python scripts/seed_buildings.py [path/to/buildings.json]
"""
import json
import sys
from pathlib import Path
sys.path.insert(0, '.')

from campusnav.db.database import init_schema
from campusnav.services.building_service import get_building_catalog

DEFAULT_SEED = Path(__file__).resolve().parent / "buildings.json"


def main(argv):
    seed_path = Path(argv[1]) if len(argv) > 1 else DEFAULT_SEED
    buildings = json.loads(seed_path.read_text(encoding="utf-8"))

    init_schema()
    count = get_building_catalog().upsert_buildings(buildings)
    print(f"✅ Seeded {count} buildings from {seed_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
