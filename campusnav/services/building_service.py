"""
Building Catalog - read-only lookup of campus buildings.

Rows are seed data managed outside the API. Coordinates are passed
through as stored; range checks belong to whoever renders them.
"""

from typing import List, Optional

from sqlalchemy import text

from campusnav.db.database import execute_raw_sql, get_db_session


def _to_float(value) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def building_from_row(row: dict) -> dict:
    """Map a buildings row to the wire shape (code -> building_code, lat/long -> latitude/longitude)."""
    return {
        "id": row["id"],
        "name": row["name"],
        "building_code": row["code"],
        "address": row["address"],
        "latitude": _to_float(row["lat"]),
        "longitude": _to_float(row["long"]),
        "description": row["description"],
    }


class BuildingCatalog:
    """Read access to the buildings table."""

    def list_buildings(self) -> List[dict]:
        """All buildings ordered by name. No filtering."""
        rows = execute_raw_sql(
            "SELECT id, code, name, address, lat, long, description FROM buildings ORDER BY name, id"
        )
        return [building_from_row(r) for r in rows]

    def upsert_buildings(self, buildings: List[dict]) -> int:
        """
        Load seed data. Buildings are matched on code; existing rows are
        updated in place so course references stay valid.
        """
        count = 0
        with get_db_session() as db:
            for b in buildings:
                params = {
                    "code": b.get("code"),
                    "name": b["name"],
                    "address": b.get("address"),
                    "lat": b.get("latitude"),
                    "long": b.get("longitude"),
                    "description": b.get("description"),
                }
                existing = db.execute(
                    text("SELECT id FROM buildings WHERE code = :code"),
                    {"code": params["code"]}
                ).fetchone()
                if existing:
                    params["id"] = existing[0]
                    db.execute(
                        text("""
                            UPDATE buildings
                            SET name = :name, address = :address, lat = :lat,
                                long = :long, description = :description
                            WHERE id = :id
                        """),
                        params
                    )
                else:
                    db.execute(
                        text("""
                            INSERT INTO buildings (code, name, address, lat, long, description)
                            VALUES (:code, :name, :address, :lat, :long, :description)
                        """),
                        params
                    )
                count += 1
        return count


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_building_catalog() -> BuildingCatalog:
    """Get building catalog instance."""
    return BuildingCatalog()
