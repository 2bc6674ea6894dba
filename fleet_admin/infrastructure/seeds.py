"""
Demo data seeding utilities.
"""

import logging
from datetime import date, datetime, timezone
from typing import Dict, List

from fleet_admin.core.enums import Department, ShipStatus, UserRole, UserStatus
from fleet_admin.domain.entities import Part, PartRow, Ship, User

logger = logging.getLogger(__name__)


def _at(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


class DemoSeeder:
    """
    Demo data seeding manager.

    Writes straight into the repositories, bypassing the persist gateway.
    """

    # base values for the two rows seeded per part
    PART_ROW_VALUES: List[List[float]] = [
        [10.5, 20.3, 15.7, 8.9, 12.1, 25.4, 18.6],
        [11.2, 19.8, 16.1, 9.3, 13.5, 24.9, 17.2],
    ]

    def __init__(self, services):
        self.services = services

    def seed_all(self) -> None:
        """Seed all data."""
        logger.info("Starting demo data seeding...")

        self.seed_ships()
        self.seed_parts()
        self.seed_users()

        logger.info("Demo data seeding completed")

    def seed_ships(self) -> List[Ship]:
        ships = [
            Ship(
                id="1", name="HMS Victory", type="Battleship",
                length=69.6, width=16.2, height=20.0,
                description="Historic British warship famous for the Battle of Trafalgar",
                status=ShipStatus.RETIRED, created_at=_at(1765, 1, 1), year_built=1765,
            ),
            Ship(
                id="2", name="USS Enterprise", type="Aircraft Carrier",
                length=342.0, width=77.7, height=37.0,
                description="Iconic US Navy aircraft carrier from the Cold War era",
                status=ShipStatus.RETIRED, created_at=_at(1961, 1, 1), year_built=1961,
            ),
            Ship(
                id="3", name="Queen Mary 2", type="Cruise Ship",
                length=345.0, width=45.0, height=72.0,
                description="Luxury transatlantic ocean liner operated by Cunard",
                status=ShipStatus.ACTIVE, created_at=_at(2004, 1, 1), year_built=2004,
            ),
            Ship(
                id="4", name="Ever Given", type="Container Ship",
                length=400.0, width=59.0, height=32.9,
                description="One of the largest container ships in the world",
                status=ShipStatus.ACTIVE, created_at=_at(2018, 1, 1), year_built=2018,
            ),
        ]
        self.services.ships.repository.add_many(ships)
        logger.info(f"Seeded {len(ships)} ships")
        return ships

    def seed_parts(self) -> List[Part]:
        parts_data: List[Dict] = [
            {"id": "p1", "name": "Main Engine", "ship_id": "1", "created_at": _at(2024, 1, 1),
             "description": "Primary propulsion engine for the battleship"},
            {"id": "p2", "name": "Aircraft Radar", "ship_id": "2", "created_at": _at(2024, 1, 15),
             "description": "Advanced radar system for aircraft detection and tracking"},
            {"id": "p3", "name": "Lifeboat System", "ship_id": "3", "created_at": _at(2024, 2, 1),
             "description": "Emergency evacuation lifeboats and davits"},
            {"id": "p4", "name": "Container Crane", "ship_id": "4", "created_at": _at(2024, 2, 15),
             "description": "Cargo handling crane for loading and unloading containers"},
        ]
        parts = [Part(**data) for data in parts_data]
        self.services.parts.repository.add_many(parts)

        rows = []
        for part in parts:
            for n, (values, created) in enumerate(
                zip(self.PART_ROW_VALUES, [_at(2024, 1, 15), _at(2024, 1, 20)]), start=1
            ):
                rows.append(PartRow(
                    id=f"row-{part.id}-{n}",
                    created_at=created,
                    part_id=part.id,
                    **{f"value{i}": value for i, value in enumerate(values, start=1)},
                ))
        self.services.part_rows.repository.add_many(rows)

        logger.info(f"Seeded {len(parts)} parts with {len(rows)} measurement rows")
        return parts

    def seed_users(self) -> List[User]:
        users = [
            User(
                id="1", name="Alice Johnson", email="alice.johnson@example.com",
                role=UserRole.ADMIN, status=UserStatus.ACTIVE,
                join_date=date(2023, 1, 15), department=Department.ENGINEERING,
            ),
            User(
                id="2", name="Bob Smith", email="bob.smith@example.com",
                role=UserRole.MANAGER, status=UserStatus.ACTIVE,
                join_date=date(2023, 2, 20), department=Department.MARKETING,
            ),
        ]
        self.services.users.repository.add_many(users)
        logger.info(f"Seeded {len(users)} users")
        return users
