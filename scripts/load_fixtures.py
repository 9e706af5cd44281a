#!/usr/bin/env python3
"""
Wild Series • Load demo fixtures
================================

Seeds categories, programs, actors, seasons and episodes (Faker, fr_FR) into
the database configured by the environment (`POSTGRES_*`). Run migrations
first.

Usage
-----
    alembic upgrade head
    python scripts/load_fixtures.py --seed 42
"""

import argparse
import asyncio
import random

from faker import Faker

from wildseries.db.session import async_engine, async_session_maker
from wildseries.fixtures import build_fixtures, load_fixtures


async def _run(seed) -> None:
    faker = Faker("fr_FR")
    rng = random.Random(seed)
    if seed is not None:
        faker.seed_instance(seed)

    async with async_session_maker() as session:
        fixtures = await load_fixtures(session, build_fixtures(faker, rng))
    await async_engine.dispose()

    print(
        f"Loaded {len(fixtures.programs)} programs, {len(fixtures.actors)} actors, "
        f"{len(fixtures.seasons)} seasons, {len(fixtures.episodes)} episodes."
    )
    print(f"Demo owner: {fixtures.owner.email}")


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=None, help="Seed Faker and random for a reproducible catalog")
    args = ap.parse_args()
    asyncio.run(_run(args.seed))


if __name__ == "__main__":
    main()
