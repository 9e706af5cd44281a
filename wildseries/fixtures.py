# wildseries/fixtures.py
"""
Wild Series · Demo data
=======================

Builds and loads a demo catalog with Faker (`fr_FR`):

- the fixed category and program lists below, owned by a demo user;
- the four named actors plus 46 Faker actors, each linked to one random program;
- 50 seasons and 50 episodes spread over random parents (episodes slugged).

`build_fixtures` is pure given its `Faker` and `random.Random`, so seeding
both makes the whole graph reproducible. `load_fixtures` persists it.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from faker import Faker
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from wildseries.core.security import get_password_hash
from wildseries.db.models.actor import Actor
from wildseries.db.models.category import Category
from wildseries.db.models.episode import Episode
from wildseries.db.models.program import Program, program_actor
from wildseries.db.models.season import Season
from wildseries.db.models.user import User
from wildseries.utils.slug import PROGRAM_RESERVED_SLUGS, generate_slug

logger = logging.getLogger(__name__)

CATEGORIES = ["Action", "Aventure", "Animation", "Fantastique", "Horreur"]

PROGRAMS = [
    {
        "title": "Walking Dead",
        "summary": "Des zombies envahissent la terre.",
        "poster": "https://m.media-amazon.com/images/M/MV5BMTYyMzEzMzk4Ml5BMl5BanBnXkFtZTgwNzE3NDA3MDE@._V1_SX300.jpg",
        "category": "Horreur",
    },
    {
        "title": "The Haunting Of Hill House",
        "summary": "Plusieurs frères et sœurs qui, enfants, ont grandi dans la demeure la plus hantée des États-Unis.",
        "poster": "https://m.media-amazon.com/images/M/MV5BMTU4NzA4MDEwNF5BMl5BanBnXkFtZTgwMTQxODYzNjM@._V1_SY1000_CR0,0,674,1000_AL_.jpg",
        "category": "Horreur",
    },
    {
        "title": "American Horror Story",
        "summary": "A chaque saison, son histoire. American Horror Story nous embarque dans des récits à la fois poignants et cauchemardesques.",
        "poster": "https://m.media-amazon.com/images/M/MV5BODZlYzc2ODYtYmQyZS00ZTM4LTk4ZDQtMTMyZDdhMDgzZTU0XkEyXkFqcGdeQXVyMzQ2MDI5NjU@._V1_SY1000_CR0,0,666,1000_AL_.jpg",
        "category": "Horreur",
    },
    {
        "title": "Love Death And Robots",
        "summary": "Un yaourt susceptible, des soldats lycanthropes, des robots déchaînés, des monstres-poubelles, des chasseurs de primes cyborgs.",
        "poster": "https://m.media-amazon.com/images/M/MV5BMTc1MjIyNDI3Nl5BMl5BanBnXkFtZTgwMjQ1OTI0NzM@._V1_SY1000_CR0,0,674,1000_AL_.jpg",
        "category": "Animation",
    },
    {
        "title": "Penny Dreadful",
        "summary": "Dans le Londres ancien, Vanessa Ives, une jeune femme puissante aux pouvoirs hypnotiques, allie ses forces à celles d'Ethan.",
        "poster": "https://m.media-amazon.com/images/M/MV5BNmE5MDE0ZmMtY2I5Mi00Y2RjLWJlYjMtODkxODQ5OWY1ODdkXkEyXkFqcGdeQXVyNjU2NjA5NjM@._V1_SY1000_CR0,0,695,1000_AL_.jpg",
        "category": "Horreur",
    },
    {
        "title": "Fear The Walking Dead",
        "summary": "La série se déroule au tout début de l'épidémie relatée dans la série mère The Walking Dead.",
        "poster": "https://m.media-amazon.com/images/M/MV5BYWNmY2Y1NTgtYTExMS00NGUxLWIxYWQtMjU4MjNkZjZlZjQ3XkEyXkFqcGdeQXVyMzQ2MDI5NjU@._V1_SY1000_CR0,0,666,1000_AL_.jpg",
        "category": "Horreur",
    },
]

ACTORS = ["Andrew Lincoln", "Norman Reedus", "Lauren Cohan", "Danai Gurira"]
ACTOR_COUNT = 50
SEASON_COUNT = 50
EPISODE_COUNT = 50

DEMO_OWNER_EMAIL = "owner@wildseries.local"
DEMO_OWNER_PASSWORD = "wildseries"


@dataclass
class FixtureSet:
    """Everything `load_fixtures` writes, with ids assigned up front."""
    owner: User
    categories: List[Category] = field(default_factory=list)
    programs: List[Program] = field(default_factory=list)
    actors: List[Actor] = field(default_factory=list)
    seasons: List[Season] = field(default_factory=list)
    episodes: List[Episode] = field(default_factory=list)
    actor_links: List[Dict[str, UUID]] = field(default_factory=list)


def build_fixtures(
    faker: Optional[Faker] = None,
    rng: Optional[random.Random] = None,
    *,
    owner_password_hash: Optional[str] = None,
) -> FixtureSet:
    """Build the demo graph in memory (nothing is persisted)."""
    faker = faker or Faker("fr_FR")
    rng = rng or random.Random()

    owner = User(
        id=uuid4(),
        email=DEMO_OWNER_EMAIL,
        username="owner",
        hashed_password=owner_password_hash or get_password_hash(DEMO_OWNER_PASSWORD),
        is_active=True,
    )
    fixtures = FixtureSet(owner=owner)

    by_name: Dict[str, Category] = {}
    for name in CATEGORIES:
        category = Category(id=uuid4(), name=name)
        by_name[name] = category
        fixtures.categories.append(category)

    for data in PROGRAMS:
        fixtures.programs.append(
            Program(
                id=uuid4(),
                title=data["title"],
                slug=generate_slug(data["title"], reserved=PROGRAM_RESERVED_SLUGS),
                summary=data["summary"],
                poster=data["poster"],
                category_id=by_name[data["category"]].id,
                owner_id=owner.id,
            )
        )

    names = list(ACTORS) + [faker.name() for _ in range(ACTOR_COUNT - len(ACTORS))]
    for name in names:
        actor = Actor(id=uuid4(), name=name)
        program = rng.choice(fixtures.programs)
        fixtures.actors.append(actor)
        fixtures.actor_links.append({"program_id": program.id, "actor_id": actor.id})

    for _ in range(SEASON_COUNT):
        fixtures.seasons.append(
            Season(
                id=uuid4(),
                program_id=rng.choice(fixtures.programs).id,
                number=faker.random_digit_not_null(),
                year=int(faker.year()),
                description=faker.text(),
            )
        )

    for _ in range(EPISODE_COUNT):
        title = faker.sentence()
        fixtures.episodes.append(
            Episode(
                id=uuid4(),
                season_id=rng.choice(fixtures.seasons).id,
                number=faker.random_digit_not_null(),
                title=title,
                synopsis=faker.text(),
                slug=generate_slug(title),
            )
        )

    return fixtures


async def load_fixtures(session: AsyncSession, fixtures: Optional[FixtureSet] = None) -> FixtureSet:
    """Persist a fixture set (built fresh when not given) in one transaction."""
    fixtures = fixtures or build_fixtures()

    session.add(fixtures.owner)
    session.add_all(fixtures.categories)
    await session.flush()
    session.add_all(fixtures.programs)
    session.add_all(fixtures.actors)
    await session.flush()
    await session.execute(insert(program_actor), fixtures.actor_links)
    session.add_all(fixtures.seasons)
    await session.flush()
    session.add_all(fixtures.episodes)
    await session.commit()

    logger.info(
        "Fixtures loaded: %d categories, %d programs, %d actors, %d seasons, %d episodes",
        len(fixtures.categories),
        len(fixtures.programs),
        len(fixtures.actors),
        len(fixtures.seasons),
        len(fixtures.episodes),
    )
    return fixtures


__all__ = ["FixtureSet", "build_fixtures", "load_fixtures"]
