"""
Seed the credential store with development users.

Creates the unique ``userID`` index and inserts ``init_user1`` ..
``init_userN``, all with the password ``password``. Existing users are
left untouched.

Usage:
    MONGO_URL=mongodb://localhost:27017 python scripts/seed_users.py --count 12
"""
import argparse
import asyncio
import logging

from album_api.exceptions import Conflict
from album_api.mongo import close_mongo, get_users_collection, init_mongo
from album_api.services.credential_store import CredentialStore
from album_api.services.ownership import OwnershipService

logger = logging.getLogger("app.seed")

SEED_PASSWORD = "password"


async def seed(count: int) -> int:
    users = get_users_collection()
    await init_mongo(users)
    # 관계형 저장소는 사용하지 않으므로 resources 는 None
    ownership = OwnershipService(None, CredentialStore(users))
    created = 0
    try:
        for i in range(1, count + 1):
            user_id = f"init_user{i}"
            try:
                await ownership.register_user(user_id, f"{user_id}@gmail.com", SEED_PASSWORD)
                created += 1
            except Conflict:
                logger.info("Seed user already exists: %s", user_id)
    finally:
        await close_mongo()
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--count", type=int, default=12)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    created = asyncio.run(seed(args.count))
    logger.info("Seeded %d users", created)


if __name__ == "__main__":
    main()
