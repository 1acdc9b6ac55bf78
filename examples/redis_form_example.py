"""Minimal example decoding flat keys stored in Redis/Dragonfly."""

from kv_entity import DictParser, EntitySchema, SyncDictParser
from kv_entity.sources.redis import RedisSource


PROFILE = EntitySchema(properties={"name": "string", "age": "integer", "active": "boolean"})


def main() -> None:
    """Read a profile through the blocking facade."""
    parser = SyncDictParser(DictParser(RedisSource(url="redis://redis:6379/0", prefix="profile_alice_")))
    try:
        profile: dict = {}
        parser.map(profile, PROFILE, ["name", "age", "active"], parents=["profile", "alice"])
        print("profile:", profile)
        print("age via get_field:", parser.get_field("profile_alice_age", "integer"))
    finally:
        parser.close()


if __name__ == "__main__":
    main()
