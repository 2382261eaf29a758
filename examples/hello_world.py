"""
keyvalue — Hello World

Ask the service for a slot, write to it, read it back, then reconnect
later using only the exported token and key.
"""

import json
import logging
from dataclasses import dataclass

from keyvalue import ClientConfig, KeyValue, KeyValueError


@dataclass
class Person:
    name: str
    age: int
    occupation: str


def same_person(returned: str, requested: Person) -> bool:
    return Person(**json.loads(returned)) == requested


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    config = ClientConfig.from_env()

    # ──────────────────────────────────────
    #  1. New slot, plain strings
    # ──────────────────────────────────────
    with KeyValue.create("keyvalue-hello-world", config=config) as kv:
        kv.set_and_validate("some-value")
        print(f"  stored: {kv.get()!r}")

        # ──────────────────────────────────────
        #  2. Objects, validated with our own comparison
        # ──────────────────────────────────────
        kv.set_object_and_validate(Person("Tester1", 37, "Developer"), same_person)
        print(f"  stored: {kv.get()}")

        saved = kv.export()

    # ──────────────────────────────────────
    #  3. Reconnect later with known credentials
    # ──────────────────────────────────────
    with KeyValue.from_credentials(saved["token"], saved["key"], config=config) as kv:
        print(f"  still there: {kv.get()}")


if __name__ == "__main__":
    try:
        main()
    except KeyValueError as e:
        print(f"  [FAILED] {e}")
        raise SystemExit(1)
