"""
Sample host types used across the test suite.

Annotations here are evaluated eagerly (no postponed evaluation), so
typing.get_type_hints sees real classes.
"""

from collections.abc import Callable
from dataclasses import dataclass

from dslschema.annotations import (
    access_from_current_receiver_only,
    adding,
    builder,
    configuring,
    hidden_in_dsl,
    restricted,
)


class Settings:
    level: int = 0


class SpecialSettings(Settings):
    verbose: bool = False


@restricted
@dataclass
class Item:
    name: str
    count: int = 0

    @restricted
    @builder
    def renamed(self, name: str) -> "Item":
        self.name = name
        return self


class Box:
    size: int

    def __init__(self) -> None:
        self._size = 0

    @restricted
    @builder
    def size(self, value: int) -> "Box":
        self._size = value
        return self


@restricted
class Container:
    settings: Settings
    label: str = ""
    items: list[Item]

    def __init__(self) -> None:
        self.settings = Settings()
        self.items = []
        self._count = 0

    @property
    def count(self) -> int:
        return len(self.items)

    @hidden_in_dsl
    @property
    def internal_id(self) -> int:
        return id(self)

    @restricted
    @adding
    def item(self, name: str, configure: Callable[[Item], None] | None = None) -> Item:
        new_item = Item(name)
        if configure is not None:
            configure(new_item)
        self.items.append(new_item)
        return new_item

    @restricted
    @configuring(property_name="settings")
    def configure_settings(self, configure: Callable[[Settings], None]) -> None:
        configure(self.settings)

    @restricted
    @configuring
    def widget(self, configure: Callable[[Item], None]) -> Item:
        new_item = Item("widget")
        configure(new_item)
        return new_item

    @restricted
    def describe(self) -> str:
        return f"{self.label}: {len(self.items)} items"

    @restricted
    @access_from_current_receiver_only
    def reset(self) -> None:
        self.items.clear()

    @restricted
    def get_label(self) -> str:
        return self.label

    @restricted
    @hidden_in_dsl
    def debug_dump(self) -> str:
        return repr(self.items)

    def untagged(self) -> str:
        return "untagged"

    @restricted
    def _internal(self) -> str:
        return "internal"


def make_item(name: str, configure: Callable[[Item], None]) -> Item:
    new_item = Item(name)
    configure(new_item)
    return new_item


def item_count(container: Container, minimum: int = 0) -> int:
    return max(minimum, len(container.items))
