"""Focalboard block model.

Every record in a Focalboard archive is a block: a common envelope (id,
rootId, parentId, title, timestamps) plus a type tag and a type-specific
``fields`` payload. Each block type is its own dataclass; ``BLOCK_TYPES``
is the closed set of types this package can emit.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

BLOCK_SCHEMA_VERSION = 1


def create_guid() -> str:
    """Return a fresh globally unique block identifier."""
    return str(uuid.uuid4())


def now_millis() -> int:
    return int(time.time() * 1000)


@dataclass
class PropertyOption:
    """One choice of a select property (e.g. a Trello list name)."""

    id: str
    value: str
    color: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "value": self.value, "color": self.color}


@dataclass
class PropertyTemplate:
    """A card property definition attached to a board."""

    id: str
    name: str
    type: str = "select"
    options: list[PropertyOption] = field(default_factory=list)

    def option_for_value(self, value: str) -> PropertyOption | None:
        return next((o for o in self.options if o.value == value), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "options": [option.to_dict() for option in self.options],
        }


@dataclass
class Block:
    """Common block envelope.

    Subclasses set ``type`` and override ``fields()`` to expose their
    payload. ``root_id`` points at the owning board and ``parent_id`` at the
    immediate container; a board is its own root.
    """

    type: ClassVar[str] = ""

    id: str = field(default_factory=create_guid)
    root_id: str = ""
    parent_id: str = ""
    title: str = ""
    created_by: str = ""
    modified_by: str = ""
    schema: int = BLOCK_SCHEMA_VERSION
    create_at: int = field(default_factory=now_millis)
    update_at: int = 0
    delete_at: int = 0

    def __post_init__(self) -> None:
        if not self.update_at:
            self.update_at = self.create_at

    def fields(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        """Render the block in the Focalboard archive shape (camelCase keys)."""
        return {
            "id": self.id,
            "parentId": self.parent_id,
            "rootId": self.root_id,
            "createdBy": self.created_by,
            "modifiedBy": self.modified_by,
            "schema": self.schema,
            "type": self.type,
            "title": self.title,
            "fields": self.fields(),
            "createAt": self.create_at,
            "updateAt": self.update_at,
            "deleteAt": self.delete_at,
        }


@dataclass
class Board(Block):
    type: ClassVar[str] = "board"

    description: str = ""
    show_description: bool = False
    icon: str = ""
    is_template: bool = False
    card_properties: list[PropertyTemplate] = field(default_factory=list)

    def fields(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "showDescription": self.show_description,
            "icon": self.icon,
            "isTemplate": self.is_template,
            "cardProperties": [template.to_dict() for template in self.card_properties],
        }


@dataclass
class BoardView(Block):
    type: ClassVar[str] = "view"

    view_type: str = "board"
    sort_options: list[dict[str, Any]] = field(default_factory=list)
    visible_property_ids: list[str] = field(default_factory=list)
    visible_option_ids: list[str] = field(default_factory=list)
    hidden_option_ids: list[str] = field(default_factory=list)
    filter: dict[str, Any] = field(default_factory=lambda: {"operation": "and", "filters": []})
    card_order: list[str] = field(default_factory=list)
    column_widths: dict[str, int] = field(default_factory=dict)

    def fields(self) -> dict[str, Any]:
        return {
            "viewType": self.view_type,
            "sortOptions": self.sort_options,
            "visiblePropertyIds": self.visible_property_ids,
            "visibleOptionIds": self.visible_option_ids,
            "hiddenOptionIds": self.hidden_option_ids,
            "filter": self.filter,
            "cardOrder": self.card_order,
            "columnWidths": self.column_widths,
        }


@dataclass
class Card(Block):
    type: ClassVar[str] = "card"

    icon: str = ""
    is_template: bool = False
    # property template id -> option id
    properties: dict[str, str] = field(default_factory=dict)
    content_order: list[str] = field(default_factory=list)

    def fields(self) -> dict[str, Any]:
        return {
            "icon": self.icon,
            "isTemplate": self.is_template,
            "properties": dict(self.properties),
            "contentOrder": list(self.content_order),
        }


@dataclass
class TextBlock(Block):
    """Free text content of a card; the text itself is the title."""

    type: ClassVar[str] = "text"


@dataclass
class CheckboxBlock(Block):
    type: ClassVar[str] = "checkbox"

    value: bool = False

    def fields(self) -> dict[str, Any]:
        return {"value": self.value}


AnyBlock = Union[Board, BoardView, Card, TextBlock, CheckboxBlock]

BLOCK_TYPES: dict[str, type[Block]] = {
    cls.type: cls for cls in (Board, BoardView, Card, TextBlock, CheckboxBlock)
}
