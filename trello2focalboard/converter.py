"""Trello export to Focalboard block conversion."""

from __future__ import annotations

import logging
from collections.abc import Callable

from trello2focalboard.attachments import AttachmentFetcher, LoggingAttachmentFetcher
from trello2focalboard.blocks import (
    AnyBlock,
    Board,
    BoardView,
    Card,
    CheckboxBlock,
    PropertyOption,
    PropertyTemplate,
    TextBlock,
    create_guid,
)
from trello2focalboard.trello_export import TrelloBoard, TrelloCard, TrelloChecklist

logger = logging.getLogger(__name__)


class TrelloToFocalboardConverter:
    """Convert a Trello board export into an ordered list of Focalboard blocks

    Trello lists become options of a single "List" select property on the
    board, so cards keep their column when grouped by that property.
    Descriptions become text blocks and checklist items become checkbox
    blocks, both owned by the card and listed in its content order.
    """

    # Round-robin palette for list options ("propColorDefault" is skipped)
    OPTION_COLORS = [
        "propColorGray",
        "propColorBrown",
        "propColorOrange",
        "propColorYellow",
        "propColorGreen",
        "propColorBlue",
        "propColorPurple",
        "propColorPink",
        "propColorRed",
    ]

    LIST_PROPERTY_NAME = "List"
    VIEW_TITLE = "Board View"

    def __init__(
        self,
        attachment_fetcher: AttachmentFetcher | None = None,
        id_factory: Callable[[], str] = create_guid,
        option_colors: list[str] | None = None,
    ):
        self.attachment_fetcher = attachment_fetcher or LoggingAttachmentFetcher()
        self.id_factory = id_factory
        self.option_colors = option_colors or self.OPTION_COLORS

        # Per-run state, reset at the start of every convert()
        self.option_id_map: dict[str, str] = {}  # Trello list ID -> option ID
        self.option_color_index = 0

    def _next_color(self) -> str:
        color = self.option_colors[self.option_color_index % len(self.option_colors)]
        self.option_color_index += 1
        return color

    def _build_list_property(self, export: TrelloBoard) -> PropertyTemplate:
        """Map every Trello list to an option of the "List" select property"""
        options: list[PropertyOption] = []
        for trello_list in export["lists"]:
            option_id = self.id_factory()
            self.option_id_map[trello_list["id"]] = option_id
            options.append(
                PropertyOption(id=option_id, value=trello_list["name"], color=self._next_color())
            )

        return PropertyTemplate(
            id=self.id_factory(),
            name=self.LIST_PROPERTY_NAME,
            type="select",
            options=options,
        )

    def _assign_list(
        self, card: TrelloCard, out_card: Card, list_property: PropertyTemplate
    ) -> None:
        list_id = card.get("idList")
        if not list_id:
            logger.warning("Missing idList for card: %s", card.get("name", ""))
            return

        option_id = self.option_id_map.get(list_id)
        if option_id:
            out_card.properties[list_property.id] = option_id
        else:
            logger.warning("Invalid idList: %s for card: %s", list_id, card.get("name", ""))

    def _convert_checklists(
        self,
        card: TrelloCard,
        out_card: Card,
        checklists_by_id: dict[str, TrelloChecklist],
    ) -> list[AnyBlock]:
        blocks: list[AnyBlock] = []
        for checklist_id in card.get("idChecklists") or []:
            checklist = checklists_by_id.get(checklist_id)
            if checklist is None:
                # Not warned about, unlike unresolved lists
                logger.debug(
                    "Skipping unknown checklist %s on card %s", checklist_id, out_card.title
                )
                continue

            for item in checklist.get("checkItems") or []:
                check_block = CheckboxBlock(
                    id=self.id_factory(),
                    root_id=out_card.root_id,
                    parent_id=out_card.id,
                    title=item.get("name", ""),
                    value=item.get("state") == "complete",
                )
                blocks.append(check_block)
                out_card.content_order.append(check_block.id)

        return blocks

    def _convert_card(
        self,
        card: TrelloCard,
        board: Board,
        list_property: PropertyTemplate,
        checklists_by_id: dict[str, TrelloChecklist],
        token: str,
        app_key: str,
    ) -> list[AnyBlock]:
        """Convert one Trello card into the card block followed by its content blocks"""
        logger.info(f"Card: {card.get('name', '')}")

        out_card = Card(
            id=self.id_factory(), root_id=board.id, parent_id=board.id, title=card.get("name", "")
        )
        self._assign_list(card, out_card, list_property)
        blocks: list[AnyBlock] = [out_card]

        if card.get("desc"):
            text = TextBlock(
                id=self.id_factory(), root_id=board.id, parent_id=out_card.id, title=card["desc"]
            )
            blocks.append(text)
            out_card.content_order = [text.id]

        blocks.extend(self._convert_checklists(card, out_card, checklists_by_id))

        if token and app_key:
            for attachment in card.get("attachments") or []:
                self.attachment_fetcher.fetch(attachment.get("url", ""), token, app_key)

        return blocks

    def convert(
        self, export: TrelloBoard, auth_token: str = "", app_key: str = ""
    ) -> list[AnyBlock]:
        """Convert a parsed Trello export into Focalboard blocks

        Args:
            export: Parsed Trello board export (needs lists, cards and checklists)
            auth_token: Trello token, only used for attachments
            app_key: Trello app key, only used for attachments

        Returns:
            Board block, board view, then each card followed by its content blocks

        Unresolvable list references are warned about and leave the card's
        "List" property unset; unresolvable checklist references are skipped.
        """
        self.option_id_map = {}
        self.option_color_index = 0

        board = Board(id=self.id_factory(), title=export.get("name", ""))
        logger.info(f"Board: {board.title}")
        board.root_id = board.id
        board.parent_id = board.id
        board.description = export.get("desc") or ""

        list_property = self._build_list_property(export)
        board.card_properties = [list_property]
        blocks: list[AnyBlock] = [board]

        view = BoardView(
            id=self.id_factory(),
            root_id=board.id,
            parent_id=board.id,
            title=self.VIEW_TITLE,
            view_type="board",
        )
        blocks.append(view)

        checklists_by_id: dict[str, TrelloChecklist] = {}
        for checklist in export["checklists"]:
            checklists_by_id.setdefault(checklist["id"], checklist)

        cards = export["cards"]
        for card in cards:
            blocks.extend(
                self._convert_card(
                    card, board, list_property, checklists_by_id, auth_token, app_key
                )
            )

        logger.info(f"Found {len(cards)} card(s).")

        return blocks
