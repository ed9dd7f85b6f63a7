# backend/cards.py
from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional

from backend.error_handler import BackendError
from backend.logging_config import get_logger
from backend.models import SavedCard

logger = get_logger(__name__)

TABLE = "saved_cards"


def detect_card_brand(card_number: str) -> str:
    # Simple brand detection based on the leading digits
    number = card_number or ""
    if number.startswith("4"):
        return "Visa"
    if re.match(r"^5[1-5]", number):
        return "Mastercard"
    if re.match(r"^3[47]", number):
        return "American Express"
    if re.match(r"^6(?:011|5)", number):
        return "Discover"
    return "Unknown"


def card_row(user_id: str, values: Mapping[str, Any], *, is_default: bool) -> dict:
    """
    Row for a newly entered card. Only the last four digits are stored;
    the full number and CVV never leave this function.
    """
    number = re.sub(r"[\s-]", "", str(values.get("card_number") or ""))
    return {
        "user_id": user_id,
        "card_last_four": number[-4:],
        "card_brand": detect_card_brand(number),
        "card_holder_name": (values.get("card_name") or "").strip(),
        "expiry_date": (values.get("expiry_date") or "").strip(),
        "is_default": is_default,
    }


class SavedCardsRepository:
    def __init__(self, client, user_id: str):
        self.client = client
        self.user_id = user_id

    def _table(self):
        return self.client.table(TABLE)

    def list_cards(self) -> List[SavedCard]:
        resp = (
            self._table()
            .select("*")
            .eq("user_id", self.user_id)
            .order("is_default", desc=True)
            .execute()
        )
        return [SavedCard.from_row(r) for r in (resp.data or [])]

    def add_card(self, values: Mapping[str, Any], *, is_default: Optional[bool] = None) -> SavedCard:
        """
        Save a card. When is_default is not given, the user's first card
        becomes the default.
        """
        if is_default is None:
            is_default = len(self.list_cards()) == 0

        resp = self._table().insert([card_row(self.user_id, values, is_default=is_default)]).execute()
        data = resp.data or []
        if not data:
            raise BackendError("Saving the card returned no rows.")
        card = SavedCard.from_row(data[0])
        logger.info("saved %s card ending %s for user %s", card.card_brand, card.card_last_four, self.user_id)
        return card

    def delete_card(self, card_id: str) -> None:
        self._table().delete().eq("id", card_id).eq("user_id", self.user_id).execute()
        logger.info("deleted card %s for user %s", card_id, self.user_id)

    def set_default_card(self, card_id: str) -> None:
        """
        Mark one card as the user's default.

        The chosen card is flagged first, then every other card is unset, so a
        failure between the two requests can leave two defaults but never
        zero; retrying the call converges.
        """
        resp = (
            self._table()
            .update({"is_default": True})
            .eq("id", card_id)
            .eq("user_id", self.user_id)
            .execute()
        )
        if not resp.data:
            raise BackendError(f"Card {card_id} not found.")

        (
            self._table()
            .update({"is_default": False})
            .eq("user_id", self.user_id)
            .neq("id", card_id)
            .execute()
        )
        logger.info("card %s is now the default for user %s", card_id, self.user_id)
