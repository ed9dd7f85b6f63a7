# backend/profiles.py
from backend.logging_config import get_logger
from backend.models import Profile

logger = get_logger(__name__)

TABLE = "profiles"


class ProfilesRepository:
    def __init__(self, client, user_id: str):
        self.client = client
        self.user_id = user_id

    def get_profile(self) -> Profile:
        resp = (
            self.client.table(TABLE)
            .select("id, first_name, last_name, phone")
            .eq("id", self.user_id)
            .limit(1)
            .execute()
        )
        rows = resp.data or []
        if not rows:
            return Profile(id=self.user_id)
        return Profile.from_row(rows[0])

    def update_profile(self, first_name: str, last_name: str, phone: str) -> Profile:
        payload = {
            "id": self.user_id,
            "first_name": (first_name or "").strip(),
            "last_name": (last_name or "").strip(),
            "phone": (phone or "").strip(),
        }
        resp = self.client.table(TABLE).upsert(payload).execute()
        rows = resp.data or [payload]
        logger.info("updated profile for user %s", self.user_id)
        return Profile.from_row(rows[0])
