import uuid

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from pennypace.models.base import Base, TimestampMixin, generate_uuid

DEFAULT_ICON = "💰"
DEFAULT_COLOR = "#6366f1"
FALLBACK_CATEGORY = "Other"


class Category(TimestampMixin, Base):
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=generate_uuid)
    user_id: Mapped[str | None] = mapped_column(
        String(100), nullable=True, index=True
    )  # null = preset
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    keywords: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    icon: Mapped[str] = mapped_column(String(50), nullable=False, default=DEFAULT_ICON)
    color: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_COLOR)
    is_preset: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


# Preset categories and the description keywords that select them.
# Order matters: the first category with a matching keyword wins.
PRESET_CATEGORY_RULES: dict[str, list[str]] = {
    "Food & Dining": [
        "restaurant", "cafe", "coffee", "food", "dining", "lunch", "dinner", "breakfast",
        "mcdonald", "starbucks", "uber eats", "doordash", "grubhub", "pizza", "burger",
        "subway", "kfc", "taco", "sushi", "chinese", "italian", "mexican",
    ],
    "Transportation": [
        "uber", "lyft", "taxi", "gas", "fuel", "parking", "metro", "bus",
        "train", "airport", "flight", "car", "vehicle", "maintenance", "repair",
        "petrol", "diesel", "gasoline",
    ],
    "Shopping": [
        "amazon", "target", "walmart", "store", "shop", "purchase", "buy", "mall",
        "retail", "clothing", "apparel", "electronics", "online",
    ],
    "Bills & Utilities": [
        "electric", "water", "gas bill", "internet", "phone", "cable", "utility",
        "rent", "mortgage", "insurance", "subscription", "netflix", "spotify",
    ],
    "Entertainment": [
        "movie", "cinema", "theater", "concert", "event", "ticket", "game", "gaming",
        "streaming", "music", "book", "magazine",
    ],
    "Health & Fitness": [
        "gym", "pharmacy", "doctor", "hospital", "medical", "medicine", "drug",
        "vitamin", "supplement", "fitness", "yoga", "pilates",
    ],
    "Education": [
        "school", "tuition", "course", "textbook", "education", "learning",
        "university", "college", "class",
    ],
    FALLBACK_CATEGORY: [],
}
