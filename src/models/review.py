"""
Review data model.

Represents a guest review of a hotel, as stored in the review store
and serialized in the mock dataset.
"""

from dataclasses import dataclass, field, replace
from typing import List


# snake_case field -> camelCase JSON key used by the mock dataset
JSON_FIELD_NAMES = {
    "review_id": "Id",
    "hotel_id": "hotelId",
    "user_id": "userId",
    "overall_rating": "overallRating",
    "cleanliness_rating": "cleanlinessRating",
    "comfort_rating": "comfortRating",
    "location_rating": "locationRating",
    "value_rating": "valueRating",
    "traveler_type": "travelerType",
    "review_text": "reviewText",
    "photos": "photos",
    "helpful_votes": "helpfulVotes",
    "created_at": "createdAt",
}

RATING_FIELDS = (
    "overall_rating",
    "cleanliness_rating",
    "comfort_rating",
    "location_rating",
    "value_rating",
)

_FIELDS_BY_JSON_NAME = {json_name: name for name, json_name in JSON_FIELD_NAMES.items()}


def normalize_field_names(data: dict) -> dict:
    """
    Map camelCase JSON keys to dataclass field names.

    Keys that are already field names pass through; unknown keys are
    kept as-is so the caller can reject them.
    """
    normalized = {}
    for key, value in data.items():
        normalized[_FIELDS_BY_JSON_NAME.get(key, key)] = value
    return normalized


@dataclass
class Review:
    """
    A guest review of a hotel.
    `review_id` and `created_at` are fixed once the review is stored.
    """
    review_id: int
    hotel_id: str  # Stored as string; integer ids are normalized
    user_id: str
    overall_rating: int  # 1-5 stars
    cleanliness_rating: int
    comfort_rating: int
    location_rating: int
    value_rating: int
    traveler_type: str = ""  # "Couple", "Business", "Family", ... (open set)
    review_text: str = ""
    photos: List[str] = field(default_factory=list)
    helpful_votes: int = 0
    created_at: str = ""  # ISO-8601 UTC, e.g. 2024-06-01T10:00:00Z

    def copy(self) -> "Review":
        """Return an independent copy (the photo list is not shared)."""
        return replace(self, photos=list(self.photos))

    @classmethod
    def from_dict(cls, data: dict) -> "Review":
        """Create Review from a JSON dict (camelCase or snake_case keys)."""
        data = normalize_field_names(data)
        return cls(
            review_id=int(data["review_id"]),
            hotel_id=str(data["hotel_id"]),
            user_id=str(data["user_id"]),
            overall_rating=data["overall_rating"],
            cleanliness_rating=data["cleanliness_rating"],
            comfort_rating=data["comfort_rating"],
            location_rating=data["location_rating"],
            value_rating=data["value_rating"],
            traveler_type=data.get("traveler_type", ""),
            review_text=data.get("review_text", ""),
            photos=list(data.get("photos", [])),
            helpful_votes=data.get("helpful_votes", 0),
            created_at=data.get("created_at", "")
        )

    def to_dict(self) -> dict:
        """Convert to the camelCase JSON shape of the mock dataset."""
        return {
            json_name: (list(self.photos) if name == "photos" else getattr(self, name))
            for name, json_name in JSON_FIELD_NAMES.items()
        }
