"""
Review Store - Single source of truth for hotel reviews.

Owns the in-memory review collection and exposes CRUD by id plus
lookups by hotel and author.
"""

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Union

from src.models.review import (
    JSON_FIELD_NAMES,
    RATING_FIELDS,
    Review,
    normalize_field_names,
)
from src.registry.exceptions import ReviewNotFoundError, ReviewValidationError
from src.utils.storage import StorageManager
import config.settings as settings

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("hotel_id", "user_id") + RATING_FIELDS

# Assigned by the store; callers can't set them on create
STORE_MANAGED_FIELDS = ("review_id", "created_at", "helpful_votes")

# Fixed for the lifetime of a review
IMMUTABLE_FIELDS = ("review_id", "created_at")


def _utc_now_iso() -> str:
    """Current UTC time, millisecond precision, 'Z' suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class ReviewStore:
    """
    In-memory store of hotel reviews.

    Every read returns copies, so callers can't mutate stored records.
    Writes are serialized through a single lock: `create` reads the
    highest id and appends in one step.
    """

    def __init__(self, reviews: Optional[Iterable[Union[Review, Dict]]] = None):
        """
        Initialize the store, optionally with seed reviews.

        Args:
            reviews: Review objects or review dicts (camelCase or snake_case keys)

        Raises:
            ReviewValidationError: If a seed review is malformed or an id repeats
        """
        self._reviews: List[Review] = []
        self._last_id = 0  # Highest id ever held; ids are never reused
        self._lock = threading.RLock()

        for item in reviews or []:
            review = item.copy() if isinstance(item, Review) else self._review_from_dict(item)
            review = replace(review, hotel_id=str(review.hotel_id), user_id=str(review.user_id))
            self._validate(review.__dict__, partial=False)
            if any(r.review_id == review.review_id for r in self._reviews):
                raise ReviewValidationError(f"Duplicate review id in seed data: {review.review_id}")
            self._reviews.append(review)
            self._last_id = max(self._last_id, review.review_id)

        logger.info(f"Initialized ReviewStore with {len(self._reviews)} reviews")

    @classmethod
    def from_seed(cls, seed_path: str = None) -> "ReviewStore":
        """
        Build a store from the mock dataset on disk.

        Args:
            seed_path: Path to reviews JSON (default: settings.SEED_REVIEWS_PATH)
        """
        seed_path = seed_path or settings.SEED_REVIEWS_PATH
        return cls(StorageManager.load_seed_reviews(seed_path))

    def __len__(self) -> int:
        return len(self._reviews)

    # Reads

    def list(self) -> List[Review]:
        """Return copies of all reviews in collection order."""
        with self._lock:
            return [r.copy() for r in self._reviews]

    def get_by_id(self, review_id) -> Review:
        """
        Retrieve a review by id.

        Args:
            review_id: Review id (int or numeric string)

        Raises:
            ReviewNotFoundError: If no review has that id
        """
        with self._lock:
            return self._reviews[self._index_of(review_id)].copy()

    def list_by_hotel(self, hotel_id) -> List[Review]:
        """Return copies of a hotel's reviews in collection order ([] if none)."""
        hotel_id = str(hotel_id)
        with self._lock:
            matches = [r.copy() for r in self._reviews if r.hotel_id == hotel_id]
        logger.debug(f"Found {len(matches)} reviews for hotel {hotel_id}")
        return matches

    def list_by_user(self, user_id) -> List[Review]:
        """Return copies of a user's reviews in collection order ([] if none)."""
        user_id = str(user_id)
        with self._lock:
            matches = [r.copy() for r in self._reviews if r.user_id == user_id]
        logger.debug(f"Found {len(matches)} reviews by user {user_id}")
        return matches

    def hotel_ids(self) -> List[str]:
        """Distinct hotel ids, in order of first appearance."""
        with self._lock:
            return list(dict.fromkeys(r.hotel_id for r in self._reviews))

    # Writes

    def create(self, data: Dict) -> Review:
        """
        Add a new review.

        Assigns the next id, stamps created_at and starts helpful_votes at 0.
        Any of those three supplied in `data` are ignored.

        Args:
            data: Review fields (camelCase or snake_case keys)

        Returns:
            Copy of the stored review

        Raises:
            ReviewValidationError: If required fields are missing or invalid
        """
        fields = normalize_field_names(data)
        for name in STORE_MANAGED_FIELDS:
            if name in fields:
                logger.debug(f"Ignoring store-managed field '{name}' on create")
                fields.pop(name)

        self._validate(fields, partial=False)
        fields = self._coerce(fields)

        with self._lock:
            review = Review(
                review_id=self._last_id + 1,
                created_at=_utc_now_iso(),
                helpful_votes=0,
                **fields
            )
            self._reviews.append(review)
            self._last_id = review.review_id

        logger.info(f"Created review {review.review_id} for hotel {review.hotel_id}")
        return review.copy()

    def update(self, review_id, updates: Dict) -> Review:
        """
        Merge `updates` over an existing review.

        Fields not in `updates` are kept. review_id and created_at can't be
        overwritten; attempts are logged and ignored.

        Args:
            review_id: Target review id
            updates: Partial review fields (camelCase or snake_case keys)

        Returns:
            Copy of the updated review

        Raises:
            ReviewNotFoundError: If no review has that id
            ReviewValidationError: If an updated field is invalid
        """
        fields = normalize_field_names(updates)
        for name in IMMUTABLE_FIELDS:
            if name in fields:
                logger.warning(f"Ignoring attempt to overwrite '{name}' on review {review_id}")
                fields.pop(name)

        with self._lock:
            index = self._index_of(review_id)
            self._validate(fields, partial=True)
            updated = replace(self._reviews[index], **self._coerce(fields))
            self._reviews[index] = updated

        logger.info(f"Updated review {updated.review_id}: {sorted(fields)}")
        return updated.copy()

    def delete(self, review_id) -> Review:
        """
        Remove a review.

        Returns:
            Copy of the removed review

        Raises:
            ReviewNotFoundError: If no review has that id
        """
        with self._lock:
            removed = self._reviews.pop(self._index_of(review_id))

        logger.info(f"Deleted review {removed.review_id}")
        return removed.copy()

    def add_helpful_vote(self, review_id) -> Review:
        """Increment a review's helpful vote counter by one."""
        with self._lock:
            index = self._index_of(review_id)
            review = self._reviews[index]
            self._reviews[index] = replace(review, helpful_votes=review.helpful_votes + 1)
            return self._reviews[index].copy()

    # Internals

    def _index_of(self, review_id) -> int:
        """Position of a review in the collection; caller holds the lock."""
        try:
            wanted = int(review_id)
        except (TypeError, ValueError):
            raise ReviewNotFoundError(review_id) from None

        for index, review in enumerate(self._reviews):
            if review.review_id == wanted:
                return index
        raise ReviewNotFoundError(review_id)

    @staticmethod
    def _review_from_dict(data: Dict) -> Review:
        """Build a seed Review, turning missing keys into validation errors."""
        fields = normalize_field_names(data)
        missing = [name for name in ("review_id",) + REQUIRED_FIELDS if name not in fields]
        if missing:
            raise ReviewValidationError(f"Seed review missing fields: {missing}")
        try:
            review = Review.from_dict(fields)
        except (TypeError, ValueError) as e:
            raise ReviewValidationError(f"Invalid seed review {fields.get('review_id')}: {e}")
        if review.review_id < 1:
            raise ReviewValidationError(f"Review id must be positive, got {review.review_id}")
        return review

    @staticmethod
    def _coerce(fields: Dict) -> Dict:
        """Normalize foreign keys to strings and copy the photo list."""
        fields = dict(fields)
        for name in ("hotel_id", "user_id"):
            if name in fields:
                fields[name] = str(fields[name])
        if "photos" in fields:
            fields["photos"] = list(fields["photos"])
        return fields

    @staticmethod
    def _validate(fields: Dict, partial: bool) -> None:
        """
        Check review fields before they reach the collection.

        Args:
            fields: snake_case field dict
            partial: If True, required fields may be absent (update)

        Raises:
            ReviewValidationError: On the first problem found
        """
        unknown = sorted(set(fields) - set(JSON_FIELD_NAMES))
        if unknown:
            raise ReviewValidationError(f"Unknown review fields: {unknown}")

        if not partial:
            missing = [name for name in REQUIRED_FIELDS if name not in fields]
            if missing:
                raise ReviewValidationError(f"Missing required review fields: {missing}")

        for name in ("hotel_id", "user_id"):
            if name in fields and (fields[name] is None or str(fields[name]) == ""):
                raise ReviewValidationError(f"{name} must not be empty")

        for name in RATING_FIELDS:
            if name not in fields:
                continue
            value = fields[name]
            # bool is an int subclass; True is not a star rating
            if isinstance(value, bool) or not isinstance(value, int):
                raise ReviewValidationError(f"{name} must be an integer, got {value!r}")
            if not (settings.MIN_RATING <= value <= settings.MAX_RATING):
                raise ReviewValidationError(
                    f"Invalid {name}: {value}. Must be {settings.MIN_RATING}-{settings.MAX_RATING}"
                )

        if "helpful_votes" in fields:
            votes = fields["helpful_votes"]
            if isinstance(votes, bool) or not isinstance(votes, int) or votes < 0:
                raise ReviewValidationError(f"helpful_votes must be a non-negative integer, got {votes!r}")

        if "photos" in fields:
            photos = fields["photos"]
            if not isinstance(photos, (list, tuple)) or not all(isinstance(p, str) for p in photos):
                raise ReviewValidationError("photos must be a list of image URLs")

        for name in ("traveler_type", "review_text", "created_at"):
            if name in fields and not isinstance(fields[name], str):
                raise ReviewValidationError(f"{name} must be a string")
