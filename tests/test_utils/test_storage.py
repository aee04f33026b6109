"""
Unit tests for StorageManager and the Review JSON mapping.
"""

import json
import os
import tempfile

import pytest

from src.models.review import Review
from src.utils.storage import StorageManager


SEED_REVIEW = {
    "Id": 1,
    "hotelId": "1",
    "userId": "user1",
    "overallRating": 5,
    "cleanlinessRating": 5,
    "comfortRating": 4,
    "locationRating": 4,
    "valueRating": 3,
    "travelerType": "Couple",
    "reviewText": "Great",
    "photos": ["https://example.com/a.jpg"],
    "helpfulVotes": 3,
    "createdAt": "2024-01-15T10:30:00Z"
}


def test_review_from_dict_and_back():
    """Test camelCase JSON -> Review -> camelCase JSON."""
    review = Review.from_dict(SEED_REVIEW)

    assert review.review_id == 1
    assert review.overall_rating == 5
    assert review.traveler_type == "Couple"
    assert review.to_dict() == SEED_REVIEW


def test_review_from_dict_normalizes_foreign_keys():
    review = Review.from_dict({**SEED_REVIEW, "Id": "7", "hotelId": 12})

    assert review.review_id == 7
    assert review.hotel_id == "12"


def test_review_copy_is_independent():
    review = Review.from_dict(SEED_REVIEW)
    duplicate = review.copy()
    duplicate.photos.append("https://example.com/b.jpg")

    assert review.photos == ["https://example.com/a.jpg"]
    assert duplicate != review


def test_load_seed_reviews():
    with tempfile.TemporaryDirectory() as tmpdir:
        seed_path = os.path.join(tmpdir, "reviews.json")
        with open(seed_path, "w") as f:
            json.dump([SEED_REVIEW], f)

        assert StorageManager.load_seed_reviews(seed_path) == [SEED_REVIEW]


def test_load_seed_reviews_rejects_non_array():
    with tempfile.TemporaryDirectory() as tmpdir:
        seed_path = os.path.join(tmpdir, "reviews.json")
        with open(seed_path, "w") as f:
            json.dump({"reviews": []}, f)

        with pytest.raises(ValueError, match="JSON array"):
            StorageManager.load_seed_reviews(seed_path)


def test_load_seed_reviews_invalid_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        seed_path = os.path.join(tmpdir, "reviews.json")
        with open(seed_path, "w") as f:
            f.write("not json{{{")

        with pytest.raises(json.JSONDecodeError):
            StorageManager.load_seed_reviews(seed_path)


def test_save_json_keeps_backup():
    """Test that overwriting a file leaves the previous version as .backup."""
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(os.path.join(tmpdir, "out"))

        path = storage.save_json({"version": 1}, "data.json")
        storage.save_json({"version": 2}, "data.json")

        with open(path) as f:
            assert json.load(f) == {"version": 2}
        with open(f"{path}.backup") as f:
            assert json.load(f) == {"version": 1}
        assert not os.path.exists(f"{path}.tmp")


def test_save_snapshot():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        path = storage.save_snapshot([SEED_REVIEW])

        assert path == os.path.join(tmpdir, "reviews_snapshot.json")
        with open(path) as f:
            assert json.load(f) == [SEED_REVIEW]


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
