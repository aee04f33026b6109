"""
Review service exceptions.
"""


class ReviewServiceError(Exception):
    """Base class for all review service errors."""


class ReviewNotFoundError(ReviewServiceError, LookupError):
    """Raised when an operation addresses a review id that doesn't exist."""

    def __init__(self, review_id):
        self.review_id = review_id
        super().__init__(f"Review not found: {review_id}")


class ReviewValidationError(ReviewServiceError, ValueError):
    """Raised when review data is malformed (missing fields, bad ratings)."""
