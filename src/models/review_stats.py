"""
Review statistics data model.

Derived summary of a hotel's reviews. Never stored; recomputed per request.
"""

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class ReviewStats:
    """
    Per-hotel review summary shown on the hotel detail page.
    """
    total_reviews: int = 0
    average_rating: float = 0  # Rounded to one decimal place
    rating_breakdown: Dict[int, int] = field(default_factory=dict)  # star -> count
    category_averages: Dict[str, float] = field(default_factory=dict)  # unrounded

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict (breakdown ordered 5 -> 1)."""
        return {
            "totalReviews": self.total_reviews,
            "averageRating": self.average_rating,
            "ratingBreakdown": {
                str(star): self.rating_breakdown[star]
                for star in sorted(self.rating_breakdown, reverse=True)
            },
            "categoryAverages": dict(self.category_averages)
        }
