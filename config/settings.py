"""
Configuration settings for the hotel review service.

Centralized configuration for the store, aggregation and CLI.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"

# Seed dataset loaded into the in-memory store at startup
SEED_REVIEWS_PATH = DATA_ROOT / "reviews.json"

# Rating bounds (inclusive)
MIN_RATING = 1
MAX_RATING = 5

# Sub-rating categories: stats key -> review field
RATING_CATEGORIES = {
    "cleanliness": "cleanliness_rating",
    "comfort": "comfort_rating",
    "location": "location_rating",
    "value": "value_rating",
}

# Simulated service latency in seconds, per operation.
# Multiplied by LATENCY_SCALE; 0 disables the delay entirely.
OPERATION_LATENCY_SECONDS = {
    "get_all_reviews": 0.200,
    "get_review_by_id": 0.150,
    "get_hotel_reviews": 0.300,
    "get_user_reviews": 0.250,
    "create_review": 0.400,
    "update_review": 0.350,
    "delete_review": 0.300,
    "get_review_stats": 0.200,
    "mark_helpful": 0.150,
}
LATENCY_SCALE = float(os.getenv("REVIEW_LATENCY_SCALE", "0"))

# Report output
REPORT_CATEGORY_DECIMALS = 2

# Logging
LOG_LEVEL = os.getenv("REVIEW_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "reviews.log"
