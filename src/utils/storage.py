"""
Storage utility.

File I/O helpers for the seed dataset, review snapshots and report output.
"""

import json
import os
import shutil
import logging
from typing import Dict, List

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Manages file I/O for the review service.

    Handles:
    - Seed reviews (data/reviews.json)
    - Review snapshots (output/reviews_snapshot.json)
    - Report metadata (output/hotel_ratings_YYYY-MM-DD_metadata.json)
    """

    def __init__(self, output_root: str):
        """
        Initialize storage manager.

        Args:
            output_root: Directory for snapshots and reports
        """
        self.output_root = str(output_root)
        os.makedirs(self.output_root, exist_ok=True)

        logger.info(f"Initialized StorageManager with output_root={self.output_root}")

    @staticmethod
    def load_seed_reviews(seed_path: str) -> List[Dict]:
        """
        Load the mock review dataset.

        Args:
            seed_path: Path to a JSON array of review dicts

        Returns:
            List of review dicts (camelCase keys)

        Raises:
            FileNotFoundError: If the seed file doesn't exist
            ValueError: If the file isn't a JSON array
        """
        seed_path = str(seed_path)
        if not os.path.exists(seed_path):
            logger.error(f"Seed file not found: {seed_path}")
            raise FileNotFoundError(f"Seed file not found: {seed_path}")

        try:
            with open(seed_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse seed JSON {seed_path}: {e}")
            raise

        if not isinstance(data, list):
            raise ValueError(f"Seed file must contain a JSON array: {seed_path}")

        logger.debug(f"Loaded {len(data)} seed reviews from {seed_path}")
        return data

    def save_json(self, data, filename: str) -> str:
        """
        Write JSON to the output directory with atomic write pattern.
        Keeps a .backup of any file it replaces.

        Args:
            data: JSON-serializable object
            filename: File name relative to output_root

        Returns:
            Path of the written file
        """
        filepath = os.path.join(self.output_root, filename)

        if os.path.exists(filepath):
            backup_path = f"{filepath}.backup"
            shutil.copy(filepath, backup_path)
            logger.debug(f"Created backup: {backup_path}")

        temp_path = f"{filepath}.tmp"
        try:
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            os.replace(temp_path, filepath)
            logger.info(f"Saved {filepath}")
        except Exception as e:
            logger.error(f"Failed to save {filepath}: {e}")
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

        return filepath

    def save_snapshot(self, reviews: List[Dict], filename: str = "reviews_snapshot.json") -> str:
        """
        Dump the current review collection in seed-file format.

        Args:
            reviews: List of review dicts (camelCase keys)
            filename: Snapshot file name

        Returns:
            Path of the snapshot file
        """
        path = self.save_json(reviews, filename)
        logger.info(f"Saved snapshot of {len(reviews)} reviews")
        return path
