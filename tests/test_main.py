"""
CLI tests. Run main() in-process against the bundled seed dataset.
"""

import json
import os
import tempfile

import pytest

import config.settings as settings
import main


@pytest.fixture(autouse=True)
def log_to_tmp(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "LOG_FILE", str(tmp_path / "reviews.log"))


def run_cli(argv):
    with pytest.raises(SystemExit) as exc_info:
        main.main(argv)
    return exc_info.value.code


def test_stats_command(capsys):
    assert run_cli(["stats", "5"]) == 0

    stats = json.loads(capsys.readouterr().out)
    assert stats["totalReviews"] == 5
    assert stats["averageRating"] == 4.4
    assert stats["ratingBreakdown"] == {"5": 3, "4": 1, "3": 1, "2": 0, "1": 0}


def test_list_by_hotel_command(capsys):
    assert run_cli(["list", "--hotel", "1"]) == 0

    reviews = json.loads(capsys.readouterr().out)
    assert reviews
    assert {r["hotelId"] for r in reviews} == {"1"}


def test_show_missing_review_exits_nonzero(capsys):
    assert run_cli(["show", "999"]) == 1
    assert "Review not found" in capsys.readouterr().err


def test_report_command(capsys):
    with tempfile.TemporaryDirectory() as tmpdir:
        assert run_cli(["report", "--output-dir", tmpdir, "--date", "2024-07-01"]) == 0
        assert os.path.exists(os.path.join(tmpdir, "hotel_ratings_2024-07-01.csv"))
        assert os.path.exists(os.path.join(tmpdir, "hotel_ratings_2024-07-01_metadata.json"))


def test_snapshot_command():
    with tempfile.TemporaryDirectory() as tmpdir:
        assert run_cli(["snapshot", "--output-dir", tmpdir]) == 0

        with open(os.path.join(tmpdir, "reviews_snapshot.json")) as f:
            snapshot = json.load(f)
        with open(settings.SEED_REVIEWS_PATH) as f:
            seed = json.load(f)
        assert snapshot == seed


def test_missing_seed_file_exits_nonzero():
    assert run_cli(["--seed-path", "/nonexistent/reviews.json", "stats", "5"]) == 1


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
