"""Tests for report generation."""

from pairwise_ranker.models import Item
from pairwise_ranker.ranking import build_standings, create_algorithm
from pairwise_ranker.services.reporting import (
    export_standings_csv,
    format_score,
    generate_leaderboard_report,
    standing_headers,
    standing_rows,
)


class TestFormatting:
    """Tests for score formatting."""

    def test_wins_whole_numbers(self):
        """Test wins print without decimals."""
        assert format_score("wins", 3) == "3"

    def test_ratings_two_decimals(self):
        """Test ratings print with two decimals."""
        assert format_score("elo", 1016.0) == "1016.00"

    def test_headers(self):
        """Test headers follow the algorithm's columns."""
        assert standing_headers(create_algorithm("glicko")) == ["Rank", "Name", "Rating", "RD"]
        assert standing_headers(create_algorithm("win_count")) == ["Rank", "Name", "Wins"]


class TestLeaderboard:
    """Tests for the markdown leaderboard."""

    def test_rows_in_rank_order(self):
        """Test rows follow the standings."""
        algorithm = create_algorithm("trueskill")
        items = [Item("low", mu=20.0), Item("high", mu=30.0, sigma=7.5)]
        rows = standing_rows(build_standings(items, algorithm), algorithm)
        assert rows == [["1", "high", "30.00", "7.50"], ["2", "low", "20.00", "8.33"]]

    def test_report_content(self):
        """Test the report has a title, description, and table."""
        algorithm = create_algorithm("win_count")
        items = [Item("tea", wins=2), Item("coffee", wins=1)]
        report = generate_leaderboard_report(
            build_standings(items, algorithm), algorithm, "Drinks", description="3 votes"
        )
        lines = report.splitlines()
        assert lines[0] == "# Final Rankings (Win Rate): Drinks"
        assert "3 votes" in lines
        assert "| Rank" in report
        assert report.index("tea") < report.index("coffee")

    def test_csv_export(self, tmp_path):
        """Test CSV rows carry raw scores."""
        algorithm = create_algorithm("bayesian")
        items = [Item("a", wins=1, bayesian_score=0.5)]
        path = export_standings_csv(
            build_standings(items, algorithm), algorithm, tmp_path / "r" / "out.csv"
        )
        assert path.read_text().splitlines() == ["rank,name,bayesian_score,wins", "1,a,0.5,1"]

    def test_report_keeps_two_decimals(self):
        """Test formatted scores are not re-parsed by the table renderer."""
        algorithm = create_algorithm("elo")
        report = generate_leaderboard_report(build_standings([Item("x")], algorithm), algorithm, "T")
        assert "1000.00" in report
