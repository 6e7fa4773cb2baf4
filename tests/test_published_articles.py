"""Tests for locating the last two published articles."""

import pytest

from envrac.analysis import find_last_two
from envrac.errors import InsufficientHistoryError, UpstreamError
from envrac.models import ContentEntry, PublishedArticleRef

from conftest import FakeContentRepository, dirs, files

ROOT = "content/en-vracs"


class TestPublishedArticleRef:
    def test_normalizes_name_and_date(self):
        ref = PublishedArticleRef.from_entry("2024-05-01-EnVrac.md")

        assert ref.name == "2024-05-01-envrac"
        assert ref.date == "2024-05-01"
        assert ref.year is None
        assert ref.year_prefix == "2024"

    def test_keeps_names_without_extension(self):
        assert PublishedArticleRef.from_entry("2024-05-01-envrac").name == "2024-05-01-envrac"


class TestFlatLayout:
    def test_returns_two_greatest_names(self):
        repo = FakeContentRepository(
            {
                ROOT: files(
                    "2024-04-17-envrac.md",
                    "_index.md",
                    "2024-05-01-EnVrac.md",
                    "2024-04-24-envrac.md",
                )
            }
        )

        first, second = find_last_two(repo, ROOT)

        assert (first.name, first.date) == ("2024-05-01-envrac", "2024-05-01")
        assert (second.name, second.date) == ("2024-04-24-envrac", "2024-04-24")
        assert first.year is None and second.year is None
        assert repo.listed == [ROOT]

    def test_index_file_never_counts(self):
        repo = FakeContentRepository({ROOT: files("_index.md", "2024-05-01-envrac.md")})

        with pytest.raises(InsufficientHistoryError) as excinfo:
            find_last_two(repo, ROOT)
        assert excinfo.value.found == 1


class TestYearPartitionedLayout:
    def test_descends_into_newest_year_first(self):
        repo = FakeContentRepository(
            {
                ROOT: dirs("2023", "2024") + files("_index.md"),
                f"{ROOT}/2024": files("2024-01-10-envrac.md", "2024-01-03-envrac.md", "_index.md"),
                f"{ROOT}/2023": files("2023-12-27-envrac.md"),
            }
        )

        first, second = find_last_two(repo, ROOT)

        assert [first.name, second.name] == ["2024-01-10-envrac", "2024-01-03-envrac"]
        assert first.year == "2024"
        assert repo.listed == [ROOT, f"{ROOT}/2024"]

    def test_merges_previous_year_when_current_is_short(self):
        repo = FakeContentRepository(
            {
                ROOT: dirs("2023", "2024"),
                f"{ROOT}/2024": files("_index.md", "2024-01-03-envrac.md"),
                f"{ROOT}/2023": files("2023-12-20-envrac.md", "2023-12-27-envrac.md"),
            }
        )

        first, second = find_last_two(repo, ROOT)

        assert [first.name, second.name] == ["2024-01-03-envrac", "2023-12-27-envrac"]
        assert [first.year, second.year] == ["2024", "2023"]
        assert repo.listed == [ROOT, f"{ROOT}/2024", f"{ROOT}/2023"]

    def test_only_two_newest_years_are_visited(self):
        repo = FakeContentRepository(
            {
                ROOT: dirs("2022", "2023", "2024"),
                f"{ROOT}/2024": [],
                f"{ROOT}/2023": files("2023-12-27-envrac.md"),
                f"{ROOT}/2022": files("2022-12-28-envrac.md", "2022-12-21-envrac.md"),
            }
        )

        with pytest.raises(InsufficientHistoryError):
            find_last_two(repo, ROOT)
        assert f"{ROOT}/2022" not in repo.listed

    def test_top_level_files_ignored_when_years_exist(self):
        repo = FakeContentRepository(
            {
                ROOT: dirs("2024") + files("2099-01-01-envrac.md"),
                f"{ROOT}/2024": files("2024-01-10-envrac.md", "2024-01-03-envrac.md"),
            }
        )

        first, _ = find_last_two(repo, ROOT)
        assert first.name == "2024-01-10-envrac"

    def test_falls_back_to_flat_files_after_layout_change(self):
        repo = FakeContentRepository(
            {
                ROOT: dirs("2025") + files("_index.md", "2024-12-18-envrac.md", "2024-12-25-envrac.md"),
                f"{ROOT}/2025": files("2025-01-01-envrac.md"),
            }
        )

        first, second = find_last_two(repo, ROOT)

        assert [first.name, second.name] == ["2025-01-01-envrac", "2024-12-25-envrac"]
        assert [first.year, second.year] == ["2025", None]

    def test_flat_fallback_still_needs_two_articles(self):
        repo = FakeContentRepository(
            {
                ROOT: dirs("2025") + files("_index.md"),
                f"{ROOT}/2025": files("2025-01-01-envrac.md"),
            }
        )

        with pytest.raises(InsufficientHistoryError) as excinfo:
            find_last_two(repo, ROOT)
        assert excinfo.value.found == 1

    def test_nested_directories_are_not_articles(self):
        repo = FakeContentRepository(
            {
                ROOT: dirs("2024"),
                f"{ROOT}/2024": files("2024-01-10-envrac.md") + [ContentEntry(name="images", type="dir")],
            }
        )

        with pytest.raises(InsufficientHistoryError):
            find_last_two(repo, ROOT)


class TestFailures:
    def test_empty_repository(self):
        with pytest.raises(InsufficientHistoryError) as excinfo:
            find_last_two(FakeContentRepository({}), ROOT)
        assert excinfo.value.found == 0

    def test_listing_error_propagates(self):
        class FailingRepo:
            def list_dir(self, path):
                raise UpstreamError(404, '{"message": "Not Found"}', service="content host")

        with pytest.raises(UpstreamError) as excinfo:
            find_last_two(FailingRepo(), ROOT)
        assert excinfo.value.status == 404
