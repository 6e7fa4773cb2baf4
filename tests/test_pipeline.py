"""End-to-end pipeline tests with fake remote services."""

from datetime import date
from unittest.mock import Mock

import pytest

from envrac.errors import InsufficientHistoryError, PublishError, UpstreamError
from envrac.pipeline import run_pipeline

from conftest import FakeContentRepository, dirs, files, tasks_response

ROOT = "content/en-vracs"
TODAY = date(2024, 5, 8)

TASKS = {
    "results": [
        {"content": "Conf talk", "description": "great", "section_id": "181074705"},
        {"content": "Some post", "description": "", "section_id": "179438112"},
        {"content": "Private note", "description": "not for the blog", "section_id": "000"},
    ]
}


@pytest.fixture
def repo():
    return FakeContentRepository(
        {
            ROOT: dirs("2023", "2024") + files("_index.md"),
            f"{ROOT}/2024": files("2024-05-01-envrac.md", "2024-04-24-envrac.md"),
        }
    )


@pytest.fixture
def session():
    mock = Mock()
    mock.get.return_value = tasks_response(TASKS)
    return mock


class TestRunPipeline:
    def test_publishes_once(self, settings, classifier, repo, session):
        result = run_pipeline(settings, today=TODAY, classifier=classifier, repo=repo, session=session)

        assert result.published is True
        assert result.commit_sha == "abc1234def"
        assert result.path == "content/en-vracs/2024/2024-05-08-envrac.md"
        assert result.task_count == 3
        assert result.published_count == 2
        assert len(repo.created) == 1
        committed = repo.created[0]
        assert committed["path"] == result.path
        assert committed["content"] == result.article.text
        assert committed["branch"] == "main"

    def test_article_content(self, settings, classifier, repo, session):
        result = run_pipeline(settings, today=TODAY, classifier=classifier, repo=repo, session=session)
        text = result.article.text

        assert 'title: "[En Vrac] - 08 Mai"' in text
        assert "2024/2024-05-01-envrac/" in text
        assert "- Conf talk - great\n" in text
        assert "- Some post\n" in text
        assert "Private note" not in text
        assert text.index("## 🎞️ Youtube") < text.index("## 📖 Articles")

    def test_dry_run_does_not_commit(self, settings, classifier, repo, session):
        result = run_pipeline(settings, dry_run=True, today=TODAY, classifier=classifier, repo=repo, session=session)

        assert result.published is False
        assert result.commit_sha is None
        assert repo.created == []
        assert result.article.body

    def test_insufficient_history_stops_before_fetch_and_publish(self, settings, classifier, session):
        repo = FakeContentRepository({ROOT: files("_index.md", "2024-05-01-envrac.md")})

        with pytest.raises(InsufficientHistoryError):
            run_pipeline(settings, today=TODAY, classifier=classifier, repo=repo, session=session)

        session.get.assert_not_called()
        assert repo.created == []

    def test_task_fetch_failure_publishes_nothing(self, settings, classifier, repo):
        session = Mock()
        session.get.return_value = tasks_response(None, status_code=401, text="Unauthorized")

        with pytest.raises(UpstreamError):
            run_pipeline(settings, today=TODAY, classifier=classifier, repo=repo, session=session)

        assert repo.created == []

    def test_remote_conflict_surfaces_as_publish_error(self, settings, classifier, repo, session):
        def reject(*args, **kwargs):
            raise PublishError(422, '{"message": "sha wasn\'t supplied"}', service="content host")

        repo.create_file = reject

        with pytest.raises(PublishError):
            run_pipeline(settings, today=TODAY, classifier=classifier, repo=repo, session=session)

    def test_flat_publish_path(self, settings, classifier, repo, session):
        settings.year_folder = False

        result = run_pipeline(settings, today=TODAY, classifier=classifier, repo=repo, session=session)

        assert result.path == "content/en-vracs/2024-05-08-envrac.md"
