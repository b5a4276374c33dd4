import pytest

from radarr_grab.models.release import Release


def make_release(title: str, score=None, **extra) -> Release:
    """Builds a release the way Radarr's JSON would describe it."""
    payload = {
        "guid": f"guid-{title}",
        "indexerId": 1,
        "title": title,
        "customFormatScore": score,
    }
    payload.update(extra)
    return Release.model_validate(payload)


class FakeRadarrClient:
    """Stands in for RadarrAPIClient; replays scripted responses."""

    def __init__(self, release_responses=None, grab_result=True, movie=None):
        self.release_responses = list(release_responses or [])
        self.grab_result = grab_result
        self.movie = movie or {"title": "Some Movie", "year": 2021}
        self.get_releases_calls = []
        self.download_calls = []

    async def get_releases(self, movie_id):
        self.get_releases_calls.append(movie_id)
        response = self.release_responses.pop(0) if self.release_responses else []
        if isinstance(response, Exception):
            raise response
        return response

    async def get_movie(self, movie_id):
        return dict(self.movie, id=movie_id)

    async def download_movie(self, guid, indexer_id):
        self.download_calls.append((guid, indexer_id))
        if isinstance(self.grab_result, Exception):
            raise self.grab_result
        return self.grab_result


class Recorder:
    """Collects progress and error messages in call order."""

    def __init__(self):
        self.events = []

    def progress(self, message):
        self.events.append(("progress", message))

    def error(self, message):
        self.events.append(("error", message))

    @property
    def errors(self):
        return [m for kind, m in self.events if kind == "error"]

    @property
    def progress_messages(self):
        return [m for kind, m in self.events if kind == "progress"]


@pytest.fixture
def recorder():
    return Recorder()
