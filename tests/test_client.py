import asyncio

import pytest
from aiohttp import test_utils, web

from radarr_grab.api.client import RadarrAPIClient
from radarr_grab.exceptions import AuthenticationError, RadarrAPIError

API_KEY = "secret"

RELEASES = [
    {
        "guid": "https://indexer/1",
        "indexerId": 4,
        "title": "Movie.2021.2160p.UHD.BluRay",
        "customFormatScore": 150,
        "indexer": "Indexer A",
        "protocol": "torrent",
        "size": 50_000_000_000,
        "seeders": 12,
        "rejected": False,
        "quality": {
            "quality": {"id": 19, "name": "Bluray-2160p", "source": "bluray", "resolution": 2160},
            "revision": {"version": 1},
        },
        "languages": [{"id": 1, "name": "English"}],
    },
    {
        "guid": "https://indexer/2",
        "indexerId": 4,
        "title": "Movie.2021.720p.WEB",
        "customFormatScore": 0,
    },
]


def build_app(grab_status=200, releases=RELEASES):
    received = {}

    async def get_releases(request):
        if request.headers.get("X-Api-Key") != API_KEY:
            return web.Response(status=401)
        received["movieId"] = request.query.get("movieId")
        return web.json_response(releases)

    async def post_release(request):
        received["grab"] = await request.json()
        if grab_status != 200:
            return web.Response(status=grab_status, text="nope")
        return web.json_response(received["grab"])

    async def system_status(request):
        return web.json_response({"version": "5.2.6"})

    async def get_movie(request):
        movie_id = int(request.match_info["movie_id"])
        return web.json_response({"id": movie_id, "title": "Dune", "year": 2021})

    app = web.Application()
    app.router.add_get("/api/v3/release", get_releases)
    app.router.add_post("/api/v3/release", post_release)
    app.router.add_get("/api/v3/system/status", system_status)
    app.router.add_get("/api/v3/movie/{movie_id}", get_movie)
    return app, received


def run_with_server(app, scenario, api_key=API_KEY):
    async def _run():
        async with test_utils.TestServer(app) as server:
            base_url = f"http://{server.host}:{server.port}/"
            async with RadarrAPIClient(base_url, api_key, timeout=5) as client:
                return await scenario(client)

    return asyncio.run(_run())


def test_get_releases_parses_payload():
    app, received = build_app()

    releases = run_with_server(app, lambda c: c.get_releases(17))

    assert received["movieId"] == "17"
    assert [r.title for r in releases] == [
        "Movie.2021.2160p.UHD.BluRay",
        "Movie.2021.720p.WEB",
    ]
    first = releases[0]
    assert first.indexer_id == 4
    assert first.custom_format_score == 150
    assert first.resolution == 2160
    assert first.quality_name == "Bluray-2160p"
    assert releases[1].custom_format_score == 0


def test_empty_release_list():
    app, _ = build_app(releases=[])
    assert run_with_server(app, lambda c: c.get_releases(1)) == []


def test_bad_api_key_raises_authentication_error():
    app, _ = build_app()
    with pytest.raises(AuthenticationError):
        run_with_server(app, lambda c: c.get_releases(1), api_key="wrong")


def test_download_movie_posts_guid_and_indexer():
    app, received = build_app()

    accepted = run_with_server(app, lambda c: c.download_movie("https://indexer/1", 4))

    assert accepted is True
    assert received["grab"] == {"guid": "https://indexer/1", "indexerId": 4}


def test_download_movie_refused_returns_false():
    app, _ = build_app(grab_status=404)
    assert run_with_server(app, lambda c: c.download_movie("gone", 4)) is False


def test_download_movie_server_error_raises():
    app, _ = build_app(grab_status=500)
    with pytest.raises(RadarrAPIError) as excinfo:
        run_with_server(app, lambda c: c.download_movie("g", 1))
    assert excinfo.value.status == 500


def test_system_status():
    app, _ = build_app()
    status = run_with_server(app, lambda c: c.system_status())
    assert status["version"] == "5.2.6"


def test_get_movie():
    app, _ = build_app()
    movie = run_with_server(app, lambda c: c.get_movie(438631))
    assert movie == {"id": 438631, "title": "Dune", "year": 2021}


def test_null_fields_do_not_discard_the_list():
    payload = RELEASES + [
        {
            "guid": "https://indexer/3",
            "indexerId": 7,
            "title": None,
            "indexer": None,
            "customFormatScore": None,
            "quality": {"quality": {"name": "WEBDL-1080p", "source": None}},
        }
    ]
    app, _ = build_app(releases=payload)

    releases = run_with_server(app, lambda c: c.get_releases(1))

    assert len(releases) == 3
    broken = releases[2]
    assert broken.title == ""
    assert broken.indexer == ""
    assert broken.custom_format_score is None
    assert broken.source == "unknown"
    assert broken.quality_name == "WEBDL-1080p"
