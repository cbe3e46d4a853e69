from datetime import date, datetime, timezone

import pytest

from app.core.exceptions import (
    MatchAccessDeniedException,
    MatchNotAcceptedException,
    NoUnwatchedMoviesException,
)
from app.models.match import MatchStatus
from app.services.match_service import MatchService
from conftest import auth_headers, favorite, make_match, make_movie, make_user, mark_watched


@pytest.fixture
def couple(db_session):
    ana = make_user(db_session, "ana")
    luis = make_user(db_session, "luis")
    return ana, luis


@pytest.fixture
def shared_movies(db_session, couple):
    """favorites ana={1,2,3}, luis={3,4}; movie 2 already watched"""
    ana, luis = couple
    make_movie(db_session, 1, "Zodiac", 7.5, [{"id": 18, "name": "Drama"}], date(2007, 3, 2))
    make_movie(db_session, 2, "Heat", 8.3, [{"id": 80, "name": "Crime"}], date(1995, 12, 15))
    make_movie(db_session, 3, "Amélie", 8.0, '["Comedy", "Drama"]', date(2001, 4, 25))
    make_movie(db_session, 4, "Brazil", 7.5, [{"id": 35, "name": "Comedy"}], None)
    match = make_match(db_session, ana, luis)
    favorite(db_session, ana, 1, 2, 3)
    favorite(db_session, luis, 3, 4)
    mark_watched(db_session, match, 2)
    return match


class TestMatchLifecycle:
    def test_request_accept_and_list(self, client, db_session, couple):
        ana, luis = couple
        response = client.post("/matches/", json={"target_username": "luis"}, headers=auth_headers(ana))
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "PENDING"
        assert body["partner"]["username"] == "luis"

        accepted = client.put(f"/matches/{body['id']}/accept", headers=auth_headers(luis))
        assert accepted.status_code == 200
        assert accepted.json()["status"] == "ACCEPTED"
        assert accepted.json()["accepted_at"] is not None

        listed = client.get("/matches/", headers=auth_headers(luis)).json()
        assert [m["id"] for m in listed] == [body["id"]]
        assert listed[0]["partner"]["username"] == "ana"

    def test_requester_cannot_accept(self, client, couple):
        ana, _ = couple
        match_id = client.post("/matches/", json={"target_username": "luis"}, headers=auth_headers(ana)).json()["id"]
        response = client.put(f"/matches/{match_id}/accept", headers=auth_headers(ana))
        assert response.status_code == 403
        assert response.json()["detail"]["error_code"] == "MATCH_ACCESS_DENIED"

    def test_invalid_requests(self, client, couple):
        ana, luis = couple
        assert client.post("/matches/", json={"target_username": "nobody"}, headers=auth_headers(ana)).status_code == 404
        assert client.post("/matches/", json={"target_username": "ana"}, headers=auth_headers(ana)).status_code == 400
        assert client.post("/matches/", json={"target_username": "luis"}, headers=auth_headers(ana)).status_code == 201
        duplicate = client.post("/matches/", json={"target_username": "ana"}, headers=auth_headers(luis))
        assert duplicate.status_code == 409
        assert duplicate.json()["detail"]["error_code"] == "MATCH_ALREADY_EXISTS"

    def test_rejected_match_can_be_requested_again(self, client, couple):
        ana, luis = couple
        match_id = client.post("/matches/", json={"target_username": "luis"}, headers=auth_headers(ana)).json()["id"]
        assert client.put(f"/matches/{match_id}/reject", headers=auth_headers(luis)).status_code == 200

        again = client.post("/matches/", json={"target_username": "ana"}, headers=auth_headers(luis))
        assert again.status_code == 200
        body = again.json()
        assert body["id"] == match_id
        assert body["status"] == "PENDING"
        assert body["user1_id"] == luis.id

    def test_unknown_match(self, client, couple):
        ana, _ = couple
        response = client.get("/matches/missing/random-movie", headers=auth_headers(ana))
        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == "MATCH_NOT_FOUND"

    def test_requires_token(self, client):
        assert client.get("/matches/").status_code == 401


class TestCommonMovies:
    def test_union_minus_watched_sorted_by_title(self, client, couple, shared_movies):
        ana, _ = couple
        response = client.get(f"/matches/{shared_movies.id}/common-movies", headers=auth_headers(ana))
        assert response.status_code == 200
        assert [m["id"] for m in response.json()] == [3, 4, 1]

    def test_filters_and_sorting(self, client, couple, shared_movies):
        _, luis = couple
        url = f"/matches/{shared_movies.id}/common-movies"
        by_rating = client.get(url, params={"sort_by": "rating"}, headers=auth_headers(luis)).json()
        assert [m["id"] for m in by_rating] == [3, 1, 4]

        by_date = client.get(url, params={"sort_by": "release_date"}, headers=auth_headers(luis)).json()
        assert [m["id"] for m in by_date] == [1, 3, 4]

        drama = client.get(url, params={"genre": "Drama"}, headers=auth_headers(luis)).json()
        assert [m["id"] for m in drama] == [3, 1]

        top = client.get(url, params={"min_rating": 7.6}, headers=auth_headers(luis)).json()
        assert [m["id"] for m in top] == [3]

    def test_outsider_is_denied(self, client, db_session, shared_movies):
        eve = make_user(db_session, "eve")
        response = client.get(f"/matches/{shared_movies.id}/common-movies", headers=auth_headers(eve))
        assert response.status_code == 403

    def test_pending_match_is_rejected(self, client, db_session, couple):
        ana, luis = couple
        pending = make_match(db_session, ana, luis, status=MatchStatus.PENDING)
        response = client.get(f"/matches/{pending.id}/common-movies", headers=auth_headers(ana))
        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == "MATCH_NOT_ACCEPTED"


class TestDailyMovie:
    def test_reference_pick(self, db_session, couple):
        ana, luis = couple
        for movie_id, title in ((10, "Alien"), (55, "Big"), (78, "Cars"), (101, "Dune")):
            make_movie(db_session, movie_id, title)
        match = make_match(db_session, ana, luis, match_id="m-42")
        favorite(db_session, ana, 10, 55)
        favorite(db_session, luis, 78, 101, 55)

        service = MatchService(db_session)
        morning = datetime(2024, 3, 15, 0, 0, 1, tzinfo=timezone.utc)
        night = datetime(2024, 3, 15, 23, 59, 59, tzinfo=timezone.utc)
        assert service.get_daily_movie(ana.id, match.id, now=morning).id == 101
        assert service.get_daily_movie(luis.id, match.id, now=night).id == 101

        next_day = datetime(2024, 3, 16, 8, 0, tzinfo=timezone.utc)
        assert service.get_daily_movie(ana.id, match.id, now=next_day).id == 78

    def test_watched_pick_leaves_pool(self, db_session, couple):
        ana, luis = couple
        for movie_id, title in ((10, "Alien"), (55, "Big"), (78, "Cars"), (101, "Dune")):
            make_movie(db_session, movie_id, title)
        match = make_match(db_session, ana, luis, match_id="m-42")
        favorite(db_session, ana, 10, 55, 78, 101)
        mark_watched(db_session, match, 101)

        service = MatchService(db_session)
        pick = service.get_daily_movie(ana.id, match.id, now=datetime(2024, 3, 15, 12, tzinfo=timezone.utc))
        # [10, 55, 78] with the same seed lands on index 1
        assert pick.id == 55

    def test_both_partners_get_the_same_movie(self, client, couple, shared_movies):
        ana, luis = couple
        first = client.get(f"/matches/{shared_movies.id}/random-movie", headers=auth_headers(ana))
        second = client.get(f"/matches/{shared_movies.id}/random-movie", headers=auth_headers(luis))
        assert first.status_code == 200
        assert first.json()["id"] == second.json()["id"]
        assert first.json()["id"] in {1, 3, 4}

    def test_everything_watched(self, client, db_session, couple, shared_movies):
        ana, _ = couple
        mark_watched(db_session, shared_movies, 1, 3, 4)
        response = client.get(f"/matches/{shared_movies.id}/random-movie", headers=auth_headers(ana))
        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == "NO_UNWATCHED_MOVIES"

    def test_service_guards(self, db_session, couple, shared_movies):
        ana, luis = couple
        eve = make_user(db_session, "eve")
        service = MatchService(db_session)
        with pytest.raises(MatchAccessDeniedException):
            service.get_daily_movie(eve.id, shared_movies.id)

        pending = make_match(db_session, ana, eve, status=MatchStatus.PENDING)
        with pytest.raises(MatchNotAcceptedException):
            service.get_daily_movie(ana.id, pending.id)

        empty = make_match(db_session, luis, eve)
        mark_watched(db_session, empty, 3, 4)
        with pytest.raises(NoUnwatchedMoviesException):
            service.get_daily_movie(luis.id, empty.id)
