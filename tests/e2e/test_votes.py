"""End-to-end tests for voting endpoints."""

from uuid import uuid4

import pytest

from memehub.domain.repository import MemeRepository, UserRepository, VoteRepository
from tests.conftest import make_meme, make_user
from tests.harness import APIClient


@pytest.fixture
def api():
    with APIClient() as api_client:
        yield api_client


@pytest.fixture
def meme(api):
    creator = make_user("creator")
    meme = make_meme(creator.id)
    api.seed(UserRepository, creator)
    api.seed(MemeRepository, meme)
    return meme


class TestVoteEndpoints:
    """Voting over HTTP. Detailed rules are covered by the unit tests."""

    def test_vote_requires_auth(self, api, meme):
        response = api.client.post(f"/memes/{meme.id}/vote", json={"value": 1})

        assert response.status_code == 401

    @pytest.mark.parametrize("value", [0, 2, True, "1", 1.5, None])
    def test_invalid_value_is_rejected(self, api, meme, value):
        voter = make_user("voter")
        api.seed(UserRepository, voter)

        response = api.client.post(
            f"/memes/{meme.id}/vote", json={"value": value}, cookies=api.login(voter)
        )

        assert response.status_code == 400

    def test_vote_on_missing_meme(self, api):
        voter = make_user("voter")
        api.seed(UserRepository, voter)

        response = api.client.post(
            f"/memes/{uuid4()}/vote", json={"value": 1}, cookies=api.login(voter)
        )

        assert response.status_code == 404

    def test_two_users_vote_flip_and_withdraw(self, api, meme):
        """Totals follow every add, flip and withdrawal."""
        # Arrange
        u1, u2 = make_user("u1"), make_user("u2")
        api.seed(UserRepository, u1, u2)
        url = f"/memes/{meme.id}/vote"

        # Act & Assert - both upvote
        first = api.client.post(url, json={"value": 1}, cookies=api.login(u1))
        assert first.status_code == 201
        assert first.json()["votes"] == 1
        second = api.client.post(url, json={"value": 1}, cookies=api.login(u2))
        assert second.json()["votes"] == 2

        # Act & Assert - u1 flips to a downvote
        flipped = api.client.post(url, json={"value": -1}, cookies=api.login(u1))
        assert flipped.status_code == 200
        assert flipped.json()["action"] == "updated"
        assert flipped.json()["votes"] == 0

        # Act & Assert - u1 withdraws by repeating the downvote
        withdrawn = api.client.post(url, json={"value": -1}, cookies=api.login(u1))
        assert withdrawn.json()["action"] == "removed"
        assert withdrawn.json()["value"] is None
        assert withdrawn.json()["votes"] == 1

        # Assert - stored state agrees
        assert api.client.get(url, cookies=api.login(u1)).json()["value"] is None
        assert api.client.get(url, cookies=api.login(u2)).json()["value"] == 1
        assert api.client.get(f"/memes/{meme.id}").json()["votes"] == 1

    def test_unregistered_identity_gets_not_found(self, api, meme):
        """A valid token whose account was never registered cannot vote."""
        stranger = make_user("stranger")

        response = api.client.post(
            f"/memes/{meme.id}/vote", json={"value": 1}, cookies=api.login(stranger)
        )

        assert response.status_code == 404
        assert api.client.get(f"/memes/{meme.id}").json()["votes"] == 0

    def test_registering_then_voting(self, api, meme):
        newcomer = make_user("newcomer")
        cookies = api.login(newcomer)

        registered = api.client.post(
            "/auth/register",
            json={"name": "Newcomer", "email": "newcomer@example.com"},
            cookies=cookies,
        )
        voted = api.client.post(
            f"/memes/{meme.id}/vote", json={"value": 1}, cookies=cookies
        )

        assert registered.status_code == 201
        assert voted.status_code == 201
        assert voted.json()["votes"] == 1

    def test_lost_insert_race_is_conflict(self, api, meme, monkeypatch):
        """A vote recorded after our read but before our insert answers 409."""
        # Arrange
        voter = make_user("voter")
        api.seed(UserRepository, voter)
        url = f"/memes/{meme.id}/vote"
        api.client.post(url, json={"value": 1}, cookies=api.login(voter))

        async def stale_read(meme_id, user_id):
            return None

        vote_repo = api.repository(VoteRepository)
        monkeypatch.setattr(vote_repo, "find_by_meme_and_user", stale_read)

        # Act
        response = api.client.post(url, json={"value": 1}, cookies=api.login(voter))

        # Assert
        assert response.status_code == 409
        assert api.client.get(f"/memes/{meme.id}").json()["votes"] == 1


class TestRemoveVoteEndpoint:
    def test_delete_withdraws_either_direction(self, api, meme):
        # Arrange
        voter = make_user("voter")
        api.seed(UserRepository, voter)
        url = f"/memes/{meme.id}/vote"
        api.client.post(url, json={"value": -1}, cookies=api.login(voter))

        # Act
        response = api.client.delete(url, cookies=api.login(voter))

        # Assert
        assert response.status_code == 200
        assert response.json()["action"] == "removed"
        assert response.json()["votes"] == 0
        assert api.client.get(url, cookies=api.login(voter)).json()["value"] is None

    def test_delete_without_vote_is_not_found(self, api, meme):
        voter = make_user("voter")
        api.seed(UserRepository, voter)

        response = api.client.delete(
            f"/memes/{meme.id}/vote", cookies=api.login(voter)
        )

        assert response.status_code == 404

    def test_delete_requires_auth(self, api, meme):
        assert api.client.delete(f"/memes/{meme.id}/vote").status_code == 401
