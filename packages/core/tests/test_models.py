"""Tests for decoding GitHub JSON into records."""

import pytest

from prdigest_core.errors import DecodeError
from prdigest_core.models import PullRequest, Repository, RequestedReviewers, Review, User

USER = {"login": "test", "html_url": "https://github.com/reo0306", "id": 1, "type": "User"}


class TestRepository:
    def test_from_dict_ignores_extra_keys(self):
        repo = Repository.from_dict(
            {
                "name": "polymer-cli",
                "full_name": "reo0306/polymer-cli",
                "url": "https://api.github.com/repos/reo0306/polymer-cli",
                "private": False,
            }
        )
        assert repo == Repository(
            name="polymer-cli",
            full_name="reo0306/polymer-cli",
            url="https://api.github.com/repos/reo0306/polymer-cli",
        )

    def test_missing_field(self):
        with pytest.raises(DecodeError, match="full_name"):
            Repository.from_dict({"name": "gospo", "url": "x"})

    def test_not_an_object(self):
        with pytest.raises(DecodeError):
            Repository.from_dict(["gospo"])


class TestPullRequest:
    def _data(self, **overrides):
        data = {
            "html_url": "https://github.com/reo0306/gospo/pull/1",
            "number": 1,
            "state": "open",
            "title": "Test",
            "user": USER,
            "created_at": "2024-07-16T20:09:31Z",
        }
        data.update(overrides)
        return data

    def test_author_decoded_from_user(self):
        pull = PullRequest.from_dict(self._data())
        assert pull.author == User(login="test", html_url="https://github.com/reo0306")
        assert pull.number == 1
        assert pull.created_at == "2024-07-16T20:09:31Z"

    @pytest.mark.parametrize("number", [0, -1, "1", None, True])
    def test_number_must_be_positive_int(self, number):
        with pytest.raises(DecodeError):
            PullRequest.from_dict(self._data(number=number))

    def test_nested_user_missing_login(self):
        with pytest.raises(DecodeError, match="login"):
            PullRequest.from_dict(self._data(user={"html_url": "x"}))

    def test_frozen(self):
        pull = PullRequest.from_dict(self._data())
        with pytest.raises(AttributeError):
            pull.title = "changed"


class TestRequestedReviewers:
    def test_users_and_teams(self):
        reviewers = RequestedReviewers.from_dict({"users": [USER], "teams": [{"slug": "backend", "id": 3}]})
        assert reviewers.users == (User(login="test", html_url="https://github.com/reo0306"),)
        assert reviewers.teams == ("backend",)

    def test_teams_optional(self):
        assert RequestedReviewers.from_dict({"users": []}) == RequestedReviewers()

    def test_users_must_be_list(self):
        with pytest.raises(DecodeError):
            RequestedReviewers.from_dict({"users": USER})

    def test_missing_users(self):
        with pytest.raises(DecodeError):
            RequestedReviewers.from_dict({"teams": []})


class TestReview:
    def test_reviewer_decoded_from_user(self):
        review = Review.from_dict({"user": USER, "state": "APPROVED", "body": ""})
        assert review.reviewer.login == "test"
        assert review.state == "APPROVED"

    def test_missing_state(self):
        with pytest.raises(DecodeError):
            Review.from_dict({"user": USER})
