import json

import respx
from httpx import Response

from auto_reviewers.github_client import GitHubClient


@respx.mock
def test_get_pull_request_extracts_author_and_reviewers():
    respx.get("https://api.github.com/repos/acme/demo/pulls/7").mock(
        return_value=Response(
            200,
            json={
                "number": 7,
                "user": {"login": "octocat"},
                "requested_reviewers": [{"login": "alice"}, {"login": "bob"}],
            },
        )
    )
    with GitHubClient(token="test_token") as client:
        pr = client.get_pull_request("acme", "demo", 7)

    assert pr is not None
    assert pr.author_login == "octocat"
    assert pr.existing_reviewer_logins == ["alice", "bob"]


@respx.mock
def test_get_pull_request_without_reviewers():
    respx.get("https://api.github.com/repos/acme/demo/pulls/7").mock(
        return_value=Response(200, json={"user": {"login": "octocat"}})
    )
    with GitHubClient(token="test_token") as client:
        pr = client.get_pull_request("acme", "demo", 7)

    assert pr is not None
    assert pr.existing_reviewer_logins == []


@respx.mock
def test_get_pull_request_missing_returns_none():
    respx.get("https://api.github.com/repos/acme/demo/pulls/404").mock(
        return_value=Response(404, json={"message": "Not Found"})
    )
    with GitHubClient(token="test_token") as client:
        assert client.get_pull_request("acme", "demo", 404) is None


@respx.mock
def test_list_repo_events_requests_single_page():
    route = respx.get("https://api.github.com/repos/acme/demo/events").mock(
        return_value=Response(
            200,
            json=[
                {"id": "1", "type": "PushEvent", "actor": {"login": "alice"}},
                {"id": "2", "type": "WatchEvent", "actor": None},
                {"id": "3", "type": "IssuesEvent"},
            ],
        )
    )
    with GitHubClient(token="test_token") as client:
        events = client.list_repo_events("acme", "demo")

    assert route.calls.last.request.url.params["per_page"] == "100"
    assert [event.actor_login for event in events] == ["alice", None, None]


@respx.mock
def test_list_collaborators_filters_by_push_permission():
    route = respx.get("https://api.github.com/repos/acme/demo/collaborators").mock(
        return_value=Response(200, json=[{"login": "alice", "id": 1}, {"login": "bob", "id": 2}])
    )
    with GitHubClient(token="test_token") as client:
        collaborators = client.list_collaborators("acme", "demo")

    params = route.calls.last.request.url.params
    assert params["permission"] == "push"
    assert params["per_page"] == "100"
    assert [c.login for c in collaborators] == ["alice", "bob"]


@respx.mock
def test_request_reviewers_posts_logins():
    route = respx.post("https://api.github.com/repos/acme/demo/pulls/7/requested_reviewers").mock(
        return_value=Response(201, json={"number": 7})
    )
    with GitHubClient(token="test_token") as client:
        client.request_reviewers("acme", "demo", 7, ("alice", "bob"))

    request = route.calls.last.request
    assert json.loads(request.content) == {"reviewers": ["alice", "bob"]}
    assert request.headers["Authorization"] == "Bearer test_token"


@respx.mock
def test_enterprise_base_url_and_rate_limit_headers():
    respx.get("https://ghe.example.com/api/v3/repos/acme/demo/events").mock(
        return_value=Response(
            200,
            json=[],
            headers={"X-RateLimit-Remaining": "41", "X-RateLimit-Reset": "1700000000"},
        )
    )
    with GitHubClient(token="test_token", base_url="https://ghe.example.com/api/v3/") as client:
        assert client.list_repo_events("acme", "demo") == []
        assert client.rate_limit_remaining == 41
        assert client.rate_limit_reset == 1700000000
