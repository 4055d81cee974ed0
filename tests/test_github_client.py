import json

import pytest
import requests

from azdo_sdkgen.errors import NotFoundError, UpstreamRequestFailedError
from azdo_sdkgen.github_client import SpecsRepoClient

from conftest import FakeResponse, FakeSession, dir_item, file_item

API = "https://api.github.com/repos/MicrosoftDocs/vsts-rest-api-specs/contents"


def test_list_apis_returns_sorted_directories() -> None:
    session = FakeSession(
        {
            f"{API}/specification?ref=master": FakeResponse(
                payload=[dir_item("wit"), file_item("README.md"), dir_item("graph")]
            )
        }
    )
    client = SpecsRepoClient(session=session)
    assert client.list_apis("master") == ["graph", "wit"]


def test_list_versions_encodes_ref() -> None:
    session = FakeSession(
        {f"{API}/specification/graph?ref=feature%2Fx": FakeResponse(payload=[dir_item("7.1"), dir_item("7.0")])}
    )
    client = SpecsRepoClient(session=session)
    assert client.list_versions("graph", "feature/x") == ["7.0", "7.1"]


def test_list_json_files_filters_case_insensitively() -> None:
    session = FakeSession(
        {
            f"{API}/specification/graph/7.1?ref=master": FakeResponse(
                payload=[file_item("graph.json"), file_item("Extra.JSON"), file_item("notes.md"), dir_item("x.json")]
            )
        }
    )
    listing = SpecsRepoClient(session=session).list_json_files("graph", "7.1", "master")
    assert listing.dir == "specification/graph/7.1"
    assert listing.jsons == ("Extra.JSON", "graph.json")


def test_token_is_sent_only_when_configured() -> None:
    url = f"{API}/specification?ref=master"
    anon = FakeSession({url: FakeResponse(payload=[])})
    SpecsRepoClient(session=anon).list_apis("master")
    assert "Authorization" not in anon.calls[0][1]
    assert anon.calls[0][1]["User-Agent"] == "azdo-sdk-gen"

    authed = FakeSession({url: FakeResponse(payload=[])})
    SpecsRepoClient("secret", session=authed).list_apis("master")
    assert authed.calls[0][1]["Authorization"] == "Bearer secret"


def test_missing_path_raises_not_found() -> None:
    client = SpecsRepoClient(session=FakeSession())
    with pytest.raises(NotFoundError) as exc:
        client.list_versions("nope", "master")
    assert "404" in str(exc.value)
    assert "Not Found" in str(exc.value)


def test_server_error_includes_status_and_body() -> None:
    url = f"{API}/specification?ref=master"
    session = FakeSession({url: FakeResponse(403, text="rate limited", reason="Forbidden")})
    with pytest.raises(UpstreamRequestFailedError) as exc:
        SpecsRepoClient(session=session).list_apis("master")
    assert "403" in str(exc.value)
    assert "rate limited" in str(exc.value)


def test_file_path_is_not_a_listing() -> None:
    url = f"{API}/specification?ref=master"
    session = FakeSession({url: FakeResponse(payload={"name": "specification", "type": "file"})})
    with pytest.raises(UpstreamRequestFailedError):
        SpecsRepoClient(session=session).list_apis("master")


def test_raw_spec_url_and_fetch() -> None:
    session = FakeSession()
    client = SpecsRepoClient(session=session)
    url = client.raw_spec_url("graph", "7.1", "graph.json", "release/7")
    assert url == (
        "https://raw.githubusercontent.com/MicrosoftDocs/vsts-rest-api-specs/"
        "release%2F7/specification/graph/7.1/graph.json"
    )

    session.routes[url] = FakeResponse(text='{"openapi": "3.0.0"}')
    assert client.fetch_text(url) == '{"openapi": "3.0.0"}'


def test_custom_repo() -> None:
    session = FakeSession(
        {"https://api.github.com/repos/acme/specs/contents/specification?ref=main": FakeResponse(payload=[])}
    )
    assert SpecsRepoClient(owner="acme", repo="specs", session=session).list_apis("main") == []


def test_connection_error_becomes_upstream_failure() -> None:
    url = f"{API}/specification?ref=master"
    session = FakeSession({url: requests.ConnectionError("connection reset by peer")})
    with pytest.raises(UpstreamRequestFailedError, match="connection reset by peer"):
        SpecsRepoClient(session=session).list_apis("master")


def test_timeout_on_raw_fetch_becomes_upstream_failure() -> None:
    url = "https://raw.githubusercontent.com/MicrosoftDocs/vsts-rest-api-specs/master/specification/a/1/a.json"
    session = FakeSession({url: requests.Timeout("read timed out")})
    with pytest.raises(UpstreamRequestFailedError, match="read timed out"):
        SpecsRepoClient(session=session).fetch_text(url)


def test_non_json_listing_body() -> None:
    url = f"{API}/specification?ref=master"
    session = FakeSession({url: FakeResponse(payload=json.JSONDecodeError("Expecting value", "<html>", 0))})
    with pytest.raises(UpstreamRequestFailedError, match="Invalid JSON"):
        SpecsRepoClient(session=session).list_apis("master")


@pytest.mark.parametrize("entry", [{"type": "dir"}, "graph", None])
def test_malformed_listing_entry(entry: object) -> None:
    url = f"{API}/specification?ref=master"
    session = FakeSession({url: FakeResponse(payload=[dir_item("graph"), entry])})
    with pytest.raises(UpstreamRequestFailedError, match="Malformed directory listing"):
        SpecsRepoClient(session=session).list_apis("master")
