# tests/test_domain.py
import pytest

from pkg_introspection.domain.entities import Continue, EarlyResponse, FilterDecision
from pkg_introspection.domain.value_objects import IntrospectionRequest, IntrospectionResponse


def test_introspection_response_from_mapping():
    assert IntrospectionResponse.from_mapping({"active": True}) == IntrospectionResponse(True)
    assert IntrospectionResponse.from_mapping(
        {"active": False, "exp": 2000000000, "nbf": 1000, "scope": "read"}
    ) == IntrospectionResponse(active=False, exp=2000000000, nbf=1000)

    # null means absent
    response = IntrospectionResponse.from_mapping({"active": True, "exp": None, "nbf": None})
    assert response.exp is None
    assert response.nbf is None


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"exp": 10},
        {"active": "true"},
        {"active": 1},
        {"active": True, "exp": -1},
        {"active": True, "exp": 1.5},
        {"active": True, "exp": 2**64},
        {"active": True, "nbf": "1000"},
        {"active": True, "nbf": True},
        ["active"],
        "active",
        None,
    ],
)
def test_introspection_response_rejects_invalid_documents(data):
    with pytest.raises(ValueError):
        IntrospectionResponse.from_mapping(data)


def test_introspection_request_url():
    def request(upstream, path):
        return IntrospectionRequest(upstream=upstream, host="h", path=path, headers=(), body=b"")

    assert request("http://auth:8080", "/introspect").url == "http://auth:8080/introspect"
    assert request("http://auth:8080/", "/introspect").url == "http://auth:8080/introspect"
    assert request("http://auth:8080", "introspect").url == "http://auth:8080/introspect"
    assert request("http://auth:8080/", "").url == "http://auth:8080"


def test_introspection_request_header_lookup():
    req = IntrospectionRequest(
        upstream="http://auth",
        host="h",
        path="/",
        headers=(("Authorization", "Basic abc"),),
        body=b"",
    )
    assert req.header("authorization") == "Basic abc"
    assert req.authorization == "Basic abc"
    assert req.header("x-missing") is None


def test_filter_decision_shortcuts():
    allowed = FilterDecision(Continue())
    assert allowed.allowed
    assert allowed.status_code is None

    denied = FilterDecision(EarlyResponse(401))
    assert not denied.allowed
    assert denied.status_code == 401
