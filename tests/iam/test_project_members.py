"""PUT /v1/project/{name}/members/create endpoint tests."""

import pytest

from repo_api.api.v1.endpoints.iam.projects import INVALID_MEMBERS_MESSAGE


def _members(*keys: str) -> dict:
    return {"members": [{"key": k} for k in keys]}


async def test_add_member(test_client, user_factory, project_factory, membership_rows):
    project = await project_factory("alpha")
    bob = await user_factory("bob")
    project_id, bob_id = project.project_id, bob.id

    resp = await test_client.put(
        "/v1/project/alpha/members/create", json=_members("bob")
    )

    assert resp.status_code == 200
    assert resp.json() == {"success": "Added to project"}
    assert await membership_rows() == [(bob_id, project_id)]


async def test_add_several_members(
    test_client, user_factory, project_factory, membership_rows
):
    project = await project_factory("alpha")
    bob = await user_factory("bob")
    alice = await user_factory("alice")
    ids = sorted([(bob.id, project.project_id), (alice.id, project.project_id)])

    resp = await test_client.put(
        "/v1/project/alpha/members/create", json=_members("bob", "alice")
    )

    assert resp.status_code == 200
    assert await membership_rows() == ids


async def test_add_member_project_missing(test_client, user_factory, membership_rows):
    await user_factory("bob")

    resp = await test_client.put(
        "/v1/project/missing/members/create", json=_members("bob")
    )

    assert resp.status_code == 404
    assert resp.json() == {"error": "Project does not exist"}
    assert await membership_rows() == []


async def test_add_member_unknown_user(test_client, project_factory, membership_rows):
    await project_factory("alpha")

    resp = await test_client.put(
        "/v1/project/alpha/members/create", json=_members("ghost")
    )

    assert resp.status_code == 400
    data = resp.json()
    assert data["error"] == INVALID_MEMBERS_MESSAGE
    assert data["details"] == ["ghost"]
    assert "success" not in data
    assert await membership_rows() == []


async def test_add_member_already_member(
    test_client, user_factory, project_factory, member_factory, membership_rows
):
    project = await project_factory("alpha")
    bob = await user_factory("bob")
    pair = (bob.id, project.project_id)
    await member_factory(*pair)

    resp = await test_client.put(
        "/v1/project/alpha/members/create", json=_members("bob")
    )

    assert resp.status_code == 400
    assert resp.json()["error"] == INVALID_MEMBERS_MESSAGE
    assert resp.json()["details"] == ["bob"]
    assert await membership_rows() == [pair]


async def test_add_members_with_one_unknown_inserts_nothing(
    test_client, user_factory, project_factory, membership_rows
):
    await project_factory("alpha")
    await user_factory("bob")

    resp = await test_client.put(
        "/v1/project/alpha/members/create", json=_members("bob", "ghost")
    )

    assert resp.status_code == 400
    assert resp.json()["error"] == INVALID_MEMBERS_MESSAGE
    assert await membership_rows() == []


async def test_add_members_partial_duplicate_is_atomic(
    test_client, user_factory, project_factory, member_factory, membership_rows
):
    project = await project_factory("alpha")
    bob = await user_factory("bob")
    await user_factory("carol")
    pair = (bob.id, project.project_id)
    await member_factory(*pair)

    resp = await test_client.put(
        "/v1/project/alpha/members/create", json=_members("carol", "bob")
    )

    assert resp.status_code == 400
    assert await membership_rows() == [pair]


async def test_add_members_repeated_key(
    test_client, user_factory, project_factory, membership_rows
):
    await project_factory("alpha")
    await user_factory("bob")

    resp = await test_client.put(
        "/v1/project/alpha/members/create", json=_members("bob", "bob")
    )

    assert resp.status_code == 400
    assert resp.json()["details"] == ["bob"]
    assert await membership_rows() == []


async def test_add_members_empty_list(test_client, project_factory, membership_rows):
    await project_factory("alpha")

    resp = await test_client.put(
        "/v1/project/alpha/members/create", json={"members": []}
    )

    assert resp.status_code == 200
    assert await membership_rows() == []


async def test_add_member_twice(test_client, user_factory, project_factory, membership_rows):
    await project_factory("alpha")
    await user_factory("bob")

    first = await test_client.put(
        "/v1/project/alpha/members/create", json=_members("bob")
    )
    second = await test_client.put(
        "/v1/project/alpha/members/create", json=_members("bob")
    )

    assert first.status_code == 200
    assert second.status_code == 400
    assert len(await membership_rows()) == 1


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        '{"members": "bob"}',
        '{"members": [{"name": "bob"}]}',
        '{"members": [{"key": ""}]}',
        "{}",
    ],
    ids=["not-json", "members-not-list", "missing-key", "empty-key", "empty-object"],
)
async def test_add_members_undecodable_body(test_client, project_factory, body):
    await project_factory("alpha")

    resp = await test_client.put(
        "/v1/project/alpha/members/create",
        content=body,
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Request body could not be decoded"}
