"""Unit tests for user and client repositories."""

from __future__ import annotations

from sassify.core.database.entities.users import ROLE_ADMIN, ROLE_USER
from sassify.server.services import auth


class TestUserRepository:
    async def test_get_by_email_is_case_insensitive(self, repos, make_user):
        user = await make_user(email="jane@example.com")

        found = await repos.users.get_by_email("  Jane@Example.COM ")

        assert found is not None
        assert found.id == user.id

    async def test_get_by_email_missing(self, repos):
        assert await repos.users.get_by_email("nobody@example.com") is None

    async def test_roles_always_include_role_user(self, make_user):
        admin = await make_user(email="admin@example.com", roles=["ROLE_ADMIN"])
        member = await make_user(email="member@example.com")

        assert admin.get_roles() == ["ROLE_ADMIN", "ROLE_USER"]
        assert member.get_roles() == ["ROLE_USER"]
        assert admin.has_role("ROLE_ADMIN")
        assert not member.has_role("ROLE_ADMIN")

    def test_role_names_have_a_single_source(self):
        assert (ROLE_USER, ROLE_ADMIN) == ("ROLE_USER", "ROLE_ADMIN")
        assert auth.ROLE_ADMIN is ROLE_ADMIN


class TestClientRepository:
    async def test_list_for_user(self, repos, make_user, make_client):
        owner = await make_user(email="owner@example.com")
        other = await make_user(email="other@example.com")
        mine = await make_client(owner, name="Mine")
        await make_client(other, name="Theirs")

        clients = await repos.clients.list_for_user(owner.id)

        assert [c.id for c in clients] == [mine.id]
