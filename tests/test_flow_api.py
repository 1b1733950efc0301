"""Flow API integration tests (fake identity service)."""

import pytest

from src.domain.ports.identity import IdentityServiceError, SigninLinkResponse


async def start(client, **body):
    resp = await client.post("/flow", json=body)
    assert resp.status_code == 201
    return resp.json()


class TestStartFlow:
    """POST /flow."""

    @pytest.mark.asyncio
    async def test_defaults(self, client):
        data = await start(client)
        assert data["mode"] == "signin"
        assert data["displayed_mode"] == "signin"
        assert data["submitting"] is False
        assert data["error"] is None
        assert data["can_switch"] is True

    @pytest.mark.asyncio
    async def test_fixed_mode(self, client):
        data = await start(client, mode="create-account", labels={"createPersonalProfile": "Join"})
        assert data["mode"] == "create-account"
        assert data["can_switch"] is False
        assert data["labels"] == {"createPersonalProfile": "Join"}

        resp = await client.post(f"/flow/{data['session_id']}/mode", json={"mode": "signin"})
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_unknown_session(self, client):
        resp = await client.get("/flow/missing")
        assert resp.status_code == 404


class TestSignInFlow:
    """Sign-in through the API."""

    @pytest.mark.asyncio
    async def test_link_sent_completes_flow(self, client, fake_identity):
        sid = (await start(client, path="/join", query="?x=1"))["session_id"]
        resp = await client.put(f"/flow/{sid}/email", json={"email": "a@b.com"})
        assert resp.json()["email"] == "a@b.com"

        resp = await client.post(f"/flow/{sid}/signin")

        assert resp.status_code == 200
        data = resp.json()
        assert data["completed"] is True
        assert data["location"] == "/signin/sent?email=a%40b.com"
        assert [e["kind"] for e in data["effects"]] == ["push", "scroll_to_top"]
        args = fake_identity.request_signin_link.call_args.args
        assert args == ("a@b.com", "%2Fjoin%3Fx%3D1", "http://localhost:3000")
        # Completed flows are discarded
        assert (await client.get(f"/flow/{sid}")).status_code == 404

    @pytest.mark.asyncio
    async def test_sandbox_redirect(self, client, fake_identity):
        fake_identity.request_signin_link.return_value = SigninLinkResponse(redirect_target="https://x/y")
        sid = (await start(client))["session_id"]
        await client.put(f"/flow/{sid}/email", json={"email": "test@site.test"})

        data = (await client.post(f"/flow/{sid}/signin")).json()

        assert data["location"] == "https://x/y"
        assert data["effects"][0] == {"kind": "replace", "target": "https://x/y", "params": {}}

    @pytest.mark.asyncio
    async def test_unknown_email_keeps_session(self, client, fake_identity):
        fake_identity.check_existence.return_value = False
        sid = (await start(client))["session_id"]
        await client.put(f"/flow/{sid}/email", json={"email": "new@b.com"})

        data = (await client.post(f"/flow/{sid}/signin")).json()

        assert data["unknown_email"] is True
        assert data["effects"] == []
        assert data["completed"] is False

        # Email survives the switch to the create-account form
        data = (await client.post(f"/flow/{sid}/secondary")).json()
        assert data["mode"] == "create-account"
        assert data["email"] == "new@b.com"

    @pytest.mark.asyncio
    async def test_failure_reported_in_state(self, client, fake_identity):
        fake_identity.check_existence.side_effect = IdentityServiceError("GraphQL error: Invalid email")
        sid = (await start(client))["session_id"]

        resp = await client.post(f"/flow/{sid}/signin")

        assert resp.status_code == 200
        data = resp.json()
        assert data["error"] == "Error: Invalid email"
        assert data["submitting"] is False
        assert data["effects"] == [{"kind": "scroll_to_top", "target": None, "params": {}}]


class TestCreateProfileFlow:
    """Profile creation through the API."""

    @pytest.mark.asyncio
    async def test_organization_profile(self, client, fake_identity):
        sid = (await start(client, default_mode="create-account"))["session_id"]

        resp = await client.post(
            f"/flow/{sid}/profile",
            json={"email": "a@b.com", "name": "A", "orgName": "Co", "website": "w"},
        )

        data = resp.json()
        assert data["completed"] is True
        user, organization, _, _ = fake_identity.create_account.call_args.args
        assert user.to_payload() == {"email": "a@b.com", "name": "A"}
        assert organization.to_payload() == {"name": "Co", "website": "w"}

    @pytest.mark.asyncio
    async def test_secondary_route_navigates(self, client):
        sid = (await start(client, default_mode="create-account", routes={"signin": "signin"}))["session_id"]

        data = (await client.post(f"/flow/{sid}/secondary")).json()

        assert data["mode"] == "create-account"
        assert data["location"] == "/signin"
        assert data["effects"] == [{"kind": "push", "target": "signin", "params": {}}]

    @pytest.mark.asyncio
    async def test_discard(self, client):
        sid = (await start(client))["session_id"]
        assert (await client.delete(f"/flow/{sid}")).status_code == 204
        assert (await client.get(f"/flow/{sid}")).status_code == 404


class TestSnapshotIsolation:
    """Snapshots are detached copies of the controller state."""

    def test_snapshot_detached(self, container):
        from src.infrastructure.navigation import RouteNavigator
        from src.domain.ports.config import FlowOptions

        controller = container.new_flow_controller(FlowOptions(), RouteNavigator())
        controller.set_email("a@b.com")
        snapshot = controller.snapshot()
        controller.set_email("c@d.com")
        assert snapshot.email == "a@b.com"
