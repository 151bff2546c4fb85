"""End-to-end tests through the HTTP API."""

import asyncio

import pytest

from conftest import TOMORROW, TURF_PAYLOAD, login, signup


@pytest.fixture
async def owner_headers(client):
    return await login(client, "owner")


@pytest.fixture
async def player_headers(client):
    return await login(client, "player")


@pytest.fixture
async def listed_turf(client, owner_headers):
    """A visible turf with two available slots tomorrow."""
    response = await client.post("/turfs", json=TURF_PAYLOAD, headers=owner_headers)
    assert response.status_code == 201
    turf = response.json()

    response = await client.put(
        f"/turfs/{turf['id']}/slots",
        json=[
            {"date": TOMORROW.isoformat(), "time_range": "06:00 PM - 07:00 PM"},
            {"date": TOMORROW.isoformat(), "time_range": "07:00 PM - 08:00 PM"},
        ],
        headers=owner_headers,
    )
    assert response.status_code == 200
    turf["slots"] = response.json()
    return turf


def booking_body(turf, slots):
    return {
        "turf_id": turf["id"],
        "booking_date": TOMORROW.isoformat(),
        "slots": [{"slot_id": s["id"], "time_range": s["time_range"]} for s in slots],
    }


class TestHealthAndAuth:
    """Health check and mock auth endpoints."""

    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_login_returns_demo_identity(self, client):
        response = await client.post(
            "/auth/login",
            json={"email": "me@example.com", "password": "secret123", "role": "owner"},
        )

        assert response.status_code == 200
        assert response.json()["id"] == "mock-owner-uid"
        assert response.json()["email"] == "me@example.com"

    async def test_login_validation(self, client):
        response = await client.post(
            "/auth/login",
            json={"email": "not-an-email", "password": "123", "role": "player"},
        )
        assert response.status_code == 422

    async def test_signup_and_me(self, client):
        headers = await signup(client, "Neha Kapoor", "player")

        response = await client.get("/auth/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Neha Kapoor"
        assert response.json()["role"] == "player"

    async def test_me_requires_login(self, client):
        assert (await client.get("/auth/me")).status_code == 401
        assert (await client.get("/auth/me", headers={"X-User-Id": "ghost"})).status_code == 401


class TestTurfEndpoints:
    """Browsing and managing turfs."""

    async def test_player_cannot_create_turf(self, client, player_headers):
        response = await client.post("/turfs", json=TURF_PAYLOAD, headers=player_headers)
        assert response.status_code == 403

    async def test_invalid_turf_is_rejected(self, client, owner_headers):
        response = await client.post(
            "/turfs", json={**TURF_PAYLOAD, "images": []}, headers=owner_headers
        )
        assert response.status_code == 422

    async def test_browse_and_filter(self, client, listed_turf):
        response = await client.get("/turfs", params={"amenities": ["parking"], "sort_by": "price_asc"})

        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [listed_turf["id"]]

        response = await client.get("/turfs", params={"search": "nowhere"})
        assert response.json() == []

    async def test_hidden_turf_is_only_visible_to_owner(self, client, owner_headers, listed_turf):
        turf_id = listed_turf["id"]
        response = await client.patch(
            f"/turfs/{turf_id}", json={"is_visible": False}, headers=owner_headers
        )
        assert response.status_code == 200

        assert (await client.get(f"/turfs/{turf_id}")).status_code == 404
        assert (await client.get(f"/turfs/{turf_id}", headers=owner_headers)).status_code == 200
        assert (await client.get("/turfs")).json() == []

    async def test_hidden_turf_details_are_owner_only(
        self, client, owner_headers, player_headers, listed_turf
    ):
        turf_id = listed_turf["id"]
        await client.patch(f"/turfs/{turf_id}", json={"is_visible": False}, headers=owner_headers)

        for path in (
            f"/turfs/{turf_id}/slots",
            f"/turfs/{turf_id}/reviews",
            f"/turfs/{turf_id}/reviews/summary",
        ):
            assert (await client.get(path)).status_code == 404
            assert (await client.get(path, headers=player_headers)).status_code == 404
            assert (await client.get(path, headers=owner_headers)).status_code == 200

        response = await client.post(
            f"/turfs/{turf_id}/reviews",
            json={"rating": 5, "comment": "Sneaked in for a match."},
            headers=player_headers,
        )
        assert response.status_code == 404

    async def test_other_owner_cannot_edit(self, client, listed_turf):
        intruder = await signup(client, "Other Owner", "owner")

        response = await client.patch(
            f"/turfs/{listed_turf['id']}", json={"price_per_hour": 1}, headers=intruder
        )
        assert response.status_code == 403

    async def test_missing_turf(self, client):
        assert (await client.get("/turfs/999")).status_code == 404


class TestSlotEndpoints:
    """Slot listing and slot manager."""

    async def test_slots_for_empty_day_fall_back_to_defaults(self, client, listed_turf):
        response = await client.get(
            f"/turfs/{listed_turf['id']}/slots",
            params={"date": "2031-01-01", "include_defaults": "true"},
        )

        assert response.status_code == 200
        slots = response.json()
        assert len(slots) == 5
        assert all(s["id"] is None for s in slots)

    async def test_slots_for_date(self, client, listed_turf):
        response = await client.get(
            f"/turfs/{listed_turf['id']}/slots", params={"date": TOMORROW.isoformat()}
        )

        assert [s["time_range"] for s in response.json()] == [
            "06:00 PM - 07:00 PM",
            "07:00 PM - 08:00 PM",
        ]

    async def test_toggle_and_delete_slot(self, client, owner_headers, listed_turf):
        slot_id = listed_turf["slots"][0]["id"]

        response = await client.patch(
            f"/slots/{slot_id}", json={"status": "maintenance"}, headers=owner_headers
        )
        assert response.json()["status"] == "maintenance"

        response = await client.delete(f"/slots/{slot_id}", headers=owner_headers)
        assert response.status_code == 204

    async def test_slot_in_the_past_is_rejected(self, client, owner_headers, listed_turf):
        response = await client.post(
            f"/turfs/{listed_turf['id']}/slots",
            json={"date": "2020-01-01", "time_range": "06:00 AM - 07:00 AM"},
            headers=owner_headers,
        )
        assert response.status_code == 400

    async def test_booked_slot_cannot_be_deleted(
        self, client, owner_headers, player_headers, listed_turf
    ):
        slot = listed_turf["slots"][0]
        await client.post("/bookings", json=booking_body(listed_turf, [slot]), headers=player_headers)

        response = await client.delete(f"/slots/{slot['id']}", headers=owner_headers)
        assert response.status_code == 409


class TestBookingEndpoints:
    """Booking flow from request to payment."""

    async def test_booking_lifecycle(self, client, owner_headers, player_headers, listed_turf):
        response = await client.post(
            "/bookings", json=booking_body(listed_turf, listed_turf["slots"]), headers=player_headers
        )
        assert response.status_code == 201
        booking = response.json()
        assert booking["status"] == "pending"
        assert booking["total_amount"] == 2000
        assert booking["turf_name"] == "Riverside Five"
        assert len(booking["slot_details"]) == 2

        slots = (await client.get(f"/turfs/{listed_turf['id']}/slots")).json()
        assert {s["status"] for s in slots} == {"booked"}

        response = await client.post(f"/bookings/{booking['id']}/approve", headers=owner_headers)
        assert response.json()["status"] == "approved"

        response = await client.post(f"/bookings/{booking['id']}/mark-paid", headers=owner_headers)
        assert response.json()["payment_status"] == "paid"

        response = await client.post(f"/bookings/{booking['id']}/cancel", headers=player_headers)
        assert response.status_code == 409

        response = await client.post(f"/bookings/{booking['id']}/complete", headers=owner_headers)
        assert response.json()["status"] == "completed"

        mine = (await client.get("/bookings/mine", params={"scope": "past"}, headers=player_headers)).json()
        assert [b["id"] for b in mine] == [booking["id"]]

    async def test_player_cannot_approve(self, client, player_headers, listed_turf):
        response = await client.post(
            "/bookings", json=booking_body(listed_turf, listed_turf["slots"][:1]), headers=player_headers
        )

        response = await client.post(f"/bookings/{response.json()['id']}/approve", headers=player_headers)
        assert response.status_code == 403

    async def test_booking_requires_login(self, client, listed_turf):
        response = await client.post("/bookings", json=booking_body(listed_turf, listed_turf["slots"]))
        assert response.status_code == 401

    async def test_concurrent_requests_for_one_slot(self, client, player_headers, listed_turf):
        rival = await signup(client, "Rival Player", "player")
        body = booking_body(listed_turf, listed_turf["slots"][:1])

        responses = await asyncio.gather(
            client.post("/bookings", json=body, headers=player_headers),
            client.post("/bookings", json=body, headers=rival),
        )

        assert sorted(r.status_code for r in responses) == [201, 409]

    async def test_cancel_frees_slots(self, client, player_headers, listed_turf):
        response = await client.post(
            "/bookings", json=booking_body(listed_turf, listed_turf["slots"]), headers=player_headers
        )

        response = await client.post(f"/bookings/{response.json()['id']}/cancel", headers=player_headers)
        assert response.json()["status"] == "cancelled"

        slots = (await client.get(f"/turfs/{listed_turf['id']}/slots")).json()
        assert {s["status"] for s in slots} == {"available"}


class TestReviewAndOwnerEndpoints:
    """Reviews, replies, summaries and owner stats."""

    async def test_review_reply_and_summary(self, client, owner_headers, player_headers, listed_turf):
        turf_id = listed_turf["id"]
        response = await client.post(
            f"/turfs/{turf_id}/reviews",
            json={"rating": 4, "comment": "Great turf, lights could be brighter."},
            headers=player_headers,
        )
        assert response.status_code == 201
        review = response.json()
        assert review["user_name"] == "Player User"

        turf = (await client.get(f"/turfs/{turf_id}")).json()
        assert (turf["average_rating"], turf["review_count"]) == (4.0, 1)

        response = await client.post(
            f"/reviews/{review['id']}/reply", json={"reply": "Thanks, new lights coming!"}, headers=owner_headers
        )
        assert response.json()["owner_reply"] == "Thanks, new lights coming!"

        summary = (await client.get(f"/turfs/{turf_id}/reviews/summary")).json()
        assert summary["review_count"] == 1
        assert summary["summary"]

    async def test_short_comment_is_rejected(self, client, player_headers, listed_turf):
        response = await client.post(
            f"/turfs/{listed_turf['id']}/reviews",
            json={"rating": 5, "comment": "ok"},
            headers=player_headers,
        )
        assert response.status_code == 422

    async def test_owner_dashboard_and_utilization(
        self, client, owner_headers, player_headers, listed_turf
    ):
        await client.post(
            "/bookings", json=booking_body(listed_turf, listed_turf["slots"][:1]), headers=player_headers
        )

        dashboard = (await client.get("/owner/dashboard", headers=owner_headers)).json()
        assert dashboard == {
            "total_turfs": 1,
            "upcoming_bookings": 1,
            "pending_bookings": 1,
            "total_revenue": 0,
        }

        pending = (await client.get("/owner/bookings", params={"status": "pending"}, headers=owner_headers)).json()
        assert len(pending) == 1

        params = {"turf_id": listed_turf["id"]}
        assert len((await client.get("/owner/bookings", params=params, headers=owner_headers)).json()) == 1
        params = {"turf_id": listed_turf["id"] + 1}
        assert (await client.get("/owner/bookings", params=params, headers=owner_headers)).json() == []

        response = await client.get(
            f"/owner/turfs/{listed_turf['id']}/utilization", headers=owner_headers
        )
        assert response.status_code == 200
        assert response.json()["daily_data"][0]["booked_slots"] == 1

    async def test_utilization_rejects_reversed_range(self, client, owner_headers, listed_turf):
        response = await client.get(
            f"/owner/turfs/{listed_turf['id']}/utilization",
            params={"from_date": "2030-02-01", "to_date": "2030-01-01"},
            headers=owner_headers,
        )
        assert response.status_code == 400

    async def test_player_cannot_see_owner_dashboard(self, client, player_headers):
        assert (await client.get("/owner/dashboard", headers=player_headers)).status_code == 403
