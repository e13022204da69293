import json

from models import AuditLog


def _book(client, auth, showtime_id, seats, user_id):
    return client.post(f"/showtimes/{showtime_id}/bookings", json={"seats": seats}, headers=auth(user_id))


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.get_json() == {"status": "ok"}
        assert resp.headers["X-Frame-Options"] == "DENY"


class TestBookingScenario:
    def test_reserve_conflict_retry_cancel_rebook(self, client, auth, showtime):
        sid = showtime.id

        r1 = _book(client, auth, sid, ["A1", "A2"], 1)
        assert r1.status_code == 201
        assert r1.get_json()["total_amount"] == 500
        u1_booking = r1.get_json()["id"]

        r2 = _book(client, auth, sid, ["A2", "A3"], 2)
        assert r2.status_code == 409
        assert r2.get_json()["seats"] == ["A2"]
        assert r2.get_json()["booked_seats"] == ["A1", "A2"]

        r3 = _book(client, auth, sid, ["A3"], 2)
        assert r3.status_code == 201
        assert r3.get_json()["total_amount"] == 250

        seats = client.get(f"/showtimes/{sid}/seats").get_json()
        assert seats["booked_seats"] == ["A1", "A2", "A3"]
        assert seats["available_count"] == 77
        assert seats["ticket_price"] == 250

        cancel = client.post(f"/bookings/{u1_booking}/cancel", headers=auth(1))
        assert cancel.status_code == 200
        assert cancel.get_json()["status"] == "CANCELLED"

        seats = client.get(f"/showtimes/{sid}/seats").get_json()
        assert seats["booked_seats"] == ["A3"]

        r4 = _book(client, auth, sid, ["A1", "A2"], 3)
        assert r4.status_code == 201


class TestBookingErrors:
    def test_selection_must_be_a_list(self, client, auth, showtime):
        for seats in (5, True, {"A1": 1}, "A1"):
            resp = client.post(f"/showtimes/{showtime.id}/bookings", json={"seats": seats}, headers=auth(1))
            assert resp.status_code == 400
            assert "error" in resp.get_json()

    def test_requires_identity(self, client, showtime):
        resp = client.post(f"/showtimes/{showtime.id}/bookings", json={"seats": ["A1"]})
        assert resp.status_code == 401

    def test_unknown_showtime(self, client, auth, app):
        assert _book(client, auth, 404, ["A1"], 1).status_code == 404
        assert client.get("/showtimes/404/seats").status_code == 404

    def test_invalid_selection(self, client, auth, showtime):
        resp = _book(client, auth, showtime.id, ["Z9"], 1)
        assert resp.status_code == 400
        assert "error" in resp.get_json()

        assert _book(client, auth, showtime.id, [], 1).status_code == 400

    def test_cancel_errors(self, client, auth, showtime):
        booking_id = _book(client, auth, showtime.id, ["B5"], 1).get_json()["id"]

        assert client.post("/bookings/999/cancel", headers=auth(1)).status_code == 404
        assert client.post(f"/bookings/{booking_id}/cancel", headers=auth(2)).status_code == 403
        assert client.post(f"/bookings/{booking_id}/cancel", headers=auth(1)).status_code == 200

        again = client.post(f"/bookings/{booking_id}/cancel", headers=auth(1))
        assert again.status_code == 409
        assert again.get_json()["error"] == "Booking already cancelled"


class TestMyBookings:
    def test_lists_own_bookings_newest_first(self, client, auth, showtime, other_showtime):
        first = _book(client, auth, showtime.id, ["C1"], 1).get_json()["id"]
        second = _book(client, auth, other_showtime.id, ["C2", "C3"], 1).get_json()["id"]
        _book(client, auth, showtime.id, ["C9"], 2)
        client.post(f"/bookings/{first}/cancel", headers=auth(1))

        rows = client.get("/bookings/me", headers=auth(1)).get_json()
        assert [r["id"] for r in rows] == [second, first]
        assert rows[0]["seats"] == ["C2", "C3"]
        assert rows[0]["showtime"]["movie_title"] == "The Long Night"

        confirmed = client.get("/bookings/me?status=confirmed", headers=auth(1)).get_json()
        assert [r["id"] for r in confirmed] == [second]

    def test_rejects_unknown_status(self, client, auth, app):
        assert client.get("/bookings/me?status=PENDING", headers=auth(1)).status_code == 400


class TestAdmin:
    def test_stats_require_admin(self, client, auth, app):
        assert client.get("/admin/bookings/stats").status_code == 401
        assert client.get("/admin/bookings/stats", headers=auth(1)).status_code == 403

    def test_stats_count_confirmed_only(self, client, auth, showtime):
        keep = _book(client, auth, showtime.id, ["G1", "G2"], 1)
        drop = _book(client, auth, showtime.id, ["G3"], 2).get_json()["id"]
        client.post(f"/bookings/{drop}/cancel", headers=auth(2))

        resp = client.get("/admin/bookings/stats", headers=auth(9, roles=["admin"]))
        assert keep.status_code == 201
        assert resp.status_code == 200
        assert resp.get_json() == {"confirmed_bookings": 1, "total_revenue": 500}

    def test_booking_events_are_audited(self, client, auth, showtime):
        _book(client, auth, showtime.id, ["H1"], 1)
        _book(client, auth, showtime.id, ["H1", "H2"], 2)

        actions = [r.action for r in AuditLog.query.order_by(AuditLog.id).all()]
        assert actions == ["BOOKING_CREATE", "BOOKING_FAIL_CONFLICT"]

        conflict_row = AuditLog.query.filter_by(action="BOOKING_FAIL_CONFLICT").one()
        assert json.loads(conflict_row.metadata_json) == {"seats": ["H1"]}

        logs = client.get("/admin/audit-logs?limit=1", headers=auth(9, roles=["ADMIN"])).get_json()
        assert len(logs) == 1
        assert logs[0]["action"] == "BOOKING_FAIL_CONFLICT"
