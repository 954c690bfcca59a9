"""Tests for the challenge endpoints."""

from datetime import datetime, timedelta, timezone

from modules.commutes.calculator import local_now, week_start_for


def challenge_body(**overrides) -> dict:
    now = datetime.now(timezone.utc)
    body = {
        "title": "Bike to Work Week",
        "description": "Cycle at least 3 days this week",
        "start_date": now.isoformat(),
        "end_date": (now + timedelta(days=7)).isoformat(),
        "points_reward": 50,
        "goal_type": "days",
        "goal_value": 3,
        "commute_type": "cycle",
    }
    body.update(overrides)
    return body


class TestChallengeAdmin:
    def test_member_cannot_create(self, client, stored_users, auth_headers):
        response = client.post("/api/challenges", json=challenge_body(), headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "INSUFFICIENT_PERMISSIONS"

    def test_admin_crud(self, client, stored_users, admin_headers):
        created = client.post("/api/challenges", json=challenge_body(), headers=admin_headers)
        assert created.status_code == 201
        challenge_id = created.json()["id"]
        assert created.json()["company_id"] == 1

        updated = client.put(
            f"/api/challenges/{challenge_id}",
            json={"points_reward": 75},
            headers=admin_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["points_reward"] == 75
        assert updated.json()["title"] == "Bike to Work Week"

        deleted = client.delete(f"/api/challenges/{challenge_id}", headers=admin_headers)
        assert deleted.status_code == 204
        assert client.get("/api/challenges", headers=admin_headers).json() == []

    def test_update_missing(self, client, stored_users, admin_headers):
        response = client.put("/api/challenges/42", json={"title": "x"}, headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "CHALLENGE_NOT_FOUND"

    def test_create_with_end_before_start(self, client, stored_users, admin_headers):
        now = datetime.now(timezone.utc)
        body = challenge_body(end_date=(now - timedelta(days=1)).isoformat())

        response = client.post("/api/challenges", json=body, headers=admin_headers)

        assert response.status_code == 400


class TestParticipation:
    def test_join_and_progress(self, client, stored_users, auth_headers, admin_headers):
        challenge_id = client.post("/api/challenges", json=challenge_body(), headers=admin_headers).json()["id"]

        joined = client.post(f"/api/challenges/{challenge_id}/join", headers=auth_headers)
        assert joined.status_code == 201
        assert joined.json()["progress"] == 0

        again = client.post(f"/api/challenges/{challenge_id}/join", headers=auth_headers)
        assert again.status_code == 400
        assert again.json()["error"] == "ALREADY_PARTICIPATING"

        client.post("/api/commutes", json={
            "commute_type": "cycle",
            "days_logged": 3,
            "distance_km": 8,
            "week_start": week_start_for(local_now()).isoformat(),
        }, headers=auth_headers)

        [mine] = client.get("/api/user/challenges", headers=auth_headers).json()
        assert mine["challenge"]["id"] == challenge_id
        assert mine["participant"]["progress"] == 3
        assert mine["participant"]["completed"] is True

        stats = client.get("/api/user/stats", headers=auth_headers).json()
        assert stats["completed_challenges"] == 1
        # 300 + 100 for the commute + 50 for the challenge
        assert stats["points"] == 450

    def test_join_unknown_challenge(self, client, stored_users, auth_headers):
        response = client.post("/api/challenges/42/join", headers=auth_headers)
        assert response.status_code == 404
