"""
Tests for the HTTP surface: status codes, payload shapes and admin gating.
"""

from conftest import ADMIN_KEY

from scoreboard.core import StorageUnavailable


def _post(client, **body):
    return client.post("/api/submit-score", json=body)


class TestSubmitScore:
    def test_success(self, client):
        response = _post(client, registrationNumber="A1", finalScore=500, studentName="Ada")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["created"] is True
        assert body["bestScore"] == 500
        assert isinstance(body["scoreId"], int)

    def test_merge_reports_existing_record(self, client):
        first = _post(client, registrationNumber="A1", finalScore=500).json()
        second = _post(client, registrationNumber="A1", finalScore=300).json()
        assert second["created"] is False
        assert second["scoreId"] == first["scoreId"]
        assert second["bestScore"] == 500

    def test_zero_score_accepted(self, client):
        assert _post(client, registrationNumber="A1", finalScore=0).status_code == 200

    def test_missing_score_is_bad_request(self, client, store):
        response = _post(client, registrationNumber="A1")
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert store.snapshot() == []

    def test_non_object_body_is_bad_request(self, client):
        response = client.post("/api/submit-score", json=[1, 2, 3])
        assert response.status_code == 400

    def test_source_address_recorded(self, client, store):
        _post(client, registrationNumber="A1", finalScore=1)
        assert store.snapshot()[0].source_address == "testclient"

    def test_non_finite_breakdown_is_bad_request(self, client, store):
        response = client.post(
            "/api/submit-score",
            content='{"registrationNumber": "X1", "finalScore": 5, "levelBreakdown": {"1": NaN}}',
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        assert store.snapshot() == []

        _post(client, registrationNumber="A1", finalScore=5)
        assert client.get("/api/leaderboard").status_code == 200
        assert client.get("/api/rank/A1").status_code == 200
        assert client.get("/api/admin/backup", headers={"admin-key": ADMIN_KEY}).status_code == 200

    def test_score_beyond_64_bits_is_bad_request(self, client, store):
        assert _post(client, registrationNumber="H1", finalScore=10**20).status_code == 400
        assert _post(client, registrationNumber="H2", finalScore=1e300).status_code == 400
        assert store.snapshot() == []

    def test_storage_failure_is_unavailable(self, client, store, monkeypatch):
        def _fail(submission):
            raise StorageUnavailable("Score storage is unavailable.")

        monkeypatch.setattr(store, "submit", _fail)
        response = _post(client, registrationNumber="A1", finalScore=1)
        assert response.status_code == 503
        assert response.json() == {"success": False, "message": "Score storage is unavailable."}


class TestLeaderboard:
    def test_rows(self, client):
        _post(client, registrationNumber="B1", finalScore=100, levelBreakdown={"1": {"hits": 4}})
        _post(client, registrationNumber="C1", finalScore=100)
        _post(client, registrationNumber="D1", finalScore=250, studentName="Dee")

        body = client.get("/api/leaderboard").json()
        assert body["success"] is True
        assert body["total"] == 3
        assert [row["registration_number"] for row in body["leaderboard"]] == ["D1", "B1", "C1"]

        top = body["leaderboard"][0]
        assert top["rank"] == 1
        assert top["student_name"] == "Dee"
        assert top["best_score"] == 250
        assert top["last_submitted_at"].endswith("Z")
        assert body["leaderboard"][1]["level_breakdown"] == {"1": {"hits": 4}}

    def test_paging_and_total_is_page_size(self, client):
        for n in range(5):
            _post(client, registrationNumber=f"P{n}", finalScore=n * 10)
        body = client.get("/api/leaderboard", params={"limit": 2, "offset": 2}).json()
        assert body["total"] == 2
        assert [row["rank"] for row in body["leaderboard"]] == [3, 4]

    def test_malformed_limit_uses_default(self, client):
        _post(client, registrationNumber="A1", finalScore=1)
        response = client.get("/api/leaderboard", params={"limit": "many"})
        assert response.status_code == 200
        assert response.json()["total"] == 1


class TestStatsAndRank:
    def test_empty_stats(self, client):
        body = client.get("/api/stats").json()
        assert body["stats"] == {
            "total_participants": 0,
            "highest_score": None,
            "average_score": None,
            "average_levels_completed": None,
            "average_accuracy": None,
        }

    def test_stats(self, client):
        _post(client, registrationNumber="A1", finalScore=100, levelsCompleted=2)
        _post(client, registrationNumber="B1", finalScore=300, levelsCompleted=4)
        stats = client.get("/api/stats").json()["stats"]
        assert stats["total_participants"] == 2
        assert stats["highest_score"] == 300
        assert stats["average_score"] == 200
        assert stats["average_levels_completed"] == 3

    def test_rank(self, client):
        _post(client, registrationNumber="A1", finalScore=100)
        _post(client, registrationNumber="B1", finalScore=300)
        body = client.get("/api/rank/A1").json()
        assert body["student"]["rank"] == 2
        assert body["student"]["registration_number"] == "A1"

    def test_rank_not_found(self, client):
        response = client.get("/api/rank/nobody")
        assert response.status_code == 404
        assert response.json()["success"] is False


class TestAdmin:
    def test_requires_key(self, client):
        assert client.delete("/api/admin/clear-all").status_code == 403
        assert client.get("/api/admin/backup").status_code == 403

    def test_wrong_key(self, client):
        response = client.delete("/api/admin/clear-all", headers={"admin-key": "guess"})
        assert response.status_code == 403

    def test_disabled_without_configured_key(self, client, monkeypatch):
        monkeypatch.delenv("ADMIN_KEY")
        response = client.delete("/api/admin/clear-all", params={"key": ADMIN_KEY})
        assert response.status_code == 403

    def test_clear_all(self, client, store):
        _post(client, registrationNumber="A1", finalScore=1)
        _post(client, registrationNumber="B1", finalScore=2)
        response = client.delete("/api/admin/clear-all", headers={"admin-key": ADMIN_KEY})
        assert response.status_code == 200
        assert response.json()["deletedRecords"] == 2
        assert store.snapshot() == []

    def test_clear_student_by_query(self, client, store):
        _post(client, registrationNumber="A1", finalScore=1)
        _post(client, registrationNumber="B1", finalScore=2)
        response = client.delete(
            "/api/admin/clear-student", params={"key": ADMIN_KEY, "reg": "A1"}
        )
        assert response.status_code == 200
        assert response.json()["deletedRecords"] == 1
        assert [r.registration_number for r in store.snapshot()] == ["B1"]

    def test_clear_student_by_body(self, client, store):
        _post(client, registrationNumber="A1", finalScore=1)
        response = client.request(
            "DELETE",
            "/api/admin/clear-student",
            headers={"admin-key": ADMIN_KEY},
            json={"registrationNumber": "A1"},
        )
        assert response.status_code == 200
        assert store.snapshot() == []

    def test_clear_student_unknown(self, client):
        response = client.delete(
            "/api/admin/clear-student", params={"key": ADMIN_KEY, "reg": "ghost"}
        )
        assert response.status_code == 404

    def test_clear_student_missing_key(self, client):
        response = client.delete("/api/admin/clear-student", params={"key": ADMIN_KEY})
        assert response.status_code == 400

    def test_backup(self, client):
        _post(client, registrationNumber="A1", finalScore=10, sessionId="s1")
        _post(client, registrationNumber="B1", finalScore=20)
        response = client.get("/api/admin/backup", headers={"admin-key": ADMIN_KEY})
        assert response.status_code == 200
        assert response.headers["content-disposition"].startswith(
            'attachment; filename="tournament_backup_'
        )

        backup = response.json()
        assert backup["totalRecords"] == 2
        assert backup["exportDate"].endswith("Z")
        assert [row["registration_number"] for row in backup["data"]] == ["B1", "A1"]
        assert backup["data"][1]["session_id"] == "s1"
        assert backup["data"][1]["submission_count"] == 1


class TestHealth:
    def test_health(self, client):
        body = client.get("/api/health").json()
        assert body["success"] is True
        assert body["timestamp"].endswith("Z")
