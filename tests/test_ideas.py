"""
Tests for the ideas API: create, detail, edit, status, delete, likes and activity.
"""

import pytest


def create(client, **fields):
    payload = {"title": "Self-service analytics", "techstack": ["Python"], **fields}
    return client.post("/api/v1/ideas", json=payload)


class TestCreateIdea:
    """Tests for POST /ideas."""

    def test_creates_with_defaults_and_subscribes_creator(self, client, fake_db):
        response = create(client, title="  Self-service analytics  ", business_unit="IT")

        assert response.status_code == 201
        body = response.json()
        assert body["title"] == "Self-service analytics"
        assert body["status"] == "draft"
        assert body["created_by"] == "alice"

        [subscription] = fake_db.rows("idea_subscriptions")
        assert subscription["user_id"] == "alice"
        [prefs] = fake_db.rows("email_preferences")
        assert prefs["notification_types"] == ["status_change", "comments", "updates"]
        assert fake_db.rows("idea_activity")[0]["action_type"] == "idea_created"

    def test_can_opt_out_of_subscription(self, client, fake_db):
        create(client, subscribe_to_updates=False)
        assert fake_db.rows("idea_subscriptions") == []
        assert fake_db.rows("email_preferences") == []

    def test_subscribe_without_email(self, client, fake_db):
        create(client, enable_email_notifications=False)
        assert len(fake_db.rows("idea_subscriptions")) == 1
        assert fake_db.rows("email_preferences") == []

    @pytest.mark.parametrize("payload", [
        {"title": "   "},
        {"title": "Dates", "expected_start_date": "2026-05-02", "expected_end_date": "2026-05-01"},
    ])
    def test_validation(self, client, payload):
        assert client.post("/api/v1/ideas", json=payload).status_code == 422

    def test_activity_failure_does_not_block_creation(self, client, fake_db):
        fake_db.failing_rpcs.add("log_idea_activity")
        assert create(client).status_code == 201


class TestIdeaDetail:
    """Tests for GET /ideas/{id}."""

    def test_detail_with_counts_and_creator(self, client, fake_db, login_as):
        idea = fake_db.add_idea("alice", "Chatbot")
        fake_db.add("likes", {"idea_id": idea["id"], "user_id": "bob"})
        top = fake_db.add("comments", {"idea_id": idea["id"], "user_id": "bob", "text": "hi"})
        fake_db.add("comments", {"idea_id": idea["id"], "user_id": "alice", "text": "yo", "parent_comment_id": top["id"]})

        login_as("bob")
        body = client.get(f"/api/v1/ideas/{idea['id']}").json()

        assert body["likes_count"] == 1
        assert body["comments_count"] == 1
        assert body["is_liked"] is True
        assert body["creator"]["full_name"] == "Alice Owner"
        assert body["can_manage"] is False

    def test_admin_can_manage(self, client, fake_db, login_as):
        idea = fake_db.add_idea("alice")
        login_as("carol")
        assert client.get(f"/api/v1/ideas/{idea['id']}").json()["can_manage"] is True

    def test_missing_idea(self, client):
        assert client.get("/api/v1/ideas/missing").status_code == 404


class TestEditIdea:
    """Tests for PUT and PATCH /status."""

    def test_owner_updates_and_subscribers_are_notified(self, client, fake_db):
        idea = fake_db.add_idea("alice", "Old title", business_unit="Sales")
        fake_db.add("idea_subscriptions", {"idea_id": idea["id"], "user_id": "alice"})
        fake_db.add("idea_subscriptions", {"idea_id": idea["id"], "user_id": "bob"})

        response = client.put(f"/api/v1/ideas/{idea['id']}", json={"title": "New title", "business_unit": "none"})

        assert response.status_code == 200
        assert response.json()["title"] == "New title"
        assert response.json()["business_unit"] is None
        notes = fake_db.rows("notifications")
        assert [n["user_id"] for n in notes] == ["bob"]
        assert notes[0]["type"] == "updates"

    def test_empty_update_is_rejected(self, client, fake_db):
        idea = fake_db.add_idea("alice")
        assert client.put(f"/api/v1/ideas/{idea['id']}", json={}).status_code == 400

    def test_non_owner_cannot_edit(self, client, fake_db, login_as):
        idea = fake_db.add_idea("alice")
        login_as("bob")
        assert client.put(f"/api/v1/ideas/{idea['id']}", json={"title": "Mine now"}).status_code == 403

    def test_status_change_logs_and_notifies(self, client, fake_db):
        idea = fake_db.add_idea("alice")
        fake_db.add("idea_subscriptions", {"idea_id": idea["id"], "user_id": "bob"})
        fake_db.add("email_preferences", {
            "idea_id": idea["id"], "user_id": "bob",
            "notification_types": ["status_change"], "is_active": True,
        })

        response = client.patch(f"/api/v1/ideas/{idea['id']}/status",
                                json={"status": "in_progress", "priority_level": "high", "progress_percentage": 25})

        assert response.status_code == 200
        assert response.json()["progress_percentage"] == 25
        [activity] = fake_db.rows("idea_activity")
        assert activity["description"] == "Status updated to in_progress, priority to high, progress to 25%"
        assert activity["metadata"] == {"previous_status": "draft", "status": "in_progress"}
        assert [n["type"] for n in fake_db.rows("notifications")] == ["status_change"]
        assert [e["p_user_id"] for e in fake_db.emails] == ["bob"]

    def test_same_status_does_not_notify(self, client, fake_db):
        idea = fake_db.add_idea("alice", status="approved")
        fake_db.add("idea_subscriptions", {"idea_id": idea["id"], "user_id": "bob"})

        client.patch(f"/api/v1/ideas/{idea['id']}/status", json={"status": "approved", "progress_percentage": 50})

        assert fake_db.rows("notifications") == []
        assert len(fake_db.rows("idea_activity")) == 1

    def test_progress_out_of_range(self, client, fake_db):
        idea = fake_db.add_idea("alice")
        response = client.patch(f"/api/v1/ideas/{idea['id']}/status", json={"status": "draft", "progress_percentage": 101})
        assert response.status_code == 422

    def test_end_date_before_stored_start(self, client, fake_db):
        idea = fake_db.add_idea("alice", expected_start_date="2026-05-10")
        response = client.put(f"/api/v1/ideas/{idea['id']}", json={"expected_end_date": "2026-05-01"})

        assert response.status_code == 400
        assert fake_db.rows("ideas")[0]["expected_end_date"] is None

    def test_start_date_after_stored_end(self, client, fake_db):
        idea = fake_db.add_idea("alice", expected_end_date="2026-05-01")
        response = client.put(f"/api/v1/ideas/{idea['id']}", json={"expected_start_date": "2026-06-01"})

        assert response.status_code == 400
        assert fake_db.rows("ideas")[0]["expected_start_date"] is None

    def test_single_date_consistent_with_stored(self, client, fake_db):
        idea = fake_db.add_idea("alice", expected_start_date="2026-05-10")
        response = client.put(f"/api/v1/ideas/{idea['id']}", json={"expected_end_date": "2026-05-20"})

        assert response.status_code == 200
        assert response.json()["expected_end_date"] == "2026-05-20"

    def test_clearing_start_allows_earlier_end(self, client, fake_db):
        idea = fake_db.add_idea("alice", expected_start_date="2026-05-10")
        response = client.put(f"/api/v1/ideas/{idea['id']}",
                              json={"expected_start_date": None, "expected_end_date": "2026-05-01"})
        assert response.status_code == 200

    def test_status_only_keeps_priority_and_progress(self, client, fake_db):
        idea = fake_db.add_idea("alice", priority_level="critical", progress_percentage=80)
        response = client.patch(f"/api/v1/ideas/{idea['id']}/status", json={"status": "approved"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "approved"
        assert body["priority_level"] == "critical"
        assert body["progress_percentage"] == 80
        [activity] = fake_db.rows("idea_activity")
        assert activity["description"] == "Status updated to approved, priority to critical, progress to 80%"

    @pytest.mark.parametrize("payload", [
        {"status": "completed"},
        {"title": "Renamed", "priority_level": "high"},
        {"progress_percentage": 90},
    ])
    def test_status_fields_are_not_editable_through_put(self, client, fake_db, payload):
        idea = fake_db.add_idea("alice", "Original")
        fake_db.add("idea_subscriptions", {"idea_id": idea["id"], "user_id": "bob"})

        response = client.put(f"/api/v1/ideas/{idea['id']}", json=payload)

        assert response.status_code == 422
        stored = fake_db.rows("ideas")[0]
        assert (stored["title"], stored["status"], stored["priority_level"]) == ("Original", "draft", "medium")
        assert fake_db.rows("idea_activity") == []
        assert fake_db.rows("notifications") == []


class TestDeleteIdea:
    """Tests for DELETE /ideas/{id}."""

    def test_owner_deletes(self, client, fake_db):
        idea = fake_db.add_idea("alice")
        assert client.delete(f"/api/v1/ideas/{idea['id']}").status_code == 204
        assert fake_db.rows("ideas") == []

    def test_other_user_cannot_delete(self, client, fake_db, login_as):
        idea = fake_db.add_idea("alice")
        login_as("bob")
        assert client.delete(f"/api/v1/ideas/{idea['id']}").status_code == 403


class TestLikes:
    """Tests for like/unlike."""

    def test_like_is_idempotent(self, client, fake_db):
        idea = fake_db.add_idea("bob")
        client.post(f"/api/v1/ideas/{idea['id']}/like")
        body = client.post(f"/api/v1/ideas/{idea['id']}/like").json()

        assert body == {"idea_id": idea["id"], "liked": True, "likes_count": 1}

    def test_unlike(self, client, fake_db):
        idea = fake_db.add_idea("bob")
        fake_db.add("likes", {"idea_id": idea["id"], "user_id": "alice"})
        fake_db.add("likes", {"idea_id": idea["id"], "user_id": "carol"})

        body = client.delete(f"/api/v1/ideas/{idea['id']}/like").json()

        assert body["liked"] is False
        assert body["likes_count"] == 1

    def test_like_missing_idea(self, client):
        assert client.post("/api/v1/ideas/missing/like").status_code == 404


class TestActivity:
    """Tests for GET /ideas/{id}/activity."""

    def test_newest_first(self, client, fake_db):
        idea = fake_db.add_idea("alice")
        for action in ("idea_created", "idea_updated", "status_changed"):
            fake_db.add("idea_activity", {
                "idea_id": idea["id"], "user_id": "alice",
                "action_type": action, "description": action,
            })

        body = client.get(f"/api/v1/ideas/{idea['id']}/activity?limit=2").json()

        assert [a["action_type"] for a in body] == ["status_changed", "idea_updated"]
