"""
Tests for the board endpoints.
"""


class TestBoardRoutes:
    """GET /board and /board/options."""

    def seed(self, fake_db):
        first = fake_db.add_idea("alice", "Data lake", techstack=["Python", "AWS"], status="in_progress")
        second = fake_db.add_idea("bob", "Mobile app", techstack=["React"], status="draft")
        fake_db.add("likes", {"idea_id": second["id"], "user_id": "alice"})
        return first, second

    def test_default_board_has_single_group(self, client, fake_db):
        first, second = self.seed(fake_db)
        body = client.get("/api/v1/board").json()

        assert body["total"] == 2
        assert body["has_filters"] is False
        [group] = body["groups"]
        assert group["key"] == "All Ideas"
        assert [i["id"] for i in group["ideas"]] == [second["id"], first["id"]]
        assert group["ideas"][0]["is_liked"] is True

    def test_nested_grouping_via_repeated_param(self, client, fake_db):
        self.seed(fake_db)
        body = client.get("/api/v1/board?group_by=status&group_by=tech_stack&sort_by=oldest").json()

        assert body["group_by"] == ["status", "tech_stack"]
        in_progress = body["groups"][0]
        assert in_progress["key"] == "in_progress"
        assert [g["key"] for g in in_progress["groups"]] == ["Python", "AWS"]

    def test_my_ideas(self, client, fake_db, login_as):
        self.seed(fake_db)
        login_as("bob")
        body = client.get("/api/v1/board?filter_by=my-ideas").json()

        assert body["matched"] == 1
        assert body["has_filters"] is True

    def test_unknown_grouping_is_rejected(self, client):
        assert client.get("/api/v1/board?group_by=color").status_code == 422

    def test_options(self, client):
        body = client.get("/api/v1/board/options").json()

        assert "in_review" in body["statuses"]
        assert body["priorities"] == ["low", "medium", "high", "critical"]
        assert {"value": "tech_stack", "label": "Tech Stack"} in body["grouping_options"]
