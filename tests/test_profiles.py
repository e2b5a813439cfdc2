"""
Tests for profiles.
"""

from app.modules.profiles.service import ProfileService


class TestProfiles:
    """GET/PUT /profiles."""

    def test_get_my_profile(self, client):
        body = client.get("/api/v1/profiles/me").json()
        assert body["full_name"] == "Alice Owner"

    def test_update_trims_and_clears(self, client):
        body = client.put("/api/v1/profiles/me", json={"full_name": "  Alice A.  ", "avatar_url": "  "}).json()

        assert body["full_name"] == "Alice A."
        assert body["avatar_url"] is None
        assert body["updated_at"] is not None

    def test_other_profile(self, client):
        assert client.get("/api/v1/profiles/bob").json()["full_name"] == "Bob Builder"

    def test_unknown_profile(self, client):
        assert client.get("/api/v1/profiles/nobody").status_code == 404


class TestProfilesMap:
    """Tests for ProfileService.get_profiles_map."""

    def test_bulk_lookup_skips_blanks(self, fake_db):
        profiles = ProfileService(fake_db).get_profiles_map(["bob", None, "bob", "ghost", ""])
        assert list(profiles) == ["bob"]

    def test_failure_degrades_to_empty(self, fake_db):
        fake_db.failing_tables.add("profiles")
        assert ProfileService(fake_db).get_profiles_map(["bob"]) == {}
