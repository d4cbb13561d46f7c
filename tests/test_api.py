from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from tunedash.config import Settings
from tunedash.core.session_store import SessionStore
from tunedash.main import create_app
from tunedash.storage.memory import MemStorage


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemStorage()
        app = create_app(Settings(REDIS_URL=""), storage=self.store, session_store=SessionStore(None))
        self.client = TestClient(app)
        self.headers = self.register_and_login("artist", "artist@example.com")

    def register_and_login(self, username: str, email: str, password: str = "secret123") -> dict:
        response = self.client.post("/api/v1/user/register", json={
            "username": username,
            "email": email,
            "password": password,
            "artist_name": username.title(),
        })
        self.assertEqual(response.status_code, 201, response.text)
        response = self.client.post("/api/v1/user/login", data={"username": username, "password": password})
        self.assertEqual(response.status_code, 200, response.text)
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    def create_track(self, headers: dict | None = None, **overrides) -> dict:
        payload = {"title": "Song", "duration": 180, "file_url": "/uploads/song.mp3"}
        payload.update(overrides)
        response = self.client.post("/api/v1/tracks", json=payload, headers=headers or self.headers)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()


class UserApiTest(ApiTestCase):
    def test_me_hides_password(self) -> None:
        response = self.client.get("/api/v1/user/me", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["username"], "artist")
        self.assertEqual(body["artist_name"], "Artist")
        self.assertNotIn("password", body)

    def test_duplicate_username_and_email_rejected(self) -> None:
        for payload in (
            {"username": "artist", "email": "new@example.com", "password": "secret123"},
            {"username": "new", "email": "artist@example.com", "password": "secret123"},
        ):
            response = self.client.post("/api/v1/user/register", json=payload)
            self.assertEqual(response.status_code, 400)

    def test_short_password_rejected(self) -> None:
        response = self.client.post("/api/v1/user/register", json={
            "username": "new", "email": "new@example.com", "password": "123"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"detail": "Invalid request data"})

    def test_login_with_email(self) -> None:
        response = self.client.post(
            "/api/v1/user/login", data={"username": "artist@example.com", "password": "secret123"})
        self.assertEqual(response.status_code, 200)

    def test_bad_login(self) -> None:
        response = self.client.post("/api/v1/user/login", data={"username": "artist", "password": "nope"})
        self.assertEqual(response.status_code, 401)

    def test_logout_revokes_token(self) -> None:
        self.assertEqual(self.client.post("/api/v1/user/logout", headers=self.headers).status_code, 200)
        self.assertEqual(self.client.get("/api/v1/user/me", headers=self.headers).status_code, 401)

    def test_protected_routes_need_auth(self) -> None:
        for path in ("/api/v1/tracks", "/api/v1/playlists", "/api/v1/analytics", "/api/v1/dashboard/stats"):
            with self.subTest(path=path):
                self.assertEqual(self.client.get(path).status_code, 401)
        bogus = {"Authorization": "Bearer not-a-token"}
        self.assertEqual(self.client.get("/api/v1/tracks", headers=bogus).status_code, 401)


class TrackApiTest(ApiTestCase):
    def test_create_and_list(self) -> None:
        track = self.create_track(genre="Pop")
        self.assertEqual(track["plays"], 0)
        self.assertEqual(track["status"], "processing")

        response = self.client.get("/api/v1/tracks", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual([t["id"] for t in response.json()], [track["id"]])

    def test_invalid_payload_is_400(self) -> None:
        for payload in (
            {"title": "Song", "file_url": "/x.mp3"},
            {"title": "Song", "duration": 0, "file_url": "/x.mp3"},
            {"title": "Song", "duration": 10, "file_url": "/x.mp3", "status": "live"},
        ):
            with self.subTest(payload=payload):
                response = self.client.post("/api/v1/tracks", json=payload, headers=self.headers)
                self.assertEqual(response.status_code, 400)

    def test_update_track(self) -> None:
        track = self.create_track()
        response = self.client.patch(
            f"/api/v1/tracks/{track['id']}", json={"status": "published", "genre": "Rock"}, headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "published")
        self.assertEqual(response.json()["genre"], "Rock")

        response = self.client.patch(
            f"/api/v1/tracks/{track['id']}", json={"status": "processing"}, headers=self.headers)
        self.assertEqual(response.status_code, 400)

        response = self.client.patch(f"/api/v1/tracks/{track['id']}", json={"title": None}, headers=self.headers)
        self.assertEqual(response.status_code, 400)

    def test_update_cannot_touch_plays(self) -> None:
        track = self.create_track()
        response = self.client.patch(f"/api/v1/tracks/{track['id']}", json={"plays": 1000}, headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["plays"], 0)

    def test_other_user_gets_404(self) -> None:
        track = self.create_track()
        other = self.register_and_login("other", "other@example.com")
        path = f"/api/v1/tracks/{track['id']}"
        self.assertEqual(self.client.get(path, headers=other).status_code, 404)
        self.assertEqual(self.client.patch(path, json={"title": "X"}, headers=other).status_code, 404)
        self.assertEqual(self.client.delete(path, headers=other).status_code, 404)
        self.assertEqual(self.client.get(path, headers=self.headers).status_code, 200)

    def test_delete_twice(self) -> None:
        track = self.create_track()
        path = f"/api/v1/tracks/{track['id']}"
        response = self.client.delete(path, headers=self.headers)
        self.assertEqual(response.status_code, 204)
        self.assertEqual(response.content, b"")
        self.assertEqual(self.client.delete(path, headers=self.headers).status_code, 404)

    def test_play_needs_no_auth(self) -> None:
        track = self.create_track()
        for _ in range(3):
            response = self.client.post(f"/api/v1/tracks/{track['id']}/play")
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json(), {"message": "Play recorded"})

        response = self.client.get(f"/api/v1/tracks/{track['id']}", headers=self.headers)
        self.assertEqual(response.json()["plays"], 3)
        self.assertEqual(self.client.post("/api/v1/tracks/missing/play").status_code, 404)

    def test_top_tracks(self) -> None:
        quiet = self.create_track(title="Quiet")
        loud = self.create_track(title="Loud")
        for _ in range(2):
            self.client.post(f"/api/v1/tracks/{loud['id']}/play")
        self.client.post(f"/api/v1/tracks/{quiet['id']}/play")

        response = self.client.get("/api/v1/tracks/top", params={"limit": 1}, headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual([t["title"] for t in response.json()], ["Loud"])


class PlaylistApiTest(ApiTestCase):
    def create_playlist(self, **overrides) -> dict:
        payload = {"title": "Mix"}
        payload.update(overrides)
        response = self.client.post("/api/v1/playlists", json=payload, headers=self.headers)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_create_defaults(self) -> None:
        playlist = self.create_playlist()
        self.assertEqual(playlist["track_count"], 0)
        self.assertEqual(playlist["total_duration"], 0)
        self.assertEqual(playlist["plays"], 0)
        self.assertTrue(playlist["is_public"])

    def test_update_and_delete(self) -> None:
        playlist = self.create_playlist()
        path = f"/api/v1/playlists/{playlist['id']}"
        response = self.client.patch(path, json={"is_public": False}, headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()["is_public"])

        other = self.register_and_login("other", "other@example.com")
        self.assertEqual(self.client.delete(path, headers=other).status_code, 404)
        self.assertEqual(self.client.delete(path, headers=self.headers).status_code, 204)
        self.assertEqual(self.client.delete(path, headers=self.headers).status_code, 404)

    def test_track_membership(self) -> None:
        playlist = self.create_playlist()
        track = self.create_track(duration=200)
        tracks_path = f"/api/v1/playlists/{playlist['id']}/tracks"

        response = self.client.post(tracks_path, json={"track_id": track["id"]}, headers=self.headers)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["position"], 0)

        body = self.client.get(f"/api/v1/playlists/{playlist['id']}", headers=self.headers).json()
        self.assertEqual((body["track_count"], body["total_duration"]), (1, 200))

        entries = self.client.get(tracks_path, headers=self.headers).json()
        self.assertEqual([e["track_id"] for e in entries], [track["id"]])

        response = self.client.delete(f"{tracks_path}/{track['id']}", headers=self.headers)
        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.delete(f"{tracks_path}/{track['id']}", headers=self.headers).status_code, 404)

    def test_add_unknown_track_is_404(self) -> None:
        playlist = self.create_playlist()
        response = self.client.post(
            f"/api/v1/playlists/{playlist['id']}/tracks", json={"track_id": "missing"}, headers=self.headers)
        self.assertEqual(response.status_code, 404)

    def test_playlist_play(self) -> None:
        playlist = self.create_playlist()
        self.assertEqual(self.client.post(f"/api/v1/playlists/{playlist['id']}/play").status_code, 200)
        body = self.client.get(f"/api/v1/playlists/{playlist['id']}", headers=self.headers).json()
        self.assertEqual(body["plays"], 1)
        self.assertEqual(self.client.post("/api/v1/playlists/missing/play").status_code, 404)


class AnalyticsApiTest(ApiTestCase):
    def test_analytics_window(self) -> None:
        track = self.create_track()
        self.client.post(f"/api/v1/tracks/{track['id']}/play")

        response = self.client.get("/api/v1/analytics", params={"days": 7}, headers=self.headers)
        self.assertEqual(response.status_code, 200)
        events = response.json()
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0]["plays"], 1)
        self.assertEqual(events[0]["track_id"], track["id"])

        daily = self.client.get("/api/v1/analytics/daily", headers=self.headers).json()
        self.assertEqual(len(daily), 1)
        self.assertEqual(daily[0]["plays"], 1)

    def test_invalid_window_is_400(self) -> None:
        for days in ("0", "-3", "abc"):
            with self.subTest(days=days):
                response = self.client.get("/api/v1/analytics", params={"days": days}, headers=self.headers)
                self.assertEqual(response.status_code, 400)

    def test_record_revenue(self) -> None:
        track = self.create_track()
        response = self.client.post(
            "/api/v1/analytics/revenue", json={"track_id": track["id"], "amount": 7.5}, headers=self.headers)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["revenue"], 7.5)

        response = self.client.post(
            "/api/v1/analytics/revenue", json={"track_id": track["id"], "amount": -1}, headers=self.headers)
        self.assertEqual(response.status_code, 400)

        other = self.register_and_login("other", "other@example.com")
        response = self.client.post(
            "/api/v1/analytics/revenue", json={"track_id": track["id"], "amount": 1}, headers=other)
        self.assertEqual(response.status_code, 404)


class DashboardApiTest(ApiTestCase):
    def test_stats(self) -> None:
        track = self.create_track(duration=180)
        for _ in range(3):
            self.client.post(f"/api/v1/tracks/{track['id']}/play")
        self.client.post(
            "/api/v1/analytics/revenue", json={"track_id": track["id"], "amount": 4.0}, headers=self.headers)
        self.client.post("/api/v1/playlists", json={"title": "Mix"}, headers=self.headers)

        response = self.client.get("/api/v1/dashboard/stats", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            "total_plays": 3,
            "total_revenue": 4.0,
            "total_tracks": 1,
            "total_playlists": 1,
            "followers": 0,
        })

    def test_health(self) -> None:
        self.assertEqual(self.client.get("/health").json(), {"status": "healthy"})


if __name__ == "__main__":
    unittest.main()
