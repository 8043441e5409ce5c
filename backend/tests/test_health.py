"""
Tests for health check endpoints.
"""

from sqlalchemy.exc import OperationalError


class TestHealthEndpoints:
    """Test health check API endpoints."""

    def test_health_check(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "ficha-tecnica-api"

    def test_detailed_health_check(self, client):
        response = client.get("/api/health/detailed")
        assert response.status_code == 200
        assert response.json()["database"]["status"] == "healthy"

    def test_detailed_health_check_without_database(self, client, monkeypatch):
        def broken_session():
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        monkeypatch.setattr("rest_api.routers.public.health.SessionLocal", broken_session)

        response = client.get("/api/health/detailed")
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_security_headers(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert "X-Request-ID" in response.headers

    def test_non_json_body_is_rejected(self, client, auth_headers):
        response = client.post(
            "/api/ingredientes",
            content="alimento=Sal",
            headers={**auth_headers, "Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 415
