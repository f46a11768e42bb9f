"""
Integration tests for application assembly.
"""

from unittest.mock import Mock

import pytest

from app_factory import create_app
from quickscan.application import AuthService, DependencyContainer, FileService
from quickscan.config import AppConfig, OpenAIConfig, StorageConfig
from quickscan.domain.errors import ConfigurationError
from quickscan.domain.file_storage import FileRegistry, SignedUrlService, StorageType, derive_signing_key
from quickscan.infrastructure import StorageService


class TestCreateApp:
    def test_services_are_wired(self, app):
        assert isinstance(app.container, DependencyContainer)
        assert app.container.resolve(FileService) is app.file_service
        assert app.file_service.registry is app.container.resolve(FileRegistry)
        assert app.container.resolve(StorageService).active_type is StorageType.TEMPORARY

    def test_routes(self, app):
        rules = {rule.rule for rule in app.url_map.iter_rules()}

        for path in (
            "/health",
            "/api/health",
            "/api/auth/register",
            "/api/auth/login",
            "/api/auth/token",
            "/api/auth/verify",
            "/api/auth/me",
            "/api/scans",
            "/api/upload",
            "/api/files",
            "/api/files/cleanup",
            "/api/summarize",
            "/api/chat/completion",
        ):
            assert path in rules

    def test_two_apps_do_not_share_state(self, app_config, completion_client):
        first = create_app(app_config, completion_client=completion_client)
        second = create_app(app_config, completion_client=completion_client)

        assert first.file_service.registry is not second.file_service.registry
        assert first.auth_service.credential_store is not second.auth_service.credential_store

    def test_supabase_without_credentials_fails_fast(self, auth_config, upload_dir):
        config = AppConfig(
            auth=auth_config,
            storage=StorageConfig(storage_type="supabase", upload_dir=str(upload_dir)),
            openai=OpenAIConfig(api_key=""),
            testing=True,
        )

        with pytest.raises(ConfigurationError):
            create_app(config)

    def test_environment_configuration(self, monkeypatch, tmp_path):
        monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "env-uploads"))
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "2048")
        monkeypatch.setenv("JWT_SECRET", "env-secret")

        app = create_app()

        assert app.file_service.max_upload_bytes == 2048
        assert not app.auth_service.token_service.uses_default_secret


class TestHealth:
    def test_bare_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json()["status"] == "healthy"
        assert response.get_json()["message"] == "QuickScan backend is running with AI capabilities"

    def test_api_health_envelope(self, client):
        body = client.get("/api/health").get_json()

        assert body["success"] is True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["timestamp"]


class TestFrameworkErrors:
    def test_unknown_route(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.get_json()["success"] is False

    def test_wrong_method(self, client):
        response = client.put("/api/files")

        assert response.status_code == 400
        assert response.get_json()["message"] == "Method not allowed for this endpoint"

    def test_cors_headers(self, client):
        response = client.get("/health", headers={"Origin": "http://localhost:5173"})

        # flask-cors echoes the request origin in recent releases and "*" in older ones
        assert response.headers["Access-Control-Allow-Origin"] in ("http://localhost:5173", "*")


class TestUnconfiguredAI:
    def test_summarize_without_api_key(self, app_config):
        client = create_app(app_config).test_client()

        response = client.post("/api/summarize", json={"content": "A long enough piece of text."})

        assert response.status_code == 500
        assert response.get_json()["error"]["type"] == "configuration_error"


class TestCleanupCommand:
    def test_cleanup_files_command(self, app):
        app.file_service.upload("a.txt", "text/plain", b"abc")

        result = app.test_cli_runner().invoke(args=["cleanup-files", "--max-age-hours", "1"])

        assert result.exit_code == 0
        assert "Cleaned up 0 expired files" in result.output
        assert len(app.file_service.list_files()) == 1

    def test_cleanup_command_resolves_file_service_from_container(self, app):
        file_service = Mock(spec=FileService)
        file_service.cleanup.return_value = 3
        app.container.override(FileService, file_service)

        result = app.test_cli_runner().invoke(args=["cleanup-files"])

        assert "Cleaned up 3 expired files" in result.output
        file_service.cleanup.assert_called_once_with(None)


class TestContainerResolution:
    def test_handlers_resolve_services_per_request(self, app, client):
        app.file_service.upload("a.txt", "text/plain", b"abc")
        file_service = Mock(spec=FileService)
        file_service.list_files.return_value = []
        app.container.override(FileService, file_service)

        body = client.get("/api/files").get_json()

        assert body["data"] == {"files": [], "total_count": 0}
        file_service.list_files.assert_called_once_with()

    def test_bearer_auth_resolves_auth_service(self, app, client):
        user = Mock()
        user.to_dict.return_value = {"id": "user-1", "email": "ada@example.com"}
        auth_service = Mock(spec=AuthService)
        auth_service.current_user.return_value = user
        app.container.override(AuthService, auth_service)

        response = client.get("/api/auth/me", headers={"Authorization": "Bearer anything"})

        assert response.status_code == 200
        assert response.get_json()["data"]["email"] == "ada@example.com"
        auth_service.current_user.assert_called_once_with("Bearer anything")


class TestApiDocs:
    def test_swagger_spec(self, client):
        response = client.get("/api/swagger.json")

        assert response.status_code == 200
        spec = response.get_json()
        assert spec["info"]["title"] == "QuickScan API"
        for path in (
            "/health",
            "/auth/login",
            "/auth/me",
            "/scans/{scan_id}",
            "/upload",
            "/files/{file_id}/download",
            "/files/{file_id}/url",
            "/summarize",
            "/chat/completion",
        ):
            assert path in spec["paths"]
        assert {"auth", "files", "scans", "summarize", "chat"} <= {tag["name"] for tag in spec["tags"]}

    def test_swagger_ui(self, client):
        response = client.get("/api/docs")

        assert response.status_code == 200
        assert b"swagger" in response.data.lower()

    def test_api_root_is_enveloped_not_found(self, client):
        response = client.get("/api/")

        assert response.status_code == 404
        assert response.get_json()["success"] is False


class TestDownloadSigningKey:
    def test_signing_key_is_derived_from_jwt_secret(self, app, auth_config):
        signer = app.container.resolve(SignedUrlService)

        assert signer.secret_key != auth_config.jwt_secret
        assert signer.secret_key == derive_signing_key(auth_config.jwt_secret)

    def test_link_signed_with_jwt_secret_is_rejected(self, app, client, auth_config):
        stored = app.file_service.upload("a.txt", "text/plain", b"abc")
        forged = SignedUrlService(secret_key=auth_config.jwt_secret).generate_signed_url(stored.id, 60)

        response = client.get(forged.url)

        assert response.status_code == 403

    def test_explicit_signing_secret(self, monkeypatch, tmp_path):
        monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "env-uploads"))
        monkeypatch.setenv("JWT_SECRET", "env-secret")
        monkeypatch.setenv("DOWNLOAD_SIGNING_SECRET", "links-only")

        app = create_app()

        assert app.container.resolve(SignedUrlService).secret_key == "links-only"
