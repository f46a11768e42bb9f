"""
API Namespaces - Organized endpoint groups

Every handler returns the JSON envelope. Services are resolved from the
app's DependencyContainer. Domain errors are converted to their category's
status; anything else is logged with its traceback and answered as an
internal error.
"""

from datetime import datetime, timezone
from io import BytesIO

from flask import current_app, g, request, send_file
from flask_restx import Namespace, Resource
from werkzeug.exceptions import RequestEntityTooLarge

from quickscan.api.auth_decorator import bearer_auth_required
from quickscan.api.models import (
    chat_request,
    envelope_response,
    error_response as error_model,
    login_request,
    register_request,
    scan_request,
    summarize_request,
    token_request,
)
from quickscan.api.responses import error_response, internal_error_response, success_response
from quickscan.api.schemas import (
    ChatCompletionRequest,
    CreateScanRequest,
    LoginRequest,
    RegisterRequest,
    SummarizeRequest,
    TokenLoginRequest,
    VerifyTokenRequest,
    validate_payload,
)
from quickscan.application import AIService, AuthService, FileService, ScanService
from quickscan.domain.errors import DomainError, RequestValidationError

HEALTH_MESSAGE = "QuickScan backend is running with AI capabilities"


def health_status() -> dict:
    return {
        "status": "healthy",
        "message": HEALTH_MESSAGE,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def _resolve(service_type):
    return current_app.container.resolve(service_type)


# =============================================================================
# Health Namespace
# =============================================================================

health_ns = Namespace("health", description="Service liveness")


@health_ns.route("")
class Health(Resource):
    @health_ns.response(200, "Success", envelope_response)
    def get(self):
        return success_response(health_status(), "Service is healthy")


# =============================================================================
# Auth Namespace - registration, login and token verification
# =============================================================================

auth_ns = Namespace("auth", description="Authentication operations")


@auth_ns.route("/register")
class Register(Resource):
    """Create an account and return a bearer token"""

    @auth_ns.doc("register")
    @auth_ns.expect(register_request)
    @auth_ns.response(200, "Success", envelope_response)
    @auth_ns.response(400, "Validation Failed", error_model)
    def post(self):
        try:
            payload = validate_payload(RegisterRequest, request.get_json(silent=True))
            result = _resolve(AuthService).register(payload.email, payload.password)
            return success_response(result.to_dict(), "User registered successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /auth/register: {e}")
            return internal_error_response()


@auth_ns.route("/login")
class Login(Resource):
    """Exchange email and password for a bearer token"""

    @auth_ns.doc("login")
    @auth_ns.expect(login_request)
    @auth_ns.response(200, "Success", envelope_response)
    @auth_ns.response(401, "Authentication Failed", error_model)
    def post(self):
        try:
            payload = validate_payload(LoginRequest, request.get_json(silent=True))
            result = _resolve(AuthService).login(payload.email, payload.password)
            return success_response(result.to_dict(), "Login successful")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /auth/login: {e}")
            return internal_error_response()


@auth_ns.route("/token")
class TokenLogin(Resource):
    """Exchange a static API token for a bearer token"""

    @auth_ns.doc("token_login")
    @auth_ns.expect(token_request)
    @auth_ns.response(200, "Success", envelope_response)
    @auth_ns.response(401, "Authentication Failed", error_model)
    def post(self):
        try:
            payload = validate_payload(TokenLoginRequest, request.get_json(silent=True))
            result = _resolve(AuthService).token_login(payload.token)
            return success_response(result.to_dict(), "Token authentication successful")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /auth/token: {e}")
            return internal_error_response()


@auth_ns.route("/verify")
class VerifyToken(Resource):
    @auth_ns.doc("verify_token")
    @auth_ns.expect(token_request)
    @auth_ns.response(200, "Success", envelope_response)
    @auth_ns.response(401, "Authentication Failed", error_model)
    def post(self):
        try:
            payload = validate_payload(VerifyTokenRequest, request.get_json(silent=True))
            user = _resolve(AuthService).verify(payload.token)
            return success_response(user.to_dict(), "Token is valid")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /auth/verify: {e}")
            return internal_error_response()


@auth_ns.route("/me")
class CurrentUser(Resource):
    @auth_ns.doc("current_user", security="Bearer")
    @auth_ns.response(200, "Success", envelope_response)
    @auth_ns.response(401, "Authentication Failed", error_model)
    @bearer_auth_required
    def get(self):
        return success_response(g.current_user.to_dict(), "User information retrieved successfully")


# =============================================================================
# Scans Namespace - non-persistent scan records
# =============================================================================

scans_ns = Namespace("scans", description="Scan operations")


@scans_ns.route("")
class ScanCollection(Resource):
    @scans_ns.doc("list_scans")
    @scans_ns.response(200, "Success", envelope_response)
    def get(self):
        scans = _resolve(ScanService).list_scans()
        return success_response([s.to_dict() for s in scans], "Scans retrieved successfully")

    @scans_ns.doc("create_scan")
    @scans_ns.expect(scan_request)
    @scans_ns.response(200, "Success", envelope_response)
    @scans_ns.response(400, "Validation Failed", error_model)
    def post(self):
        """
        Create a scan

        The data is analysed by the LLM when possible; the record is echoed
        back and not stored.
        """
        try:
            payload = validate_payload(CreateScanRequest, request.get_json(silent=True))
            scan = _resolve(ScanService).create_scan(payload.data, payload.format)
            return success_response(scan.to_dict(), "Scan created and analyzed successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /scans: {e}")
            return internal_error_response()


@scans_ns.route("/<string:scan_id>")
@scans_ns.param("scan_id", "The scan identifier")
class Scan(Resource):
    def get(self, scan_id):
        scan = _resolve(ScanService).get_scan(scan_id)
        return success_response(scan.to_dict(), "Scan retrieved successfully")

    def delete(self, scan_id):
        return success_response(_resolve(ScanService).delete_scan(scan_id), "Scan deleted successfully")


# =============================================================================
# Upload and Files Namespaces - upload, listing, download, links, deletion
# =============================================================================

upload_ns = Namespace("upload", description="File upload")


@upload_ns.route("")
class Upload(Resource):
    """Upload one file in the multipart field 'file'"""

    @upload_ns.doc("upload_file")
    @upload_ns.response(200, "Success", envelope_response)
    @upload_ns.response(400, "Validation Failed", error_model)
    def post(self):
        try:
            file_service = _resolve(FileService)
            try:
                upload = request.files.get("file")
            except RequestEntityTooLarge:
                limit_mb = file_service.max_upload_bytes // (1024 * 1024)
                raise RequestValidationError(
                    f"File size exceeds {limit_mb}MB limit",
                    [f"file: File size exceeds {limit_mb}MB limit"],
                )

            if upload is None:
                raise RequestValidationError("No file found in upload", ["file: No file found in upload"])

            stored_file = file_service.upload(
                upload.filename or "unknown",
                upload.mimetype or None,
                upload.read(),
            )
            return success_response(stored_file.to_dict(), "File uploaded successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /upload: {e}")
            return internal_error_response()


files_ns = Namespace("files", description="Stored file operations")


@files_ns.route("")
class FileCollection(Resource):
    @files_ns.doc("list_files")
    @files_ns.response(200, "Success", envelope_response)
    def get(self):
        files = [f.to_dict() for f in _resolve(FileService).list_files()]
        return success_response({"files": files, "total_count": len(files)}, "Files retrieved successfully")


@files_ns.route("/cleanup")
class FileCleanup(Resource):
    @files_ns.doc("cleanup_files")
    @files_ns.response(200, "Success", envelope_response)
    def post(self):
        try:
            deleted_count = _resolve(FileService).cleanup()
            return success_response(deleted_count, f"Cleaned up {deleted_count} expired files")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /files/cleanup: {e}")
            return internal_error_response()


@files_ns.route("/<string:file_id>")
@files_ns.param("file_id", "The file identifier")
class FileItem(Resource):
    @files_ns.doc("delete_file")
    @files_ns.response(200, "Success", envelope_response)
    @files_ns.response(404, "File Not Found", error_model)
    def delete(self, file_id):
        try:
            _resolve(FileService).delete(file_id)
            return success_response(f"File {file_id} deleted", "File deleted successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            current_app.logger.exception(f"Error deleting file {file_id}: {e}")
            return internal_error_response()


@files_ns.route("/<string:file_id>/download")
@files_ns.param("file_id", "The file identifier")
class FileDownload(Resource):
    """Download raw file bytes"""

    @files_ns.doc("download_file", params={"expires": "Link expiry (unix time)", "signature": "Link signature"})
    @files_ns.response(200, "File content")
    @files_ns.response(403, "Access Denied", error_model)
    @files_ns.response(404, "File Not Found", error_model)
    def get(self, file_id):
        """
        Download raw file bytes

        Accepts the signed link produced by /files/<id>/url; the expires and
        signature query parameters are verified whenever present.
        """
        try:
            stored_file, data = _resolve(FileService).download(
                file_id,
                expires=request.args.get("expires"),
                signature=request.args.get("signature"),
            )
            return send_file(
                BytesIO(data),
                mimetype=stored_file.content_type or "application/octet-stream",
                as_attachment=True,
                download_name=stored_file.filename,
            )
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            current_app.logger.exception(f"Error downloading file {file_id}: {e}")
            return internal_error_response()


@files_ns.route("/<string:file_id>/url")
@files_ns.param("file_id", "The file identifier")
class FileDownloadUrl(Resource):
    @files_ns.doc("get_download_url")
    @files_ns.response(200, "Success", envelope_response)
    @files_ns.response(404, "File Not Found", error_model)
    def get(self, file_id):
        try:
            link = _resolve(FileService).get_download_url(file_id)
            return success_response(link.to_dict(), "Download URL generated successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            current_app.logger.exception(f"Error generating download URL for {file_id}: {e}")
            return internal_error_response()


# =============================================================================
# Analysis Namespaces - LLM summaries and chat completions
# =============================================================================

summarize_ns = Namespace("summarize", description="Document summaries")


@summarize_ns.route("")
class Summarize(Resource):
    @summarize_ns.doc("summarize")
    @summarize_ns.expect(summarize_request)
    @summarize_ns.response(200, "Success", envelope_response)
    @summarize_ns.response(408, "Request Timeout", error_model)
    @summarize_ns.response(502, "External Service Error", error_model)
    def post(self):
        try:
            payload = validate_payload(SummarizeRequest, request.get_json(silent=True))
            summary = _resolve(AIService).summarize(payload.content, payload.max_length or 200)
            return success_response(summary.to_dict(), "Document summarized successfully using AI")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /summarize: {e}")
            return internal_error_response()


chat_ns = Namespace("chat", description="Chat completions")


@chat_ns.route("/completion")
class ChatCompletion(Resource):
    @chat_ns.doc("chat_completion")
    @chat_ns.expect(chat_request)
    @chat_ns.response(200, "Success", envelope_response)
    @chat_ns.response(408, "Request Timeout", error_model)
    @chat_ns.response(502, "External Service Error", error_model)
    def post(self):
        try:
            payload = validate_payload(ChatCompletionRequest, request.get_json(silent=True))
            completion = _resolve(AIService).chat(
                payload.content,
                model=payload.model,
                temperature=payload.temperature,
                max_tokens=payload.max_tokens,
                system_prompt=payload.system_prompt,
            )
            return success_response(completion.to_dict(), "Chat completion generated successfully")
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /chat/completion: {e}")
            return internal_error_response()
