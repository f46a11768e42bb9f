"""
API Models for Swagger documentation

Request bodies are validated by the pydantic schemas in schemas.py; these
models only describe the wire format in the generated docs.
"""

from flask_restx import fields

from quickscan.api import api

# =============================================================================
# Request Models
# =============================================================================

register_request = api.model(
    "RegisterRequest",
    {
        "email": fields.String(required=True, example="ada@example.com"),
        "password": fields.String(required=True, min_length=8, max_length=128),
        "confirm_password": fields.String(required=True),
    },
)

login_request = api.model(
    "LoginRequest",
    {
        "email": fields.String(required=True, example="ada@example.com"),
        "password": fields.String(required=True),
    },
)

token_request = api.model(
    "TokenRequest",
    {"token": fields.String(required=True, description="Static API token or bearer token")},
)

scan_request = api.model(
    "ScanRequest",
    {
        "data": fields.String(required=True, max_length=10000),
        "format": fields.String(enum=["text", "qr", "barcode", "ocr"], default="text"),
    },
)

summarize_request = api.model(
    "SummarizeRequest",
    {
        "content": fields.String(required=True, min_length=10, max_length=50000),
        "max_length": fields.Integer(min=50, max=2000, default=200),
    },
)

chat_request = api.model(
    "ChatCompletionRequest",
    {
        "content": fields.String(required=True, max_length=50000),
        "model": fields.String(example="gpt-4o-mini"),
        "temperature": fields.Float(min=0.0, max=2.0),
        "max_tokens": fields.Integer(min=1, max=4096),
        "system_prompt": fields.String(),
    },
)

# =============================================================================
# Response Models
# =============================================================================

envelope_response = api.model(
    "Envelope",
    {
        "success": fields.Boolean(description="Whether the request succeeded"),
        "data": fields.Raw(description="Endpoint-specific payload"),
        "message": fields.String(description="Human readable message"),
        "validation_errors": fields.List(fields.String),
    },
)

error_detail = api.model(
    "ErrorDetail",
    {
        "type": fields.String(description="Error category", example="validation_error"),
        "title": fields.String(description="Short error title"),
        "message": fields.String(description="Error message"),
        "status": fields.Integer(description="HTTP status code"),
    },
)

error_response = api.inherit(
    "ErrorEnvelope",
    envelope_response,
    {
        "error": fields.Nested(error_detail),
        "timestamp": fields.String(description="RFC 3339 timestamp"),
    },
)
