"""
Request Schemas

Pydantic models for JSON request bodies. validate_payload() turns pydantic
failures into a RequestValidationError carrying 'field: message' strings.
"""

import re
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from quickscan.domain.errors import RequestValidationError
from quickscan.domain.scans import SCAN_FORMATS

T = TypeVar("T", bound=BaseModel)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

CHAT_MODELS = ("gpt-3.5-turbo", "gpt-4", "gpt-4-turbo", "gpt-4o", "gpt-4o-mini")


def _check_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email format")
    return value


class RegisterRequest(BaseModel):
    email: str = Field(max_length=254)
    password: str = Field(min_length=8, max_length=128)
    confirm_password: str

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if "password" in info.data and value != info.data["password"]:
            raise ValueError("Passwords do not match")
        return value


class LoginRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, value: str) -> str:
        return _check_email(value)


class TokenLoginRequest(BaseModel):
    token: str = Field(min_length=1)


class VerifyTokenRequest(BaseModel):
    token: str = Field(min_length=1)


class CreateScanRequest(BaseModel):
    data: str = Field(min_length=1, max_length=10000)
    format: Optional[str] = "text"

    @field_validator("format")
    @classmethod
    def format_is_known(cls, value: Optional[str]) -> str:
        if value is None:
            return "text"
        if value not in SCAN_FORMATS:
            raise ValueError(f"Format must be one of: {', '.join(SCAN_FORMATS)}")
        return value


class SummarizeRequest(BaseModel):
    content: str = Field(min_length=10, max_length=50000)
    max_length: Optional[int] = Field(default=200, ge=50, le=2000)


class ChatCompletionRequest(BaseModel):
    content: str = Field(min_length=1, max_length=50000)
    model: Optional[str] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, ge=1, le=4096)
    system_prompt: Optional[str] = None

    @field_validator("model")
    @classmethod
    def chat_model_is_supported(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in CHAT_MODELS:
            raise ValueError(f"Model must be one of: {', '.join(CHAT_MODELS)}")
        return value


def _format_errors(error: ValidationError) -> List[str]:
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ())) or "body"
        message = item.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        messages.append(f"{field}: {message}")
    return messages


def validate_payload(model: Type[T], data: Any) -> T:
    """
    Parse a JSON body into a request model.

    Raises:
        RequestValidationError: If the body is not an object or fails a constraint
    """
    if not isinstance(data, dict):
        raise RequestValidationError(errors=["body: Request body must be a JSON object"])

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(errors=_format_errors(e)) from e
