"""
RFC 9457 problem details.
"""

from http import HTTPStatus
from typing import Any, Dict, Optional, Union

from errorlens.config.base import ErrorHandlingSettings
from errorlens.config.settings import SettingsHolder, as_holder
from errorlens.integration.serialization import ErrorResponseSerializer
from errorlens.logging import get_logger
from errorlens.schemas.response import ErrorResponse, ProblemDetailResponse

ABOUT_BLANK = "about:blank"

# Members defined by RFC 9457; extensions never replace them
PROBLEM_MEMBERS = ("type", "title", "status", "detail", "instance")

logger = get_logger(__name__)


def status_title(status: int) -> str:
    """Return the reason phrase of an HTTP status, or "Error" when unknown."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Error"


class ProblemDetailFactory:
    """Builds problem details envelopes from error responses."""

    def __init__(
        self, settings: Union[ErrorHandlingSettings, SettingsHolder, None] = None
    ):
        self._settings = as_holder(settings)

    def build_type_uri(self, code: str) -> str:
        settings = self._settings.get()
        prefix = settings.PROBLEM_DETAIL_TYPE_PREFIX
        if not prefix:
            return ABOUT_BLANK

        if settings.PROBLEM_DETAIL_CONVERT_TO_KEBAB_CASE:
            code = code.lower().replace("_", "-")
        return f"{prefix.rstrip('/')}/{code}"

    def create(
        self, response: ErrorResponse, instance: Optional[str] = None
    ) -> ProblemDetailResponse:
        """
        Create a problem details envelope.

        Errors, properties and the error code are carried as extension members.
        """
        serializer = ErrorResponseSerializer(self._settings.get().JSON_FIELD_NAMES)
        names = serializer.names
        extensions: Dict[str, Any] = {}

        if response.field_errors:
            extensions[names.FIELD_ERRORS] = [
                serializer.field_error_to_dict(error) for error in response.field_errors
            ]
        if response.global_errors:
            extensions[names.GLOBAL_ERRORS] = [
                serializer.global_error_to_dict(error)
                for error in response.global_errors
            ]
        if response.parameter_errors:
            extensions[names.PARAMETER_ERRORS] = [
                serializer.parameter_error_to_dict(error)
                for error in response.parameter_errors
            ]
        reserved = set(PROBLEM_MEMBERS).union(serializer.standard_members())
        for name, value in (response.properties or {}).items():
            if name in reserved:
                logger.warning(
                    f"Dropping property '{name}' of {response.code}: it clashes with a problem details member"
                )
                continue
            extensions[name] = value
        extensions[names.CODE] = response.code

        return ProblemDetailResponse(
            type=self.build_type_uri(response.code),
            title=status_title(response.http_status),
            status=response.http_status,
            detail=response.message,
            instance=instance,
            extensions=extensions,
        )

    @staticmethod
    def to_dict(problem: ProblemDetailResponse) -> Dict[str, Any]:
        """Flatten a problem details envelope, writing extensions as top-level members."""
        data: Dict[str, Any] = {"type": problem.type}
        for name in PROBLEM_MEMBERS[1:]:
            value = getattr(problem, name)
            if value is not None:
                data[name] = value
        for name, value in problem.extensions.items():
            if name not in PROBLEM_MEMBERS:
                data[name] = value
        return data
