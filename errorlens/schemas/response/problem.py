"""
RFC 9457 problem details schema.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ProblemDetailResponse(BaseModel):
    """
    Problem details envelope.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation of this occurrence
        instance: URI reference identifying this occurrence
        extensions: Additional members written next to the standard ones
    """

    type: str = Field(default="about:blank", description="Problem type URI")
    title: Optional[str] = Field(default=None, description="Problem title")
    status: Optional[int] = Field(default=None, description="HTTP status code")
    detail: Optional[str] = Field(default=None, description="Problem detail")
    instance: Optional[str] = Field(default=None, description="Occurrence URI")
    extensions: Dict[str, Any] = Field(
        default_factory=dict, description="Extension members"
    )
