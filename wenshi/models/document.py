"""Document models for Wenshi files."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Document(BaseModel):
    """Decoded form of a .wen file."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    version: str = Field(..., alias="ver", min_length=1)
    created_at: str = Field(..., alias="createdAt", min_length=1)
    modified_at: str = Field(..., alias="modifiedAt", min_length=1)
    content: str


class ValidationOutcome(BaseModel):
    """Result of checking text against the content rules."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    is_valid: bool = Field(..., alias="isValid")
    error_message: str = Field(default="", alias="errorMessage")

    @model_validator(mode="after")
    def check_consistency(self) -> "ValidationOutcome":
        """A valid outcome has no reason; an invalid one always has one."""
        if self.is_valid and self.error_message:
            raise ValueError("valid outcome must not carry an error message")
        if not self.is_valid and not self.error_message:
            raise ValueError("invalid outcome requires an error message")
        return self

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(is_valid=True, error_message="")

    @classmethod
    def fail(cls, reason: str) -> "ValidationOutcome":
        return cls(is_valid=False, error_message=reason)
