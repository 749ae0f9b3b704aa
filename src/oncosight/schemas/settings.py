from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class SettingsRequest(BaseModel):
    """Body schema for POST /settings.

    Every field is optional; a password change needs both the current
    ``password`` and ``new_password`` (also accepted as ``newPassword``).
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6)
    new_password: str | None = Field(default=None, min_length=6, alias="newPassword")

    @model_validator(mode="after")
    def check_password_pair(self) -> "SettingsRequest":
        if self.password and not self.new_password:
            raise ValueError("New password is required!")
        if self.new_password and not self.password:
            raise ValueError("Password is required!")
        return self


class SettingsResult(BaseModel):
    """Outcome of a settings update: exactly one of the two is set."""
    success: str | None = None
    error: str | None = None
