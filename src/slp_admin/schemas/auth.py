from pydantic import BaseModel


class LoginScreen(BaseModel):
    """Response schema for GET /login."""
    redirected_from: str | None = None


class LoginError(BaseModel):
    """Body returned when the password does not match."""
    detail: str
