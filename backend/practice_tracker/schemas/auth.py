from pydantic import BaseModel, Field

from practice_tracker.schemas.practice import UserOut


class RegisterBody(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class LoginBody(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    user: UserOut
