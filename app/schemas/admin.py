# app/schemas/admin.py
from typing import Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class AdminLogin(SQLModel):
    model_config = ConfigDict(extra="forbid")

    password: str = Field(min_length=1)


class AccessToken(SQLModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int
