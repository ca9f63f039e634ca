from fastapi import Header, HTTPException, Request

from ..config import Config
from ..enums import Role
from ..generator import SchemaGenerator
from ..report import ReportGenerator
from ..workflow import Principal


def get_principal(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Principal:
    """Identity forwarded by the upstream authenticator."""
    if not x_user_id or not x_user_role:
        raise HTTPException(status_code=401, detail="Please authenticate")
    try:
        role = Role(x_user_role)
    except ValueError:
        raise HTTPException(status_code=401, detail="Please authenticate") from None
    return Principal(user_id=x_user_id, role=role)


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_generator(request: Request) -> SchemaGenerator:
    return request.app.state.generator


def get_report_generator(request: Request) -> ReportGenerator:
    return request.app.state.report_generator
