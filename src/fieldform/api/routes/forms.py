import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ... import workflow
from ...db import connection_scope
from ...errors import GenerationException
from ...generator import SchemaGenerator
from ...schema import FieldSchema
from ...workflow import Principal
from ..deps import get_generator, get_principal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forms", tags=["forms"])


class GenerateRequest(BaseModel):
    prompt: str
    title: str | None = None


class FormCreateRequest(BaseModel):
    title: str = Field(min_length=1)
    description: str | None = None
    fields: list[dict[str, Any]]
    prompt: str | None = None
    assigned_to: list[str] = Field(default_factory=list)


class FormUpdateRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    fields: list[dict[str, Any]] | None = None
    is_active: bool | None = None


class AssignRequest(BaseModel):
    agent_ids: list[str]


def parse_fields(title: str | None, fields: list[dict[str, Any]]) -> FieldSchema:
    schema = FieldSchema.coerce({"title": title, "fields": fields})
    if schema is None:
        raise HTTPException(status_code=400, detail="Invalid schema")
    return schema


@router.post("/generate")
def generate_form(
    payload: GenerateRequest,
    principal: Principal = Depends(get_principal),
    generator: SchemaGenerator = Depends(get_generator),
):
    workflow.ensure_can_author(principal)

    prompt = payload.prompt.strip()
    if not prompt:
        raise HTTPException(
            status_code=400, detail="Prompt is required and must be a non-empty string"
        )

    logger.info(f"Generating schema for prompt: {prompt[:100]}")
    try:
        schema = generator.generate(prompt, payload.title)
    except GenerationException as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    return {
        "message": "Form schema generated successfully",
        "schema": {"title": schema.title, "fields": schema.to_json_fields()},
    }


@router.post("", status_code=201)
@connection_scope()
def create_form(payload: FormCreateRequest, principal: Principal = Depends(get_principal)):
    schema = parse_fields(payload.title, payload.fields)
    form = workflow.create_form(
        principal,
        title=payload.title,
        schema=schema,
        description=payload.description,
        prompt=payload.prompt,
        assigned_to=payload.assigned_to,
    )
    return {"message": "Form created successfully", "form": form.to_dict()}


@router.get("")
@connection_scope()
def list_forms(principal: Principal = Depends(get_principal)):
    forms = workflow.forms_visible_to(principal)
    return {"count": len(forms), "forms": [form.to_dict() for form in forms]}


@router.get("/{form_id}")
@connection_scope()
def get_form(form_id: int, principal: Principal = Depends(get_principal)):
    form = workflow.get_form(form_id)
    if not workflow.can_view_form(principal, form):
        raise HTTPException(status_code=403, detail="Access denied")
    return {"form": form.to_dict()}


@router.put("/{form_id}")
@connection_scope()
def update_form(
    form_id: int,
    payload: FormUpdateRequest,
    principal: Principal = Depends(get_principal),
):
    form = workflow.get_form(form_id)
    workflow.ensure_can_manage(principal, form)

    schema = None
    if payload.fields is not None:
        schema = parse_fields(payload.title or form.title, payload.fields)

    form = workflow.update_form(
        principal,
        form,
        title=payload.title,
        description=payload.description,
        schema=schema,
        is_active=payload.is_active,
    )
    return {"message": "Form updated successfully", "form": form.to_dict()}


@router.put("/{form_id}/assign")
@connection_scope()
def assign_form(
    form_id: int,
    payload: AssignRequest,
    principal: Principal = Depends(get_principal),
):
    form = workflow.assign_form(principal, workflow.get_form(form_id), payload.agent_ids)
    return {"message": "Form assigned successfully", "form": form.to_dict()}


@router.delete("/{form_id}")
@connection_scope()
def delete_form(form_id: int, principal: Principal = Depends(get_principal)):
    workflow.delete_form(principal, workflow.get_form(form_id))
    return {"message": "Form deleted successfully"}
