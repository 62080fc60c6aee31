"""API routes for healthtables."""

import re
from typing import Annotated, Any, Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..mapping import (
    Fragment,
    InvalidMappingKeyError,
    MappingError,
    Pattern,
    SchemaProperty,
    create_records,
    property_column_indices,
)
from ..sources import get_sources

router = APIRouter()


class MatcherSpec(BaseModel):
    """A heading matcher as sent over JSON: a fragment or a pattern."""

    fragment: Optional[str] = None
    pattern: Optional[str] = None
    ignore_case: bool = False

    def to_matcher(self):
        if self.fragment is not None and self.pattern is None:
            return Fragment(self.fragment)
        if self.pattern is not None and self.fragment is None:
            flags = re.IGNORECASE if self.ignore_case else 0
            return Pattern(re.compile(self.pattern, flags))
        raise ValueError("Matcher needs exactly one of 'fragment' or 'pattern'")


class ResolveRequest(BaseModel):
    """Headings to resolve against a mapping keyed by property name or 'null'."""

    headings: list[str]
    mapping: dict[str, Union[MatcherSpec, list[MatcherSpec]]]


class ResolveResponse(BaseModel):
    indices: dict[str, int]


class ProjectRequest(BaseModel):
    """Rows to project through previously resolved indices."""

    indices: dict[str, Annotated[int, Field(ge=0)]]
    rows: list[list[Any]] = Field(default_factory=list)


class ProjectResponse(BaseModel):
    records: list[dict[str, Any]]


def _mapping_error(e: Exception) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"error": type(e).__name__, "message": str(e)},
    )


@router.get("/health")
async def health_check():
    """Health check endpoint with configuration summary."""
    from ..config import settings

    return {
        "status": "ok",
        "service": "healthtables",
        "config": {
            "max_concurrency": settings.max_concurrency,
            "status_interval_seconds": settings.status_interval_seconds,
            "totals_tolerance": settings.totals_tolerance,
            "sources": len(get_sources()),
        },
    }


@router.get("/sources")
async def list_sources():
    """List registered sources."""
    return {"sources": [s.summary() for s in get_sources()]}


@router.post("/resolve", response_model=ResolveResponse)
async def resolve_headings(request: ResolveRequest):
    """Resolve table headings to column indices."""
    try:
        mapping = {
            key: (
                specs.to_matcher()
                if isinstance(specs, MatcherSpec)
                else [spec.to_matcher() for spec in specs]
            )
            for key, specs in request.mapping.items()
        }
        indices = property_column_indices(request.headings, mapping)
    except (MappingError, ValueError, re.error) as e:
        raise _mapping_error(e)
    return ResolveResponse(indices={p.value: i for p, i in indices.items()})


@router.post("/project", response_model=ProjectResponse)
async def project_rows(request: ProjectRequest):
    """Project raw rows into property-keyed records."""
    valid = {p.value for p in SchemaProperty}
    bad = [k for k in request.indices if k not in valid]
    if bad:
        raise _mapping_error(InvalidMappingKeyError(bad))

    indices = {SchemaProperty(k): i for k, i in request.indices.items()}
    try:
        records = create_records(indices, request.rows)
    except MappingError as e:
        raise _mapping_error(e)
    return ProjectResponse(records=[{p.value: v for p, v in r.items()} for r in records])
