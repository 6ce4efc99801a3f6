from __future__ import annotations

import logging
from pathlib import Path
import threading
from typing import Any

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .core import (
    ErrorDetail,
    ExtractRequest,
    ExtractResponse,
    GenerateRequest,
    GenerateResponse,
    PreconditionError,
    SlotValue,
    get_cached_settings,
)
from .core.models import RelationshipOut, TableOut
from .llm import QueryStyle, generate_query
from .schema import extract
from .storage import JsonFileStorage, Workspace

settings = get_cached_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Query Genie", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)


def raise_error(status_code: int, error_code: str, message: str, details: dict | None = None):
    """Raise HTTPException with structured error detail."""
    raise HTTPException(
        status_code=status_code,
        detail=ErrorDetail(error_code=error_code, message=message, details=details).model_dump()
    )


# One storage per state path, shared across requests
_state_lock = threading.RLock()
_storages: dict[Path, JsonFileStorage] = {}


def get_workspace() -> Workspace:
    path = Path(get_cached_settings().state_path)
    with _state_lock:
        storage = _storages.get(path)
        if storage is None:
            storage = _storages[path] = JsonFileStorage(path)
    return Workspace(storage)


# --- API Endpoints ---

@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/schema/extract", response_model=ExtractResponse)
def schema_extract(request: ExtractRequest) -> ExtractResponse:
    summary, table_names, model = extract(request.schema_text)
    return ExtractResponse(
        summary=summary,
        table_names=table_names,
        tables=[
            TableOut(name=t.name, columns=list(t.columns), primary_key=t.primary_key)
            for t in model.tables.values()
        ],
        relationships=[
            RelationshipOut(
                from_table=r.from_table,
                from_column=r.from_column,
                to_table=r.to_table,
                to_column=r.to_column,
            )
            for r in model.relationships
        ],
    )


@app.post("/api/generate", response_model=GenerateResponse)
def generate(
    request: GenerateRequest,
    workspace: Workspace = Depends(get_workspace),
) -> GenerateResponse:
    """
    Generate a SQL or Rails Active Record query from a natural-language request.

    - **style**: `sql` or `rails`
    - **prompt**: The request, e.g. "list all organizations"
    - **schema_text**: Schema definition (defaults to the saved schema)

    Model failures come back with `ok=false` and the error message.
    """
    schema_text = request.schema_text if request.schema_text is not None else workspace.schema_text
    logger.info(f"Generate request ({request.style}): {request.prompt[:100]}")

    try:
        result = generate_query(
            QueryStyle(request.style),
            request.prompt,
            schema_text,
            workspace.api_key,
        )
    except PreconditionError as exc:
        logger.warning(f"Generation precondition failed: {exc}")
        raise_error(400, "precondition_failed", str(exc))

    return GenerateResponse(
        ok=result.ok,
        title=result.title,
        output=result.output,
        error=result.error,
        copyable=result.copyable,
        table_names=result.table_names,
    )


# --- Persisted State Endpoints ---

@app.get("/api/settings/api-key")
def api_key_status(workspace: Workspace = Depends(get_workspace)) -> dict[str, Any]:
    # The key itself is never echoed back
    return {"saved": bool(workspace.api_key)}


@app.put("/api/settings/api-key")
def save_api_key(body: SlotValue, workspace: Workspace = Depends(get_workspace)) -> dict[str, Any]:
    workspace.save_api_key(body.value)
    return {"saved": bool(workspace.api_key)}


@app.delete("/api/settings/api-key")
def clear_api_key(workspace: Workspace = Depends(get_workspace)) -> dict[str, Any]:
    workspace.clear_api_key()
    return {"saved": False}


@app.get("/api/schema")
def get_schema(workspace: Workspace = Depends(get_workspace)) -> dict[str, str]:
    return {"schema_text": workspace.schema_text}


@app.put("/api/schema")
def save_schema(body: SlotValue, workspace: Workspace = Depends(get_workspace)) -> dict[str, str]:
    workspace.save_schema(body.value)
    return {"schema_text": workspace.schema_text}


@app.delete("/api/schema")
def clear_schema(workspace: Workspace = Depends(get_workspace)) -> dict[str, str]:
    workspace.clear_schema()
    return {"schema_text": ""}
