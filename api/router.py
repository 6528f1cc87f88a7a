"""Product form API router: command dispatch + read-only queries.

Every request works on the form session named by the X-Form-Session
header. Commands run under the session's writer lock and return the new
state alongside their result. Reads never create a session: an unknown
session reads as a blank form.

Endpoints are plain ``def`` so the blocking writer lock is taken on
FastAPI's threadpool, not on the event loop.
"""

import os

from fastapi import APIRouter, Depends, HTTPException

from api.middleware import get_current_session
from api.schemas import CommandInfo, CommandRequest, CommandResponse
from api.sessions import FormSession, FormSessionStore
from product_engine.commands.registry import to_jsonable
from product_engine.config import EngineConfig
from product_engine.form.product_form import THRESHOLD_STORES

router = APIRouter()

_store = FormSessionStore(
    EngineConfig.from_env(),
    max_sessions=int(os.getenv("PRODUCT_FORM_MAX_SESSIONS", "1000")),
    idle_timeout=float(os.getenv("PRODUCT_FORM_SESSION_IDLE_SECONDS", "3600")),
)


async def get_session_store() -> FormSessionStore:
    return _store


async def get_session_id() -> str:
    return get_current_session()


async def get_form_session(
    session_id: str = Depends(get_session_id),
    store: FormSessionStore = Depends(get_session_store),
) -> FormSession:
    return store.get_or_create(session_id)


async def get_read_session(
    session_id: str = Depends(get_session_id),
    store: FormSessionStore = Depends(get_session_store),
) -> FormSession:
    """Existing session, or an unstored blank one."""
    return store.get(session_id) or store.new_session(session_id)


# ============================================================================
# Commands
# ============================================================================

@router.get("/commands", response_model=list[CommandInfo])
def list_commands(session: FormSession = Depends(get_read_session)):
    """List every command the form accepts."""
    return [c.model_dump() for c in session.registry.list_commands()]


@router.post("/commands/{name}", response_model=CommandResponse)
def run_command(
    name: str,
    request: CommandRequest,
    session: FormSession = Depends(get_form_session),
):
    """Invoke one command against the session's form."""
    if session.registry.get_command(name) is None:
        raise HTTPException(status_code=404, detail=f"Command not found: {name}")

    with session.lock:
        try:
            result = session.registry.invoke(name, **request.args)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        state = session.form.snapshot()

    return CommandResponse(command=name, result=result, state=state)


# ============================================================================
# Queries
# ============================================================================

@router.get("/state")
def get_state(session: FormSession = Depends(get_read_session)):
    """Whole state tree."""
    with session.lock:
        return session.form.snapshot()


@router.get("/variants")
def get_variants(session: FormSession = Depends(get_read_session)):
    with session.lock:
        variants = session.form.attributes.get_derived_variants()
    return {"data": to_jsonable(variants), "count": len(variants)}


@router.get("/thresholds/{store_name}")
def get_thresholds(store_name: str, session: FormSession = Depends(get_read_session)):
    """Active level list of one threshold store."""
    if store_name not in THRESHOLD_STORES:
        raise HTTPException(status_code=404, detail=f"Unknown threshold store: {store_name}")
    with session.lock:
        store = session.form.threshold_store(store_name)
        rows = store.get_active_threshold_list()
        return {
            "data": to_jsonable(rows),
            "scope_mode": store.scope_mode.value,
            "active_scope_key": store.active_scope_key,
            "can_add_row": store.can_add_row(),
        }


@router.delete("/session", status_code=204)
def discard_session(
    session_id: str = Depends(get_session_id),
    store: FormSessionStore = Depends(get_session_store),
):
    """Throw away the session's form."""
    if not store.discard(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
