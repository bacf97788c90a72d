"""Invoice Routes — create, update, delete invoices for a signed-in user.

Invariants:
    - Every route requires a session (require_session -> 401 otherwise)
    - create/update success -> 303 to the invoices list; delete success -> 200 JSON message
    - The invoice id travels in the path, never in the form

Design Decisions:
    - PUT for update (form body), DELETE without body: id is the only input
"""

from fastapi import APIRouter, Depends, Request

from dashboard_actions.api.dependencies import (
    get_orchestrator, read_form, require_session,
)
from dashboard_actions.api.responses import action_response
from dashboard_actions.config import get_settings
from dashboard_actions.services.mutation_orchestrator import MutationOrchestrator

router = APIRouter(
    prefix="/api/v1/invoices", tags=["invoices"],
    dependencies=[Depends(require_session)],
)


@router.post("")
async def create_invoice(
    request: Request,
    orchestrator: MutationOrchestrator = Depends(get_orchestrator),
):
    result = await orchestrator.create_invoice(None, await read_form(request))
    return action_response(result, get_settings())


@router.put("/{invoice_id}")
async def update_invoice(
    invoice_id: str,
    request: Request,
    orchestrator: MutationOrchestrator = Depends(get_orchestrator),
):
    result = await orchestrator.update_invoice(
        invoice_id, None, await read_form(request),
    )
    return action_response(result, get_settings())


@router.delete("/{invoice_id}")
async def delete_invoice(
    invoice_id: str,
    orchestrator: MutationOrchestrator = Depends(get_orchestrator),
):
    result = await orchestrator.delete_invoice(invoice_id)
    return action_response(result, get_settings())
