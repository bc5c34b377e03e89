from typing import Annotated

from fastapi import APIRouter, Depends

from admission.core.admission import enforce_admission, get_registry
from admission.core.config import settings
from admission.schemas.admission import ClientsResponse, HandledRequestResponse

router = APIRouter(tags=["Admission"])


@router.post("/requests", response_model=HandledRequestResponse)
async def handle_request(
    client_id: Annotated[str, Depends(enforce_admission)],
) -> HandledRequestResponse:
    """Handle a client request once it has been admitted.

    Rejected requests never reach this handler: the admission dependency
    answers 429 (rate limited) or 403 (unrecognized client) instead.
    """
    return HandledRequestResponse(client_id=client_id)


@router.get("/clients", response_model=ClientsResponse)
def describe_clients() -> ClientsResponse:
    """Describe the admission configuration without exposing client ids."""
    registry = get_registry()
    return ClientsResponse(
        client_count=len(registry),
        algorithm=settings.admission.algorithm,
        capacity=registry.template.capacity,
        window_millis=registry.template.window_millis,
    )
