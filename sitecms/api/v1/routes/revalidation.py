"""Manual revalidation trigger."""
from fastapi import APIRouter, Depends

from sitecms.api.v1.schemas.catalogue_schemas import RevalidateRequestSchema, RevalidateResponseSchema
from sitecms.application.ports.revalidation import RevalidationPort
from sitecms.core.dependencies import get_revalidation_notifier

router = APIRouter(tags=["revalidation"])


@router.post("/revalidate", response_model=RevalidateResponseSchema, status_code=202)
async def revalidate(
    body: RevalidateRequestSchema,
    notifier: RevalidationPort = Depends(get_revalidation_notifier),
):
    """Ask the public website to rebuild ``path``. Always accepted."""
    receipt = notifier.notify(body.path)
    return RevalidateResponseSchema(path=receipt.path, success=receipt.success)
