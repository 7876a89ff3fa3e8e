import logging

from fastapi import APIRouter

from pharmacy_navi import schemas


router = APIRouter(prefix="/api", tags=["LINE"])
_logger = logging.getLogger(__name__)


# Acknowledge only; replies are not delivered to LINE.
@router.post("/line-webhook", response_model=schemas.WebhookAck, response_model_exclude_none=True)
async def line_webhook():
    _logger.info("LINE webhook hit (POST)")
    return schemas.WebhookAck(ok=True)


@router.get("/line-webhook", response_model=schemas.WebhookAck, response_model_exclude_none=True)
async def line_webhook_check():
    _logger.info("LINE webhook hit (GET)")
    return schemas.WebhookAck(ok=True, method="GET")
