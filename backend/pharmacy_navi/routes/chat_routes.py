from __future__ import annotations

import logging
from typing import Callable

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from pharmacy_navi import schemas
from pharmacy_navi.ai.providers.base import ChatProvider
from pharmacy_navi.answer import answer_message
from pharmacy_navi.config.settings import get_settings
from pharmacy_navi.core.csv_parser import parse_csv
from pharmacy_navi.deps import SheetLoader, get_provider_loader, get_sheet_loader


router = APIRouter(prefix="/api", tags=["Chat"])
_logger = logging.getLogger(__name__)

SERVER_ERROR_REPLY = "サーバー側でエラーが発生しました。時間をおいて再度お試しください。"


@router.post("/chat", response_model=schemas.ChatReply)
async def chat(
    payload: schemas.ChatRequest,
    load_sheet: SheetLoader = Depends(get_sheet_loader),
    load_provider: Callable[[], ChatProvider] = Depends(get_provider_loader),
):
    message = payload.last_user_message
    try:
        csv_text = await load_sheet()
        records = parse_csv(csv_text)
        answer = await answer_message(
            records,
            message,
            load_provider=load_provider,
            shortlist_size=get_settings().shortlist_size,
        )
    except Exception:
        _logger.exception("chat failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"reply": SERVER_ERROR_REPLY},
        )
    return schemas.ChatReply(reply=answer.reply)
