from typing import Awaitable, Callable

from pharmacy_navi.ai.provider_factory import get_ai_provider
from pharmacy_navi.ai.providers.base import ChatProvider
from pharmacy_navi.sheet import fetch_sheet_csv


SheetLoader = Callable[[], Awaitable[str]]


def get_sheet_loader() -> SheetLoader:
    # The route awaits the loader, so fetch errors are raised inside its try block.
    return fetch_sheet_csv


def get_provider_loader() -> Callable[[], ChatProvider]:
    return get_ai_provider
