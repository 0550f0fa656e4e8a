import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

import httpx
from babel.numbers import format_decimal

from domain.exceptions.rates import RatesUnavailableError
from domain.models.rates import RateBoard
from infrastructure.clients.rates_api import RatesApiClient

logger = logging.getLogger(__name__)

LOADING_MESSAGE = 'Cargando tasas...'
UNAVAILABLE_MESSAGE = 'Tasas no disponibles'
AMOUNT_FORMAT = '#,##0.00'


class PresenterState(Enum):
    LOADING = 'loading'
    READY = 'ready'
    UNAVAILABLE = 'unavailable'


@dataclass(frozen=True)
class RateDisplay:
    state: PresenterState
    lines: list[str] = field(default_factory=list)
    message: str | None = None


class RatePresenter:
    """Rates for one page view.

    ``load`` hits the composite endpoint at most once. A failure is final for the
    page view: nothing is retried and no previous value is shown.
    """

    def __init__(self, client: RatesApiClient, locale: str = 'es_VE', local_symbol: str = 'Bs'):
        self.client = client
        self.locale = locale
        self.local_symbol = local_symbol
        self.state = PresenterState.LOADING
        self.board: RateBoard | None = None
        self._requested = False

    async def load(self) -> PresenterState:
        if self._requested:
            return self.state
        self._requested = True

        try:
            self.board = await self.client.get_composite()
        except RatesUnavailableError as e:
            logger.warning(f'Showing rates as unavailable: {e}')
            self.board = None
            self.state = PresenterState.UNAVAILABLE
        else:
            self.state = PresenterState.READY
        return self.state

    def format_amount(self, value: Decimal) -> str:
        return format_decimal(value, format=AMOUNT_FORMAT, locale=self.locale)

    def render(self, amount_eur: Decimal | None = None) -> RateDisplay:
        if self.state is PresenterState.LOADING:
            return RateDisplay(state=self.state, message=LOADING_MESSAGE)
        if self.state is PresenterState.UNAVAILABLE or self.board is None:
            return RateDisplay(state=PresenterState.UNAVAILABLE, message=UNAVAILABLE_MESSAGE)

        board = self.board
        lines = []
        if amount_eur is not None:
            lines.append(f'≈ {self.format_amount(amount_eur * board.eur_local)} {self.local_symbol}')
            lines.append(f'≈ ${self.format_amount(amount_eur * board.eur_usd)} USD')
        lines.append(f'1 USD = {self.format_amount(board.usd_local)} {self.local_symbol}')
        lines.append(f'1 EUR = {self.format_amount(board.eur_local)} {self.local_symbol}')
        return RateDisplay(state=self.state, lines=lines)


def build_presenter(settings, client: httpx.AsyncClient | None = None) -> RatePresenter:
    """A presenter for one page view, pointed at the configured rates API."""
    return RatePresenter(
        RatesApiClient(settings.RATES_API_URL, client=client),
        locale=settings.DISPLAY_LOCALE,
    )
