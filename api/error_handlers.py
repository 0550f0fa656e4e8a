import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.checkout import InvalidSelectionError
from domain.exceptions.rates import ResolutionFailedError
from domain.models.rates import FailureReason

logger = logging.getLogger(__name__)

# Fixed user-facing copy; upstream error text never reaches the client
FAILURE_MESSAGES: dict[FailureReason, str] = {
	FailureReason.TIMEOUT: 'Timeout: La solicitud tardó demasiado',
	FailureReason.UNREACHABLE: 'Error de conexión. Verifica tu conexión a internet.',
	FailureReason.PRIMARY_UNAVAILABLE: 'Tasa no disponible. La API externa no está respondiendo correctamente.',
	FailureReason.BRIDGE_UNAVAILABLE: 'Tasa EUR/USD no disponible',
}


def failure_status_code(reason: FailureReason) -> int:
	return 503 if reason.is_transient else 500


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(ResolutionFailedError)
	async def resolution_failed_handler(request: Request, exc: ResolutionFailedError):
		logger.error(f'Rate resolution failed for {request.url.path}: {exc.reason.value}')
		return JSONResponse(
			status_code=failure_status_code(exc.reason),
			content={'success': False, 'error': FAILURE_MESSAGES[exc.reason]},
		)

	@app.exception_handler(InvalidSelectionError)
	async def invalid_selection_handler(request: Request, exc: InvalidSelectionError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})
