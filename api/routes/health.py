from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_providers
from api.schemas import HealthResponse
from config.settings import get_settings
from infrastructure.providers import RateSourceProvider

router = APIRouter(tags=['health'])


@router.get('/health', response_model=HealthResponse, summary='Service liveness and configured sources')
async def health(
	providers: Annotated[dict[str, RateSourceProvider], Depends(get_providers)],
) -> HealthResponse:
	return HealthResponse(
		status='ok',
		service=get_settings().APP_NAME,
		sources=[
			{'role': role, 'name': p.name, 'pair': str(p.pair), 'timeout': p.timeout}
			for role, p in providers.items()
		],
	)
