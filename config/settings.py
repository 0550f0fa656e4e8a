from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	LOCAL_CURRENCY: str = 'VES'

	BCV_BASE_URL: str = 'https://bcvapi.tech/api/v1'
	BCV_TIMEOUT: float = 10.0
	# bcvapi also publishes the euro; disable to always derive EUR->VES
	BCV_EURO_ENABLED: bool = True

	FRANKFURTER_BASE_URL: str = 'https://api.frankfurter.app'
	FRANKFURTER_TIMEOUT: float = 5.0

	EXCHANGERATE_API_BASE_URL: str = 'https://api.exchangerate-api.com/v4'
	EXCHANGERATE_API_TIMEOUT: float = 10.0

	# Presenter side
	RATES_API_URL: str = 'http://localhost:8000'
	DISPLAY_LOCALE: str = 'es_VE'

	# Logging
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	# Application
	APP_NAME: str = 'Academy Rates API'
	DEBUG: bool = False
	HOST: str = '0.0.0.0'
	PORT: int = 8000

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
