import warnings

from pydantic_settings import BaseSettings

VERSION = "1.1.0"


class Settings(BaseSettings):
    MONGODB_URI: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "carrier_sales"
    API_KEY: str = "changeme"
    CORS_ORIGINS: str = "*"
    DOCS_ENABLED: bool = True

    # FMCSA QCMobile registry. Leave FMCSA_WEBKEY empty to run with the
    # permissive eligibility fallback.
    FMCSA_WEBKEY: str = ""
    FMCSA_BASE_URL: str = "https://mobile.fmcsa.dot.gov/qc/services"
    FMCSA_TIMEOUT_SECONDS: float = 10.0

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env"}


settings = Settings()

if settings.API_KEY == "changeme":
    warnings.warn(
        "API_KEY is set to the default value 'changeme'. "
        "Set a strong API_KEY in your .env file for production.",
        stacklevel=1,
    )
