from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    APP_NAME: str = "CRUDKIT"
    SESSION_SECRET_KEY: str = "change-me"
    SESSION_COOKIE_NAME: str = "crudkit_session"
    SESSION_MAX_AGE_SECONDS: int = 14 * 24 * 60 * 60
    SESSION_SAME_SITE: str = "lax"
    SESSION_HTTPS_ONLY: bool = False
    CRUD_SESSION_NAMESPACE: str = "crud::"
    CRUD_RESET_MARKER: str = "reset"
    CRUD_SORT_PARAM: str = "sort"
    CRUD_DIRECTION_PARAM: str = "dir"
    CRUD_REDIRECT_STATUS_CODE: int = 302
    PRINTABLE_ERROR_STATUS_CODE: int = 422

settings = Settings()
