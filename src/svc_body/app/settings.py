from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BodySettings(BaseSettings):
    # flat = easy env overrides
    max_bytes: int = Field(default=1_000_000, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="BODY_",            # BODY_MAX_BYTES
        extra="ignore",
    )


@lru_cache
def get_body_settings(**kwargs) -> BodySettings:
    # Only include kwargs that are not None, so defaults in BodySettings are used
    filtered_kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return BodySettings(**filtered_kwargs)
