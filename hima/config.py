from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DefaultsConfig(BaseSettings):
    """Values used when a caller leaves an option of `run` unset."""

    model_config = SettingsConfigDict(
        env_prefix="HIMA_DEFAULTS__",
        env_file=".env",
        extra="ignore",
    )

    outcome_family: str = "gaussian"
    mediator_family: str = "gaussian"
    penalty: str = "DBlasso"
    scale: bool = True
    verbose: bool = False


class EstimationConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HIMA_ESTIMATION__",
        env_file=".env",
        extra="ignore",
    )

    fdr_cutoff: float = Field(0.05, gt=0, lt=1)
    parallel: bool = False
    ncore: int = Field(1, ge=1)
    # Modules imported before the first estimator lookup; they register
    # themselves with hima.estimators.register_estimator.
    plugins: list[str] = []


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    defaults: DefaultsConfig = DefaultsConfig()
    estimation: EstimationConfig = EstimationConfig()


settings = Settings()
