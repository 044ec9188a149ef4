from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "LOAN_SCHEDULE_"}

    # Rounding applied to every money/rate value at each calculation step
    decimal_digit: int = 2

    # Significant digits for intermediate Decimal arithmetic (20 matches
    # the reference schedules bit-for-bit)
    calculation_precision: int = 20


settings = Settings()
