from pathlib import Path
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

from .engine import constants as C
from .engine.models import AnalysisConfig

# Load .env from repo root for local development and scripts.
ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True, populate_by_name=True)
    assumed_annual_growth: float = Field(default=C.ASSUMED_ANNUAL_GROWTH, alias="ASSUMED_ANNUAL_GROWTH")
    emergency_fund_months: int = Field(default=C.EMERGENCY_FUND_MONTHS, alias="EMERGENCY_FUND_MONTHS")
    near_term_months: int = Field(default=C.NEAR_TERM_MONTHS, alias="NEAR_TERM_MONTHS")
    default_goal_horizon_years: float = Field(default=C.DEFAULT_GOAL_HORIZON_YEARS, alias="DEFAULT_GOAL_HORIZON_YEARS")
    sector_concentration_pct: float = Field(default=C.SECTOR_CONCENTRATION_PCT, alias="SECTOR_CONCENTRATION_PCT")
    equity_overweight_pct: float = Field(default=C.EQUITY_OVERWEIGHT_PCT, alias="EQUITY_OVERWEIGHT_PCT")
    fund_underweight_pct: float = Field(default=C.FUND_UNDERWEIGHT_PCT, alias="FUND_UNDERWEIGHT_PCT")
    small_cap_exposure_pct: float = Field(default=C.SMALL_CAP_EXPOSURE_PCT, alias="SMALL_CAP_EXPOSURE_PCT")
    low_rated_funds_pct: float = Field(default=C.LOW_RATED_FUNDS_PCT, alias="LOW_RATED_FUNDS_PCT")
    beta_high: float = Field(default=C.BETA_HIGH, alias="BETA_HIGH")
    tax_savings_notable: float = Field(default=C.TAX_SAVINGS_NOTABLE, alias="TAX_SAVINGS_NOTABLE")
    history_max_reports: int = Field(default=C.HISTORY_MAX_REPORTS, alias="HISTORY_MAX_REPORTS")
    history_max_users: int = Field(default=C.HISTORY_MAX_USERS, alias="HISTORY_MAX_USERS", ge=1)
    market_data_path: str | None = Field(default=None, alias="MARKET_DATA_PATH")

    def analysis_config(self) -> AnalysisConfig:
        return AnalysisConfig(
            assumed_annual_growth=self.assumed_annual_growth,
            emergency_fund_months=self.emergency_fund_months,
            near_term_months=self.near_term_months,
            default_goal_horizon_years=self.default_goal_horizon_years,
            sector_concentration_pct=self.sector_concentration_pct,
            equity_overweight_pct=self.equity_overweight_pct,
            fund_underweight_pct=self.fund_underweight_pct,
            small_cap_exposure_pct=self.small_cap_exposure_pct,
            low_rated_funds_pct=self.low_rated_funds_pct,
            beta_high=self.beta_high,
            tax_savings_notable=self.tax_savings_notable,
        )

settings = Settings()
