"""RoofCost configuration settings.

Loads configuration from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load .env file for local overrides of estimate defaults and logging
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    """Read a true/false environment flag."""
    return os.getenv(name, default).lower() == "true"


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    The percent defaults are applied by the pricing engine whenever a
    calculation request does not supply its own value.
    """

    # Estimate defaults (percent values, e.g. 10 = 10%)
    default_overhead_percent: float = field(default_factory=lambda: float(os.getenv("ESTIMATE_OVERHEAD_PERCENT", "10")))
    default_profit_percent: float = field(default_factory=lambda: float(os.getenv("ESTIMATE_PROFIT_PERCENT", "15")))
    default_tax_percent: float = field(default_factory=lambda: float(os.getenv("ESTIMATE_TAX_PERCENT", "0")))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_formula_fallbacks: bool = field(default_factory=lambda: _env_flag("LOG_FORMULA_FALLBACKS", "true"))

    def validate(self) -> None:
        """Validate estimate defaults.

        Raises:
            ValueError: If any default percent is negative.
        """
        for name in ("default_overhead_percent", "default_profit_percent", "default_tax_percent"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative, got {getattr(self, name)}")


# Singleton settings instance
settings = Settings()
