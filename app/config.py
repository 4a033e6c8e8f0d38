"""
Configuration Management Module
Loads and manages application configuration from config.yaml
"""

import os
from pathlib import Path
from typing import Dict, List
import yaml
from pydantic import BaseModel


class ApiConfig(BaseModel):
    """API configuration"""
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = ["http://localhost:3000"]


class LoggingConfig(BaseModel):
    """Logging configuration"""
    level: str = "INFO"
    file: str = "./logs/app.log"
    max_size: int = 10
    backup_count: int = 5
    console: bool = True
    colorize: bool = True


class LedgerConfig(BaseModel):
    """Ledger and transaction id configuration"""
    procurement_prefix: str = "PROC"
    sales_prefix: str = "SALE"
    id_width: int = 6
    strict_validation: bool = False
    default_location: str = "Patna Central PVCS"
    seed_demo_records: bool = True


class PricingConfig(BaseModel):
    """Central commodity price master seed"""
    seed_prices: Dict[str, str] = {
        "Tomato": "26.50",
        "Potato": "15.20",
        "Onion": "34.00",
        "Brinjal": "21.00",
    }
    seeded_by: str = "Admin"


class AdvisoryConfig(BaseModel):
    """Generative advisory configuration"""
    api_key: str = ""
    model: str = "gemini-1.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout: int = 30


class PriceFeedConfig(BaseModel):
    """Central price feed refresh configuration"""
    enabled: bool = False
    url: str = ""
    interval_minutes: int = 5
    timeout: int = 10


class AppConfig(BaseModel):
    """Main application configuration"""
    api: ApiConfig = ApiConfig()
    logging: LoggingConfig = LoggingConfig()
    ledger: LedgerConfig = LedgerConfig()
    pricing: PricingConfig = PricingConfig()
    advisory: AdvisoryConfig = AdvisoryConfig()
    price_feed: PriceFeedConfig = PriceFeedConfig()


def load_config(config_path: str = "config.yaml") -> AppConfig:
    """Load configuration from YAML file"""
    config_file = Path(config_path)
    app_config = AppConfig()

    if config_file.exists():
        with open(config_file, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
            app_config = AppConfig(**config_data)

    # API key may come from the environment instead of the file
    if not app_config.advisory.api_key:
        app_config.advisory.api_key = os.getenv("GEMINI_API_KEY", "")

    return app_config


def save_config(config: AppConfig, config_path: str = "config.yaml") -> None:
    """Save configuration to YAML file"""
    config_file = Path(config_path)

    with open(config_file, "w", encoding="utf-8") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, allow_unicode=True)


# Global configuration instance
config = load_config()
