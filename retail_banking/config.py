"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class RetailBankingConfig(BaseSettings):
    """Retail banking system configuration"""
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stdout
    
    # Display configuration
    currency_symbol: str = "₸"
    amount_precision: int = 2
    
    # Account rules
    base_bonus_percentage: str = "1.0"
    
    # Interest strategies (annual rates as fractions)
    savings_interest_rate: str = "0.03"
    vip_interest_rate: str = "0.05"
    loan_interest_rate: str = "0.07"
    
    # Loan agreement defaults
    default_loan_purpose: str = "General purpose"
    agreement_number_prefix: str = "LOAN"
    
    # Notifications
    broadcast_notice_prefix: str = "[BANK NOTIFICATION]: "
    
    class Config:
        env_prefix = "RETAIL_BANKING_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = RetailBankingConfig()


def get_config() -> RetailBankingConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> RetailBankingConfig:
    """Reload configuration from environment"""
    global config
    config = RetailBankingConfig()
    return config
