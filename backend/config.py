"""Configuration settings for the network speed exporter."""

import os


class Config:
    """Application configuration."""

    # Seconds between sampling cycles (also the retry delay after a failed read)
    SAMPLE_INTERVAL = float(os.environ.get('SAMPLE_INTERVAL', 1))

    # Interfaces not seen for this many seconds are dropped from the sample store
    STALE_AFTER_SECONDS = float(os.environ.get('STALE_AFTER_SECONDS', 300))

    # Maximum number of interfaces to track
    MAX_INTERFACES = int(os.environ.get('MAX_INTERFACES', 1000))

    # Web server settings
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT') or 8080)
    DEBUG = os.environ.get('DEBUG', 'false').lower() == 'true'

    # Comma-separated list of client addresses allowed to scrape; empty allows all
    ALLOWED_IPS = os.environ.get('ALLOWED_IPS', '')

    # Start the background sampler when the app module is loaded
    START_SAMPLER = os.environ.get('START_SAMPLER', 'true').lower() == 'true'

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'WARNING')

    @classmethod
    def get_allowed_ips(cls) -> list:
        """Return the allowlist as a list of stripped, non-empty addresses."""
        return [ip.strip() for ip in cls.ALLOWED_IPS.split(',') if ip.strip()]

    @classmethod
    def get_sampling(cls) -> dict:
        """Return the sampling settings."""
        return {
            'interval_seconds': cls.SAMPLE_INTERVAL,
            'stale_after_seconds': cls.STALE_AFTER_SECONDS,
            'max_interfaces': cls.MAX_INTERFACES
        }
