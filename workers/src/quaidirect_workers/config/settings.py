"""
Configuration settings for QuaiDirect contact import workers
"""
from typing import Optional, Dict, Any
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configuration settings for the contact import workers"""
    
    # Redis/Celery Configuration
    redis_url: str = "redis://localhost:6379/0"
    celery_broker_url: Optional[str] = None
    celery_result_backend: Optional[str] = None
    
    # Import Configuration
    max_file_size_mb: int = 10
    default_phone_region: str = "FR"
    canonical_phone_dedup: bool = False
    task_time_limit_seconds: int = 300
    
    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # json or console
    debug: bool = False  # forces DEBUG logging
    
    class Config:
        env_file = ".env"
        env_prefix = "QUAIDIRECT_"
        
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        
        # Set default celery URLs if not provided
        if not self.celery_broker_url:
            self.celery_broker_url = self.redis_url
        if not self.celery_result_backend:
            self.celery_result_backend = self.redis_url
    
    @property
    def celery_config(self) -> Dict[str, Any]:
        """Get Celery configuration dictionary"""
        return {
            "broker_url": self.celery_broker_url,
            "result_backend": self.celery_result_backend,
            "task_serializer": "json",
            "accept_content": ["json"],
            "result_serializer": "json",
            "timezone": "UTC",
            "enable_utc": True,
            "task_track_started": True,
            "task_time_limit": self.task_time_limit_seconds,
            "task_soft_time_limit": max(self.task_time_limit_seconds - 30, 30),
            "worker_prefetch_multiplier": 1,
            "task_acks_late": True,
            "result_expires": 3600,
            "task_routes": {
                "quaidirect_workers.tasks.import_contacts_file": {"queue": "contact_imports"},
            }
        }


# Global settings instance
settings = Settings()
