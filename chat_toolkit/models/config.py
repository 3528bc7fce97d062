"""Configuration data models"""

from pydantic import BaseModel, Field, field_validator


DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant integrated with a note-taking app. "
    "Help users improve their notes, answer questions, and provide writing assistance."
)


class ChatSettings(BaseModel):
    """Live settings snapshot read at the start of every call"""
    api_key: str = ""
    model: str = "gpt-4.1"
    max_tokens: int = Field(default=1000, ge=1)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    reasoning_effort: str = "low"  # "low", "medium", "high"
    verbosity: str = "low"  # "low", "medium", "high"
    api_base: str = "https://api.openai.com/v1"
    timeout: float = Field(default=60.0, gt=0)

    @field_validator('api_base')
    @classmethod
    def validate_api_base(cls, v: str) -> str:
        """Validate base URL format"""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('api_base must start with http:// or https://')
        return v.rstrip('/')

    @property
    def history_budget(self) -> int:
        """Token budget reserved for retained conversation history"""
        return self.max_tokens // 2

    class Config:
        validate_assignment = True


class ServerConfig(BaseModel):
    """Host server configuration"""
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = "INFO"
    debug_mode: bool = Field(
        default=False,
        description="Log raw upstream responses for diagnosis"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f'log_level must be one of {valid_levels}')
        return v_upper

    class Config:
        validate_assignment = True


class AppConfig(BaseModel):
    """Complete application configuration"""
    server: ServerConfig = Field(default_factory=ServerConfig)
    chat: ChatSettings = Field(default_factory=ChatSettings)

    class Config:
        validate_assignment = True
