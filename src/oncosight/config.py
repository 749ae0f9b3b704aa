from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ──────────────────────────────────────────────
# Settings (from environment variables / .env)
# ──────────────────────────────────────────────
class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # CORS settings
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    cors_allow_credentials: bool = True
    cors_allow_methods: str = "GET,POST,OPTIONS"
    cors_allow_headers: str = "*"

    # External inference service (brain-tumor classifier)
    brain_tumor_url: str = Field(
        default="http://localhost:5000",
        validation_alias=AliasChoices("NEXT_PUBLIC_BRAIN_TUMOR_URL", "BRAIN_TUMOR_URL"),
    )

    # Chat completion provider (Groq, OpenAI-compatible API)
    groq_api_key: str = ""
    groq_base_url: str = "https://api.groq.com/openai/v1"
    chat_model: str = "llama3-8b-8192"
    chat_temperature: float = 0.7
    chat_max_tokens: int = 1000

    # Outbound HTTP
    request_timeout: float = 30.0  # seconds, 0 disables

    # Upload settings
    max_upload_size: int = 10 * 1024 * 1024  # 10 MB
    allowed_extensions: str = ".jpg,.jpeg,.png,.webp"

    # Application settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def cors_methods_list(self) -> list[str]:
        """Parse CORS methods from comma-separated string."""
        if self.cors_allow_methods == "*":
            return ["*"]
        return [method.strip() for method in self.cors_allow_methods.split(",")]

    @property
    def cors_headers_list(self) -> list[str]:
        """Parse CORS headers from comma-separated string."""
        if self.cors_allow_headers == "*":
            return ["*"]
        return [header.strip() for header in self.cors_allow_headers.split(",")]

    @property
    def allowed_extensions_set(self) -> set[str]:
        """Parse allowed extensions from comma-separated string."""
        return {ext.strip().lower() for ext in self.allowed_extensions.split(",")}

    @property
    def timeout(self) -> float | None:
        """Timeout handed to httpx; ``None`` waits forever."""
        return self.request_timeout or None


# Global settings instance
settings = Settings()

# ──────────────────────────────────────────────
# Chat assistant
# ──────────────────────────────────────────────
CANCER_SYSTEM_PROMPT = """You are a specialized medical AI assistant focused exclusively on cancer-related topics.

Your role is to:
- Provide educational information about all types of cancer
- Explain cancer symptoms, risk factors, prevention, and general treatment approaches
- Help users understand cancer-related medical terminology
- Discuss cancer screening, diagnosis, and staging
- Provide information about various cancer treatments (chemotherapy, radiation, surgery, immunotherapy, etc.)
- Offer support and guidance for cancer patients and their families
- Suggest when to seek professional medical attention

Important guidelines:
- ONLY answer questions related to cancer and oncology
- Always emphasize that you cannot provide medical diagnosis or replace professional medical advice
- Encourage users to consult healthcare professionals for personal medical concerns
- If asked about non-cancer medical conditions or any other topics, politely redirect to cancer-related information
- Provide accurate, evidence-based information while being compassionate and supportive
- You can discuss cancer prevention, lifestyle factors, and general wellness as they relate to cancer

If a question is completely outside the scope of cancer (not related to any aspect of cancer, oncology, or cancer care), respond with: "I specialize exclusively in providing information about cancer and oncology. For questions about other topics, please consult appropriate resources or healthcare professionals. Is there anything cancer-related I can help you with?\""""

CHAT_FALLBACK_REPLY = "Sorry, I encountered an error. Please try again."

# ──────────────────────────────────────────────
# Account settings messages
# ──────────────────────────────────────────────
SETTINGS_UPDATED = "Settings Updated!"
SETTINGS_FAILED = "Something went wrong!"
