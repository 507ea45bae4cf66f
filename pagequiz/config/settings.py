from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_images: int = 3
    max_image_bytes: int = 10 * 1024 * 1024
    min_text_length: int = 5

    ocr_engine: str = "tesseract"
    ocr_languages: str = "eng+uzb+rus"
    tesseract_cmd: str = ""

    camera_backend: str = "opencv"
    camera_environment_device: int = 1
    camera_user_device: int = 0
    camera_default_device: int = 0
    camera_ideal_width: int = 1280
    camera_ideal_height: int = 720
    camera_min_width: int = 640
    camera_min_height: int = 480
    camera_jpeg_quality: float = 0.92

    generator_backend: str = "remote"
    generation_endpoint_url: str = "http://localhost:8000/generate"
    generation_timeout_seconds: int = 60

    result_locale: str = "uz"

    completion_provider: str = "gemini"
    gemini_api_key: str = ""
    gemini_model_name: str = "gemini-2.0-flash-exp"
    gemini_timeout_seconds: int = 60
    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini"
    openai_timeout_seconds: int = 60
    openai_compatible_api_key: str = ""
    openai_compatible_model_name: str = ""
    openai_compatible_base_url: str = ""
    openai_compatible_timeout_seconds: int = 60

    generation_temperature: float = 0.7
    generation_top_p: float = 0.8
    generation_top_k: int = 40
    generation_max_output_tokens: int = 2048

    server_host: str = "0.0.0.0"
    server_port: int = 8000
    cors_allow_origins: list[str] = ["*"]

    auth_provider: str = "example"
    supabase_url: str = ""
    supabase_anon_key: str = ""
