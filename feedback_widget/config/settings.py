from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]
    route_prefix: str = "/feedback"

    # AI / Anthropic
    anthropic_api_key: str = ""
    feedback_model: str = "claude-sonnet-4-20250514"
    feedback_temperature: float = 0.7
    feedback_max_tokens: int = 1024
    # Retries and per-request timeout are handled by the SDK client
    feedback_max_retries: int = 2
    feedback_timeout_seconds: float = 60.0

    # Prompt context - app name is embedded in every system prompt
    app_name: str = "the application"
    # None = default locale ("en"), no language directive in prompts
    locale: str | None = None

    # GitHub App used to file issues
    github_app_id: str = ""
    # Base64-encoded PEM private key of the GitHub App
    github_app_private_key: str = ""
    github_app_installation_id: str = ""
    github_repo_owner: str = ""
    github_repo_name: str = ""
    github_feedback_label: str = "user-feedback"

    # Screenshots
    # Absolute origin the screenshot URLs are built on; GitHub cannot resolve relative links
    public_base_url: str = "http://localhost:8000"
    screenshot_dir: str = "storage/feedback-screenshots"
    screenshot_url_prefix: str = "/feedback-screenshots"
    screenshot_max_bytes: int = 5 * 1024 * 1024  # 5 MB

    # Conversation / request bounds
    max_history_turns: int = 20
    max_message_length: int = 2000
    max_history_content_length: int = 5000
    max_title_length: int = 255
    max_body_length: int = 10000

    # Rate limits (requests per minute per user)
    chat_rate_limit: int = 10
    issue_rate_limit: int = 5

    # Auth - HS256 secret shared with the host application's session issuer
    # Generate with: python -c "import secrets; print(secrets.token_urlsafe(32))"
    auth_jwt_secret: str = ""
    auth_jwt_audience: str = "authenticated"

    @property
    def github_enabled(self) -> bool:
        """Check if the GitHub App and target repository are configured."""
        return bool(
            self.github_app_id
            and self.github_app_private_key
            and self.github_app_installation_id
            and self.github_repo_owner
            and self.github_repo_name
        )


settings = Settings()
