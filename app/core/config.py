import os
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# SDK clients (openai, langchain) read their own variables from os.environ
load_dotenv()


class Settings(BaseSettings):
    """
    Application configuration settings.
    """
    model_config = SettingsConfigDict(env_prefix="GENAI_CHAT_", env_file=".env", extra="ignore")

    # Service Info
    service_name: str = "genai-chat-orchestrator"
    environment: str = "local"
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # LLM backend selection: openai | azure_openai | ollama | langchain_azure
    llm_provider: str = "ollama"
    model_id: str = "deepseek-r1:1.5b"
    request_timeout_seconds: float = 60.0

    # OpenAI
    openai_api_key: str = "placeholder-key"
    openai_base_url: str | None = None

    # Azure OpenAI
    azure_openai_api_key: str = "placeholder-key"
    azure_openai_endpoint: str = "https://placeholder.openai.azure.com"
    azure_openai_api_version: str = "2024-02-15-preview"
    azure_openai_deployment_name: str = "gpt-4o-mini"

    # Ollama (OpenAI-compatible endpoint)
    ollama_base_url: str = "http://127.0.0.1:11434/v1"

    # Sessions
    session_timeout_minutes: int = 30

    # Default prompt options for new sessions
    reasoning_tag: str = "think"
    summarize_max_word_count: int = 50
    truncation_max_previous_prompts: int = 5
    use_memory: bool = True
    use_truncation: bool = False
    use_summarization: bool = False
    use_rag: bool = False

    # Paths
    base_dir: str = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    prompts_dir: str = os.path.join(base_dir, "prompts")

settings = Settings()
