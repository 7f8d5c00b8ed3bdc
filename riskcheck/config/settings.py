from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    report_brand: str = "WebsiteRiskCheck.com"
    verify_base_url: str = "http://localhost:3000"

    pdf_engine: str = "reportlab"
    pdf_text_engine: str = "pdfplumber"

    page_size: str = "A4"
    page_margin: int = 50
    header_band_height: int = 36
    footer_band_height: int = 42

    body_font_size: float = 10.5
    table_font_size: float = 8.0
    table_cell_padding: int = 4
    table_min_row_height: int = 18
    table_max_row_height: int = 180
    min_column_width: int = 12

    register_orientation: str = "landscape"
    watermark_enabled: bool = True
