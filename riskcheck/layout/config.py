from dataclasses import dataclass

from reportlab.lib.pagesizes import A4, letter

from riskcheck.config.settings import Settings

PAGE_SIZES: dict[str, tuple[float, float]] = {
    "a4": A4,
    "letter": letter,
}


@dataclass(frozen=True)
class LayoutConfig:
    """Static geometry and typography for one document generation.

    Page dimensions are given in portrait; landscape pages swap them.
    All measurements are PDF points.
    """

    page_width: float = A4[0]
    page_height: float = A4[1]
    margin: int = 50
    header_band: int = 36
    footer_band: int = 42

    body_font: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"
    mono_font: str = "Courier"
    body_size: float = 10.5
    heading_size: float = 16.0
    footer_size: float = 7.0
    leading_ratio: float = 1.3

    table_size: float = 8.0
    cell_padding: int = 4
    min_row_height: int = 18
    max_row_height: int = 180
    min_column_width: int = 12

    column_gutter: int = 18
    paragraph_gap: float = 6.0
    section_gap: float = 14.0

    register_landscape: bool = True
    watermark_enabled: bool = True
    brand: str = "WebsiteRiskCheck.com"
    verify_base_url: str = "http://localhost:3000"

    def leading(self, size: float) -> float:
        return size * self.leading_ratio

    def verify_url(self, fingerprint: str) -> str:
        return f"{self.verify_base_url.rstrip('/')}/verify/{fingerprint}"

    @classmethod
    def from_settings(cls, settings: Settings) -> "LayoutConfig":
        size_key = settings.page_size.lower()
        if size_key not in PAGE_SIZES:
            raise ValueError(
                f"Unknown page size '{settings.page_size}'. Choose from: {list(PAGE_SIZES)}"
            )
        width, height = PAGE_SIZES[size_key]
        return cls(
            page_width=width,
            page_height=height,
            margin=settings.page_margin,
            header_band=settings.header_band_height,
            footer_band=settings.footer_band_height,
            body_size=settings.body_font_size,
            table_size=settings.table_font_size,
            cell_padding=settings.table_cell_padding,
            min_row_height=settings.table_min_row_height,
            max_row_height=settings.table_max_row_height,
            min_column_width=settings.min_column_width,
            register_landscape=settings.register_orientation.lower() == "landscape",
            watermark_enabled=settings.watermark_enabled,
            brand=settings.report_brand,
            verify_base_url=settings.verify_base_url,
        )
