"""Print the rendered HTML report to PDF with headless Chromium."""
from __future__ import annotations

import logging
from typing import Optional

from cpr.config import PdfConfig
from cpr.config_browser import BrowserConfig, load_browser_config

logger = logging.getLogger(__name__)


class PdfRenderError(RuntimeError):
    """Raised when the browser cannot be launched or the page cannot be printed."""


def html_to_pdf(
    html: str,
    pdf_cfg: Optional[PdfConfig] = None,
    browser_cfg: Optional[BrowserConfig] = None,
) -> bytes:
    """Return the PDF bytes for *html*, one fixed-size page per report section."""
    try:
        from playwright.sync_api import Error as PlaywrightError
        from playwright.sync_api import sync_playwright
    except ImportError as exc:
        raise PdfRenderError(
            "playwright is not installed. Run `pip install playwright` "
            "and `playwright install chromium`."
        ) from exc

    pdf_cfg = pdf_cfg or PdfConfig()
    browser_cfg = browser_cfg or load_browser_config()
    width = f"{pdf_cfg.width_px}px"
    height = f"{pdf_cfg.height_px}px"

    logger.info(
        "printing PDF (%sx%s) executable=%s headless=%s",
        width,
        height,
        browser_cfg.executable_path or "bundled",
        browser_cfg.headless,
    )
    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(
                headless=browser_cfg.headless,
                executable_path=browser_cfg.executable_path,
                args=browser_cfg.args,
            )
            try:
                page = browser.new_page(
                    viewport={"width": pdf_cfg.width_px, "height": pdf_cfg.height_px}
                )
                page.set_content(html, wait_until="networkidle", timeout=pdf_cfg.timeout_ms)
                return page.pdf(
                    width=width,
                    height=height,
                    print_background=pdf_cfg.print_background,
                )
            finally:
                browser.close()
    except PlaywrightError as exc:
        raise PdfRenderError(
            f"PDF rendering failed: {exc}. Run `playwright install chromium` "
            "or set CPR_CHROME_EXECUTABLE_PATH."
        ) from exc
