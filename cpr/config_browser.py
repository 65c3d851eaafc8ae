"""Configuration loader for the headless browser used to print PDFs."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv


class BrowserConfigError(ValueError):
    pass


@dataclass
class BrowserConfig:
    executable_path: Optional[str] = None  # None = playwright's bundled Chromium
    headless: bool = True
    args: List[str] = field(default_factory=lambda: ["--no-sandbox"])


def _clean(v) -> str:
    return str(v or "").strip()


def _truthy(v: str, default: bool) -> bool:
    if not v:
        return default
    return v.lower() not in {"0", "false", "no", "off"}


def load_browser_config() -> BrowserConfig:
    """Read browser settings from the environment (and ``.env`` if present).

    - ``CPR_CHROME_EXECUTABLE_PATH``: use a system Chrome/Chromium binary.
    - ``CPR_PDF_HEADLESS``: set to ``0`` to watch the browser while debugging.
    - ``CPR_SERVERLESS``: add the flags needed inside containers/lambdas.
    """
    load_dotenv()
    exe = _clean(os.environ.get("CPR_CHROME_EXECUTABLE_PATH")) or None
    if exe and not Path(exe).exists():
        raise BrowserConfigError(
            f"CPR_CHROME_EXECUTABLE_PATH points to a missing file: {exe}"
        )

    args = ["--no-sandbox"]
    if _truthy(_clean(os.environ.get("CPR_SERVERLESS")), False):
        args += [
            "--disable-setuid-sandbox",
            "--disable-dev-shm-usage",
            "--disable-gpu",
            "--single-process",
        ]

    return BrowserConfig(
        executable_path=exe,
        headless=_truthy(_clean(os.environ.get("CPR_PDF_HEADLESS")), True),
        args=args,
    )
