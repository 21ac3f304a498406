"""
Website analyzer: renders a URL in the shared browser and builds one
immutable WebsiteAnalysis record.

Pipeline per URL:
  [1] open isolated page (viewport + desktop UA)
  [2] navigate + settle
  [3] HTML, title, CSS, inline JS, full-page screenshot
  [4] technology fingerprint (static markers, then in-page globals)
  [5] structural HTML pass (images, links, fonts, libraries, meta)
"""

import time

from cloneforge.browser import BrowserPool
from cloneforge.config import get_settings
from cloneforge.exceptions import AnalysisError
from cloneforge.extractor import (
    capture_screenshot,
    extract_css,
    extract_javascript,
    load_page,
)
from cloneforge.fingerprint import detect_technology, probe_page_globals
from cloneforge.html_analysis import analyze_html
from cloneforge.models import SiteMetadata, WebsiteAnalysis


class WebsiteAnalyzer:
    def __init__(self, pool: BrowserPool | None = None, settings=None):
        self.pool = pool or BrowserPool()
        self.settings = settings or get_settings()

    async def analyze_website(self, url: str) -> WebsiteAnalysis:
        s = self.settings
        start = time.time()
        print(f"  [analyzer] Starting analysis of {url}...")

        viewport = {"width": s.viewport_width, "height": s.viewport_height}
        async with self.pool.page(viewport=viewport, user_agent=s.user_agent) as page:
            try:
                response = await load_page(
                    page, url,
                    timeout_ms=s.page_load_timeout,
                    settle_ms=s.settle_delay,
                )
            except Exception as e:
                raise AnalysisError(f"Failed to load {url}: {e}") from e

            print("  [analyzer] Page loaded, extracting content...")
            try:
                html = await page.content()
                title = await page.title()
                css = await extract_css(page, sample_limit=s.computed_style_limit)
                javascript = await extract_javascript(page)
                screenshot = await capture_screenshot(page, max_dim=s.max_screenshot_dim)
            except Exception as e:
                raise AnalysisError(f"Failed to extract content from {url}: {e}") from e

            page_globals = await probe_page_globals(page)

        server = None
        if response is not None:
            server = response.headers.get("server")
        technology = detect_technology(html, page_globals=page_globals, server=server)
        structure = analyze_html(html)

        print(f"  [analyzer] Analysis complete in {time.time() - start:.1f}s, "
              f"{technology.framework}, {len(structure.images)} images, "
              f"{len(structure.links)} links, {len(css)} chars CSS")

        return WebsiteAnalysis(
            url=url,
            title=title,
            description=structure.description,
            html=html,
            css=css,
            javascript=javascript,
            images=tuple(structure.images),
            links=tuple(structure.links),
            screenshots=(screenshot,),
            detected_technology=technology,
            metadata=SiteMetadata(
                fonts=tuple(structure.fonts),
                colors=(),
                frameworks=(technology.framework,) if technology.framework else (),
                libraries=tuple(structure.libraries),
                meta_tags=tuple(structure.meta_tags),
            ),
        )

    async def close_browser(self):
        await self.pool.release()


# Global singleton shared by every project pipeline
website_analyzer = WebsiteAnalyzer()
