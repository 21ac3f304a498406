"""
Shared headless Chromium for all analyses.

One browser is launched lazily on first use and reused by every concurrent
analysis; each analysis gets its own isolated context + page. The browser
is only torn down when the pipeline calls release() after a full run and
no other analysis still has a page open.
"""
import asyncio
from contextlib import asynccontextmanager

from playwright.async_api import async_playwright
from playwright_stealth import Stealth

LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

_stealth = Stealth()


async def launch_chromium():
    """Start Playwright and a headless Chromium. Returns (playwright, browser)."""
    playwright = await async_playwright().start()
    try:
        browser = await playwright.chromium.launch(headless=True, args=LAUNCH_ARGS)
    except Exception:
        await playwright.stop()
        raise
    return playwright, browser


class BrowserPool:
    def __init__(self, launcher=launch_chromium):
        self._launcher = launcher
        self._playwright = None
        self._browser = None
        self.lock = asyncio.Lock()
        self.launch_count = 0
        self.open_pages = 0
        self._close_pending = False

    async def acquire(self):
        """
        Return the shared browser, launching it if needed.
        Concurrent callers wait on the lock, so only one launch ever happens.
        """
        if self._browser is not None:
            return self._browser
        async with self.lock:
            if self._browser is None:
                print("[browser] Launching headless Chromium...")
                self._playwright, self._browser = await self._launcher()
                self.launch_count += 1
        return self._browser

    async def release(self):
        """
        Close the browser. The next acquire() relaunches it.
        While other analyses still hold pages the close is deferred until
        the last of them exits page().
        """
        async with self.lock:
            if self.open_pages:
                self._close_pending = True
                print(f"[browser] Close deferred, {self.open_pages} page(s) still open")
                return
            self._close_pending = False
            browser, playwright = self._browser, self._playwright
            self._browser = None
            self._playwright = None
        if browser is not None:
            try:
                await browser.close()
            finally:
                if playwright is not None:
                    await playwright.stop()
            print("[browser] Closed")

    @asynccontextmanager
    async def page(self, viewport: dict | None = None, user_agent: str | None = None):
        """Open an isolated page on the shared browser; always closed on exit."""
        browser = await self.acquire()
        self.open_pages += 1
        try:
            context_opts = {}
            if viewport:
                context_opts["viewport"] = viewport
            if user_agent:
                context_opts["user_agent"] = user_agent
            context = await browser.new_context(**context_opts)
            try:
                await _stealth.apply_stealth_async(context)
                page = await context.new_page()
                yield page
            finally:
                await context.close()
        finally:
            self.open_pages -= 1
            if self.open_pages == 0 and self._close_pending:
                await self.release()

    @property
    def is_running(self) -> bool:
        return self._browser is not None
