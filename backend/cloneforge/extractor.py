"""
Content extraction from a live Playwright page.

Everything here is fatal on failure: the analyzer does not try to build a
partial record, it lets the error propagate and closes the page.
"""

import json

from cloneforge.image_utils import screenshot_to_data_uri


# Inline <style> text plus a computed-style sample of structural/text elements.
EXTRACT_CSS_JS = """
(limit) => {
    const styles = [];
    document.querySelectorAll('style').forEach(style => {
        styles.push(style.textContent || '');
    });

    const elements = document.querySelectorAll(
        'body, header, nav, main, section, article, aside, footer, div, ' +
        'h1, h2, h3, h4, h5, h6, p, a, button'
    );
    const computedStyles = {};
    for (let i = 0; i < elements.length && i < limit; i++) {
        const el = elements[i];
        const cs = window.getComputedStyle(el);
        const cls = typeof el.className === 'string' && el.className.trim()
            ? '.' + el.className.trim().split(/\\s+/).join('.')
            : '';
        const selector = el.tagName.toLowerCase() + cls + (el.id ? '#' + el.id : '');
        computedStyles[selector] = {
            color: cs.color,
            backgroundColor: cs.backgroundColor,
            fontSize: cs.fontSize,
            fontFamily: cs.fontFamily,
            fontWeight: cs.fontWeight,
            margin: cs.margin,
            padding: cs.padding,
            display: cs.display,
            position: cs.position,
        };
    }
    return { inlineStyles: styles, computedStyles: computedStyles };
}
"""

# Inline script bodies only; external src files are not fetched.
EXTRACT_SCRIPTS_JS = """
() => {
    const scripts = [];
    document.querySelectorAll('script').forEach(script => {
        if (script.textContent && script.textContent.trim()) {
            scripts.push(script.textContent);
        }
    });
    return scripts;
}
"""


async def load_page(page, url: str, timeout_ms: int = 60000, settle_ms: int = 3000):
    """
    Navigate and wait for the network to go idle, then give late-rendering
    content a fixed settle delay. Returns the main navigation response.
    """
    response = await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
    if settle_ms:
        await page.wait_for_timeout(settle_ms)
    return response


def combine_css(inline_styles: list[str], computed_styles: dict) -> str:
    return (
        "\n".join(inline_styles)
        + "\n/* Computed Styles */\n"
        + json.dumps(computed_styles, indent=2)
    )


async def extract_css(page, sample_limit: int = 100) -> str:
    data = await page.evaluate(EXTRACT_CSS_JS, sample_limit)
    return combine_css(data.get("inlineStyles", []), data.get("computedStyles", {}))


async def extract_javascript(page) -> str:
    scripts = await page.evaluate(EXTRACT_SCRIPTS_JS)
    return "\n\n".join(scripts)


async def capture_screenshot(page, max_dim: int | None = None) -> str:
    """Full-page PNG as a data URI."""
    png = await page.screenshot(type="png", full_page=True)
    return screenshot_to_data_uri(png, max_dim=max_dim)
