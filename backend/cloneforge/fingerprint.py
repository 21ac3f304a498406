"""
Technology fingerprinting from raw HTML plus optional in-page globals.

Static markers are checked in a fixed order and the first hit wins. The
in-page globals can only fill in a label when no static marker matched:
a page that mentions wp-content stays WordPress even if window.React
exists. That precedence is intentional policy.
"""

from typing import Mapping, Optional

from cloneforge.models import DEFAULT_FRAMEWORK_LABEL, TechnologyStack


# (markers, framework, language, cms, build_tool), checked in order
STATIC_SIGNATURES = [
    (("wp-content", "wordpress"), "WordPress", "PHP", "WordPress", None),
    (("_next", "__NEXT_DATA__"), "Next.js", "JavaScript", None, "Next.js"),
    (("react", "ReactDOM"), "React", "JavaScript", None, None),
    (("vue", "Vue"), "Vue.js", "JavaScript", None, None),
    (("angular", "ng-"), "Angular", "TypeScript", None, None),
    (("laravel", "csrf-token"), "Laravel", "PHP", None, None),
]

# In-page global probes, in upgrade priority order
DYNAMIC_SIGNATURES = [
    ("hasReact", "React"),
    ("hasVue", "Vue.js"),
    ("hasAngular", "Angular"),
]

PAGE_GLOBALS_JS = """
() => ({
    hasJQuery: typeof window.$ !== 'undefined',
    hasReact: typeof window.React !== 'undefined',
    hasVue: typeof window.Vue !== 'undefined',
    hasAngular: typeof window.angular !== 'undefined',
})
"""


def detect_technology(
    html: str,
    page_globals: Optional[Mapping[str, bool]] = None,
    server: Optional[str] = None,
) -> TechnologyStack:
    framework = DEFAULT_FRAMEWORK_LABEL
    language = "JavaScript"
    cms = None
    build_tool = None

    for markers, fw, lang, sig_cms, sig_build in STATIC_SIGNATURES:
        if any(marker in html for marker in markers):
            framework, language, cms, build_tool = fw, lang, sig_cms, sig_build
            break

    if page_globals and framework == DEFAULT_FRAMEWORK_LABEL:
        for key, fw in DYNAMIC_SIGNATURES:
            if page_globals.get(key):
                framework = fw
                break

    return TechnologyStack(
        framework=framework,
        language=language,
        cms=cms,
        build_tool=build_tool,
        server=server,
    )


async def probe_page_globals(page) -> Optional[dict]:
    """Best effort: evaluation errors are logged and yield None."""
    try:
        return await page.evaluate(PAGE_GLOBALS_JS)
    except Exception as e:
        print(f"  [fingerprint] Could not evaluate page technologies: {e}")
        return None
