"""Tests for technology fingerprinting."""

import pytest

from cloneforge.fingerprint import detect_technology, probe_page_globals
from conftest import run


class TestStaticSignatures:
    @pytest.mark.parametrize("html,framework,language", [
        ('<link href="/wp-content/themes/x/style.css">', "WordPress", "PHP"),
        ('<script id="__NEXT_DATA__">{}</script>', "Next.js", "JavaScript"),
        ('<script src="/react.min.js"></script>', "React", "JavaScript"),
        ('<div id="app" data-vue></div>', "Vue.js", "JavaScript"),
        ('<div ng-app="shop"></div>', "Angular", "TypeScript"),
        ('<meta name="csrf-token" content="abc">', "Laravel", "PHP"),
        ("<p>plain</p>", "HTML/CSS/JS", "JavaScript"),
    ])
    def test_markers(self, html, framework, language):
        tech = detect_technology(html)
        assert tech.framework == framework
        assert tech.language == language

    def test_wordpress_sets_cms(self):
        tech = detect_technology("<img src='/wp-content/uploads/a.png'>")
        assert tech.cms == "WordPress"
        assert tech.build_tool is None

    def test_nextjs_sets_build_tool(self):
        tech = detect_technology('<script src="/_next/static/chunks/main.js"></script>')
        assert tech.build_tool == "Next.js"

    def test_first_match_wins(self):
        # WordPress markers beat the React marker later in the list
        html = '<link href="/wp-content/x.css"><script src="react.js"></script>'
        assert detect_technology(html).framework == "WordPress"

    def test_matching_is_case_sensitive(self):
        assert detect_technology("<p>WORDPRESS</p>").framework == "HTML/CSS/JS"


class TestDynamicUpgrade:
    def test_globals_upgrade_default_label(self):
        tech = detect_technology("<p>plain</p>", page_globals={"hasVue": True})
        assert tech.framework == "Vue.js"

    def test_react_global_beats_vue_global(self):
        globals_ = {"hasReact": True, "hasVue": True, "hasAngular": True}
        assert detect_technology("<p>x</p>", page_globals=globals_).framework == "React"

    def test_jquery_global_does_not_change_label(self):
        tech = detect_technology("<p>x</p>", page_globals={"hasJQuery": True})
        assert tech.framework == "HTML/CSS/JS"

    def test_static_wordpress_is_never_overridden(self):
        globals_ = {"hasReact": True, "hasVue": True, "hasAngular": True, "hasJQuery": True}
        tech = detect_technology("<body class='wp-content'>", page_globals=globals_)
        assert tech.framework == "WordPress"
        assert tech.language == "PHP"

    def test_server_header_is_carried(self):
        assert detect_technology("<p>x</p>", server="nginx").server == "nginx"


def test_identical_input_gives_identical_result():
    html = '<script src="/vue.global.js"></script>'
    globals_ = {"hasReact": True}
    assert detect_technology(html, globals_) == detect_technology(html, globals_)


class TestProbePageGlobals:
    def test_returns_evaluated_globals(self):
        class Page:
            async def evaluate(self, script):
                return {"hasReact": True}

        assert run(probe_page_globals(Page())) == {"hasReact": True}

    def test_evaluation_failure_is_swallowed(self, capsys):
        class Page:
            async def evaluate(self, script):
                raise RuntimeError("Execution context was destroyed")

        assert run(probe_page_globals(Page())) is None
        assert "Could not evaluate page technologies" in capsys.readouterr().out
