"""Tests for the StageClassifier: precedence, anchoring, and rule ownership."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from buildinfo.core.classifier import StageClassifier
from buildinfo.models.signals import PageCompleted, StageStarted
from buildinfo.models.stages import DEFAULT_TOOL_SIGNATURES, ToolSignature

Window = Callable[..., str]


class TestPageMarkers:
    def test_page_marker_when_stage_produces_pages(
        self, classifier: StageClassifier, make_window: Window
    ):
        event = classifier.classify(make_window("[1]"), produces_pages=True)
        assert event == PageCompleted(page=1)

    def test_page_marker_with_trailing_font_info(
        self, classifier: StageClassifier, make_window: Window
    ):
        window = make_window("[12{/usr/share/texmf/fonts/map/pdftex/updmap/pdftex.map}]")
        assert classifier.classify(window, produces_pages=True) == PageCompleted(page=12)

    def test_last_marker_on_line_wins(self, classifier: StageClassifier, make_window: Window):
        window = make_window("[3] [4] [5]")
        assert classifier.classify(window, produces_pages=True) == PageCompleted(page=5)

    @pytest.mark.parametrize("flag", [False, None])
    def test_page_marker_ignored_unless_page_producing(
        self, classifier: StageClassifier, make_window: Window, flag: bool | None
    ):
        assert classifier.classify(make_window("[1]"), produces_pages=flag) is None

    def test_marker_must_end_the_window(self, classifier: StageClassifier, make_window: Window):
        window = make_window("[1]", "Overfull \\hbox in paragraph")
        assert classifier.classify(window, produces_pages=True) is None

    def test_marker_followed_by_newline_does_not_fire(
        self, classifier: StageClassifier, make_window: Window
    ):
        window = make_window("[1]", "")
        assert classifier.classify(window, produces_pages=True) is None

    def test_unparseable_digits_are_dropped(self):
        assert StageClassifier._page_event("not-a-number") is None

    def test_unparseable_marker_does_not_fall_through(
        self, monkeypatch: pytest.MonkeyPatch, make_window: Window
    ):
        classifier = StageClassifier()
        monkeypatch.setattr(StageClassifier, "_page_event", staticmethod(lambda digits: None))
        # Without the page marker this line would match the pdfTeX banner
        window = make_window("This is pdfTeX, Version 3.14 [1]")
        assert classifier.classify(window, produces_pages=True) is None


class TestGenericRuleStart:
    def test_unknown_rule_starts_stage_with_unknown_pages(
        self, classifier: StageClassifier, make_window: Window
    ):
        window = make_window("Latexmk: applying rule 'biber'...", "")
        assert classifier.classify(window, produces_pages=None) == StageStarted(
            name="biber", produces_pages=None
        )

    def test_rule_name_outside_alphabet_is_ignored(
        self, classifier: StageClassifier, make_window: Window
    ):
        window = make_window("Latexmk: applying rule 'makeindex doc.idx'...", "")
        assert classifier.classify(window, produces_pages=None) is None

    def test_rule_name_with_slash_and_space(
        self, classifier: StageClassifier, make_window: Window
    ):
        window = make_window("Latexmk: applying rule 'cusdep glo gls/x'...", "")
        event = classifier.classify(window, produces_pages=None)
        assert isinstance(event, StageStarted)
        assert event.name == "cusdep glo gls/x"

    def test_rule_line_needs_trailing_newline(
        self, classifier: StageClassifier, make_window: Window
    ):
        window = make_window("Latexmk: applying rule 'biber'...")
        assert classifier.classify(window, produces_pages=None) is None

    @pytest.mark.parametrize("rule", ["pdflatex", "pdftex", "lualatex", "xelatex", "sage"])
    def test_hardcoded_rule_names_are_deferred(
        self, classifier: StageClassifier, make_window: Window, rule: str
    ):
        window = make_window(f"Latexmk: applying rule '{rule}'...", "")
        assert classifier.classify(window, produces_pages=None) is None

    def test_generic_rule_checked_when_page_marker_absent(
        self, classifier: StageClassifier, make_window: Window
    ):
        window = make_window("Latexmk: applying rule 'bibtex'...", "")
        assert classifier.classify(window, produces_pages=True) == StageStarted(name="bibtex")

    def test_custom_reserved_rules(self, make_window: Window):
        classifier = StageClassifier(reserved_rules=["bibtex"])
        window = make_window("Latexmk: applying rule 'bibtex'...", "")
        assert classifier.classify(window, produces_pages=None) is None


class TestToolSignatures:
    @pytest.mark.parametrize(
        ("banner", "name", "pages"),
        [
            (
                "This is pdfTeX, Version 3.141592653-2.6-1.40.25 (TeX Live 2023) "
                "(preloaded format=pdflatex)",
                "pdfTeX",
                True,
            ),
            ("This is BibTeX, Version 0.99d (TeX Live 2023)", "BibTeX", False),
            ("This is Biber 2.19", "Biber", False),
            ('Processing Sage code for "doc.sagetex.sage"...', "Sage", False),
            ("This is LuaTeX, Version 1.17.0 (TeX Live 2023)", "LuaTeX", True),
            ("This is LuaHBTeX, Version 1.17.0 (TeX Live 2023)", "LuaHBTeX", True),
            (
                "This is XeTeX, Version 3.141592653-2.6-0.999995 (TeX Live 2023) "
                "(preloaded format=xelatex)",
                "XeTeX",
                True,
            ),
        ],
    )
    def test_banner_starts_stage(
        self,
        classifier: StageClassifier,
        make_window: Window,
        banner: str,
        name: str,
        pages: bool,
    ):
        event = classifier.classify(make_window(banner), produces_pages=None)
        assert event == StageStarted(name=name, produces_pages=pages)

    def test_banner_followed_by_other_line_does_not_fire(
        self, classifier: StageClassifier, make_window: Window
    ):
        window = make_window("This is pdfTeX, Version 3.14", " restricted \\write18 enabled.")
        assert classifier.classify(window, produces_pages=None) is None

    def test_banner_followed_by_empty_line_does_not_fire(
        self, classifier: StageClassifier, make_window: Window
    ):
        window = make_window("This is pdfTeX, Version 3.14", "")
        assert classifier.classify(window, produces_pages=None) is None

    def test_first_matching_signature_wins(self, make_window: Window):
        signatures = [
            ToolSignature(name="First", pattern=r"This is Tool[\w ]*", produces_pages=False),
            ToolSignature(name="Second", pattern=r"This is Tool X", produces_pages=True),
        ]
        classifier = StageClassifier(signatures)
        event = classifier.classify(make_window("This is Tool X"), produces_pages=None)
        assert event == StageStarted(name="First", produces_pages=False)

    def test_default_table_order_is_fixed(self, classifier: StageClassifier):
        names = [s.name for s in classifier.signatures]
        assert names == ["pdfTeX", "BibTeX", "Biber", "Sage", "LuaTeX", "LuaHBTeX", "XeTeX"]
        assert classifier.signatures == DEFAULT_TOOL_SIGNATURES

    def test_plain_output_is_no_event(self, classifier: StageClassifier, make_window: Window):
        window = make_window("(./doc.aux)", "LaTeX Warning: Label(s) may have changed.")
        assert classifier.classify(window, produces_pages=True) is None

    def test_classifier_is_stateless(self, classifier: StageClassifier, make_window: Window):
        window = make_window("This is BibTeX, Version 0.99d")
        first = classifier.classify(window, produces_pages=None)
        second = classifier.classify(window, produces_pages=None)
        assert first == second == StageStarted(name="BibTeX", produces_pages=False)
