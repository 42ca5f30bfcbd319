# -*- coding: utf-8 -*-
"""
Tests for core.text_fit - suffix-preserving label truncation
"""

import pytest
from orangefish.core.text_fit import ELLIPSIS, fit_text


def char_width(text):
    """One unit per character, like a monospace font."""
    return len(text)


def proportional_width(text):
    """Narrow and wide glyphs, like a proportional font."""
    return sum(0.5 if c in "il.,/" else 2 if c in "MW" else 1 for c in text)


class TestFitText:

    def test_text_that_fits_is_unchanged(self):
        assert fit_text("src/main.py", char_width, 40) == "src/main.py"

    def test_exact_width_does_not_fit(self):
        # Fits only when strictly narrower than the container
        assert fit_text("abcd", char_width, 4) != "abcd"

    def test_keeps_rightmost_characters(self):
        text = "src/components/widgets/button.py"
        fitted = fit_text(text, char_width, 20)
        assert fitted.startswith(ELLIPSIS)
        assert text.endswith(fitted[len(ELLIPSIS):])
        assert char_width(fitted) < 20

    def test_removes_step_characters_per_iteration(self):
        # 12 chars, container 12: "..." + text[4:] is 11 wide and fits
        assert fit_text("abcdefghijkl", char_width, 12, step=4) == "...efghijkl"

    def test_custom_step(self):
        assert fit_text("abcdefghijkl", char_width, 12, step=1) == "...efghijkl"
        assert fit_text("abcdefghij", char_width, 10, step=2) == "...efghij"

    def test_custom_ellipsis(self):
        assert fit_text("abcdefghijkl", char_width, 12, ellipsis="…") == "…efghijkl"

    @pytest.mark.parametrize("width", [0, -5])
    @pytest.mark.parametrize("text", ["", "a", "ab", "abc", "a long file name.txt"])
    def test_non_positive_width_yields_ellipsis(self, text, width):
        assert fit_text(text, char_width, width) == ELLIPSIS

    def test_nothing_fits_yields_ellipsis(self):
        assert fit_text("abcdefgh", char_width, 2) == ELLIPSIS

    def test_idempotent_from_original(self):
        text = "assets/images/icons/large/folder-open.svg"
        first = fit_text(text, char_width, 18)
        assert fit_text(text, char_width, 18) == first

    @pytest.mark.parametrize("measure", [char_width, proportional_width])
    @pytest.mark.parametrize("width", [-1, 0, 1, 3, 4, 7, 12, 25, 80])
    @pytest.mark.parametrize(
        "text",
        ["", "a", "...", "WWWWiiii", "src/app.py", "assets/images/icons/large/folder-open.svg"],
    )
    def test_fitting_fitted_text_changes_nothing(self, text, width, measure):
        fitted = fit_text(text, measure, width)
        assert fit_text(fitted, measure, width) == fitted

    def test_widening_restores_full_text(self):
        text = "docs/guide/install.md"
        assert fit_text(text, char_width, 10) != text
        assert fit_text(text, char_width, 100) == text

    def test_invalid_step_rejected(self):
        with pytest.raises(ValueError):
            fit_text("abc", char_width, 10, step=0)
