import os
import unittest
from unittest.mock import patch

from vimgram.utils import Ansi


class TestAnsi(unittest.TestCase):
    def test_style_wraps_in_markup(self):
        with patch.dict(os.environ):
            os.environ.pop("NO_COLOR", None)
            self.assertEqual(Ansi.style("ai", Ansi.FG_GREEN, Ansi.BOLD), "[green bold]ai[/]")

    def test_no_color_returns_plain_text(self):
        with patch.dict(os.environ, {"NO_COLOR": "1"}):
            self.assertEqual(Ansi.style("error", Ansi.FG_RED, Ansi.BOLD), "error")

    def test_only_used_styles_are_defined(self):
        styles = {name for name in vars(Ansi) if name.isupper()}
        self.assertEqual(
            styles, {"BOLD", "FG_GREEN", "FG_CYAN", "FG_MAGENTA", "FG_YELLOW", "FG_RED"}
        )
