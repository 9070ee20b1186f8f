from __future__ import annotations

import io
from pathlib import Path
import tempfile
import unittest

from PIL import Image

from typekit_ui.cli import main


class CliTests(unittest.TestCase):
    def test_fragments_escapes_joiners_on_android(self) -> None:
        out = io.StringIO()
        code = main(["fragments", "ab", "--platform", "android", "--letter-spacing", "1", "--type", "danger"], out=out)
        self.assertEqual(code, 0)
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 1)
        self.assertTrue(lines[0].startswith('"a\\u200ab\\u200a\\xa0\\u200a"'))
        self.assertIn("'letterSpacing': 1.0", lines[0])

    def test_fragments_fast_path_on_ios(self) -> None:
        out = io.StringIO()
        main(["fragments", "a b", "--platform", "ios", "--letter-spacing", "1", "--color", "red"], out=out)
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 1)
        self.assertTrue(lines[0].startswith('"a b"'))
        self.assertIn("'color': 'red'", lines[0])

    def test_preview_writes_png(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        target = Path(tmp.name) / "preview.png"
        out = io.StringIO()
        code = main(["preview", "Hello", "--out", str(target), "--width", "120", "--height", "40"], out=out)
        self.assertEqual(code, 0)
        with Image.open(target) as image:
            self.assertEqual(image.size, (120, 40))
            self.assertEqual(image.mode, "RGBA")
        self.assertIn("1 text nodes", out.getvalue())


if __name__ == "__main__":
    unittest.main()
