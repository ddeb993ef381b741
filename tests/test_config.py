import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from prdiff.config import RenderConfig, load_render_config


class TestRenderConfig(unittest.TestCase):
    def test_defaults(self):
        config = RenderConfig()
        self.assertIsNone(config.language)
        self.assertTrue(config.block_highlight)
        self.assertEqual(config.style, "default")

    def test_load_from_toml(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "render.toml"
            path.write_text('language = "go"\nblock_highlight = false\nstyle = "monokai"\n', encoding="utf-8")
            config = load_render_config(path)
        self.assertEqual(config, RenderConfig(language="go", block_highlight=False, style="monokai"))

    def test_empty_file_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "render.toml"
            path.write_text("", encoding="utf-8")
            self.assertEqual(load_render_config(path), RenderConfig())

    def test_invalid_files_raise_runtime_error(self):
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing.toml"
            with self.assertRaises(RuntimeError):
                load_render_config(missing)
            broken = Path(tmp) / "broken.toml"
            broken.write_text("language = ", encoding="utf-8")
            with self.assertRaises(RuntimeError):
                load_render_config(broken)
            unknown_style = Path(tmp) / "style.toml"
            unknown_style.write_text('style = "no-such-style"\n', encoding="utf-8")
            with self.assertRaises(RuntimeError):
                load_render_config(unknown_style)

    def test_non_boolean_flags_raise_runtime_error(self):
        with tempfile.TemporaryDirectory() as tmp:
            for body in ('block_highlight = "false"\n', "guess_language_from_path = 0\n"):
                path = Path(tmp) / "render.toml"
                path.write_text(body, encoding="utf-8")
                with self.assertRaises(RuntimeError):
                    load_render_config(path)

    def test_language_hint_for(self):
        self.assertEqual(RenderConfig(language="rust").language_hint_for("a.py"), "rust")
        self.assertEqual(RenderConfig().language_hint_for("a.py"), "python")
        self.assertIsNone(RenderConfig(guess_language_from_path=False).language_hint_for("a.py"))


if __name__ == "__main__":
    unittest.main()
