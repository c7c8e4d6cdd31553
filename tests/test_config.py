"""
Unit tests for configuration management.
"""

import os
import tempfile
import unittest
from pathlib import Path

from tiddlyroam.config import ConfigManager
from tiddlyroam.exporters import DocumentAssembler


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_defaults_without_file(self):
        config = ConfigManager()

        self.assertEqual(config.repository_root, ".")
        self.assertEqual(config.git_timeout, 10.0)
        self.assertEqual(config.file_extension, "tid")
        self.assertEqual(config.database_filename, "org-roam.db")
        self.assertEqual(config.headline_offset, 0)
        self.assertIsNone(config.log_filename)

    def test_missing_file_falls_back(self):
        """Config manager falls back to defaults when the file is missing."""
        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.file_extension, "tid")

    def test_loading_from_file(self):
        """Loaded values override defaults; unset keys keep them."""
        with open(self.config_path, 'w') as f:
            f.write("""
git:
  repository_root: "/srv/notes"

export:
  file_extension: ".md"
""")

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.repository_root, "/srv/notes")
        self.assertEqual(config.git_timeout, 10.0)
        self.assertEqual(config.file_extension, "md")
        self.assertEqual(DocumentAssembler.from_config(config).output_filename("a.org"), "a.md")

    def test_invalid_yaml_falls_back(self):
        with open(self.config_path, 'w') as f:
            f.write("git: [unclosed")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.repository_root, ".")

    def test_dot_notation_access(self):
        config = ConfigManager()

        self.assertEqual(config.get("export.file_extension"), "tid")
        self.assertEqual(config.get("nonexistent.key", "default"), "default")
        self.assertIsInstance(config.get_section("git"), dict)

    def test_set(self):
        config = ConfigManager()
        config.set("git.timeout", None)
        config.set("extra.nested.value", 3)

        self.assertIsNone(config.git_timeout)
        self.assertEqual(config.get("extra.nested.value"), 3)

    def test_config_reload(self):
        with open(self.config_path, 'w') as f:
            f.write("export:\n  file_extension: 'tid'")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.file_extension, "tid")

        with open(self.config_path, 'w') as f:
            f.write("export:\n  file_extension: 'txt'")

        config.reload()
        self.assertEqual(config.file_extension, "txt")


if __name__ == '__main__':
    unittest.main(verbosity=2)
