import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from vault_navigator.core.content import (
    extract_frontmatter,
    format_size,
    note_stats,
    parse_frontmatter,
    read_note_text,
    remove_frontmatter,
)
from vault_navigator.data_models import VaultMetadata
from vault_navigator.errors import NoteNotFoundError, PathIsFolderError


class FrontmatterHelperTests(unittest.TestCase):
    def test_extract_frontmatter_returns_yaml_block(self) -> None:
        text = "---\ntitle: Roadmap\ntags: [a, b]\n---\n# Body\n"
        self.assertEqual(extract_frontmatter(text), "title: Roadmap\ntags: [a, b]")

    def test_extract_frontmatter_without_block(self) -> None:
        self.assertIsNone(extract_frontmatter("# Just a heading\n"))
        self.assertIsNone(extract_frontmatter("text\n---\nnot: frontmatter\n---\n"))

    def test_remove_frontmatter_is_idempotent(self) -> None:
        text = "---\ntitle: Roadmap\n---\nBody line\n"
        stripped = remove_frontmatter(text)
        self.assertEqual(stripped, "Body line\n")
        self.assertEqual(remove_frontmatter(stripped), stripped)

    def test_remove_frontmatter_leaves_plain_text_alone(self) -> None:
        self.assertEqual(remove_frontmatter("plain\n"), "plain\n")

    def test_parse_frontmatter_converts_dates_to_strings(self) -> None:
        metadata = parse_frontmatter("---\ncreated: 2025-01-15\ntags:\n  - project\n---\nBody")
        self.assertEqual(metadata, {"created": "2025-01-15", "tags": ["project"]})

    def test_parse_frontmatter_tolerates_invalid_yaml(self) -> None:
        self.assertEqual(parse_frontmatter("---\ntitle: [unclosed\n---\nBody"), {})
        self.assertEqual(parse_frontmatter("no frontmatter"), {})


class FormatSizeTests(unittest.TestCase):
    def test_thresholds(self) -> None:
        self.assertEqual(format_size(0), "0 B")
        self.assertEqual(format_size(1023), "1023 B")
        self.assertEqual(format_size(1536), "1.5 KB")
        self.assertEqual(format_size(2 * 1024 * 1024), "2.0 MB")


class ReadNoteTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = TemporaryDirectory()
        self.vault_path = Path(self.tmpdir.name).resolve()
        self.vault = VaultMetadata(
            name="test",
            path=self.vault_path,
            description="test vault",
            exists=True,
        )
        (self.vault_path / "Projects").mkdir()
        (self.vault_path / "Projects" / "Roadmap.md").write_text("# Roadmap\n", encoding="utf-8")

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def test_reads_existing_note(self) -> None:
        self.assertEqual(read_note_text(self.vault, "Projects/Roadmap.md"), "# Roadmap\n")

    def test_missing_note_carries_suggestions(self) -> None:
        with self.assertRaises(NoteNotFoundError) as ctx:
            read_note_text(self.vault, "Projects/Roadmap")
        self.assertEqual(ctx.exception.code, "NOTE_NOT_FOUND")
        self.assertIn("Projects/Roadmap.md", ctx.exception.suggestions)

    def test_folder_is_rejected(self) -> None:
        with self.assertRaises(PathIsFolderError):
            read_note_text(self.vault, "Projects")

    def test_note_stats(self) -> None:
        stats = note_stats(self.vault_path / "Projects" / "Roadmap.md")
        self.assertEqual(stats["size"], len("# Roadmap\n"))
        self.assertTrue(stats["modified"].endswith("+00:00"))
        self.assertIn("created", stats)


if __name__ == "__main__":
    unittest.main()
