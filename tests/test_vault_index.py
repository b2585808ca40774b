import pytest

from conftest import write_note
from vault_navigator.core.vault_index import VaultIndex, normalize_tag, parse_note

NOTE_TEXT = """---
tags: [alpha]
---
# Title
See [[Target|alias]] and [md](Other%20Note.md) or [ext](https://example.com).
![[Image.png]]
Inline `[[InCode]]` is ignored. #project and issue #123
## Sub
```text
[[Fenced]] #notatag
```
"""


class TestParseNote:
    """Metadata extraction from raw note text."""

    def test_links_and_embeds_in_order(self):
        cache = parse_note(NOTE_TEXT)
        assert cache.links == ["Target|alias", "Other%20Note.md"]
        assert cache.embeds == ["Image.png"]

    def test_tags_include_frontmatter_and_inline(self):
        cache = parse_note(NOTE_TEXT)
        assert cache.tags == ["#alpha", "#project"]

    def test_headings(self):
        cache = parse_note(NOTE_TEXT)
        assert cache.headings == [
            {"level": 1, "heading": "Title"},
            {"level": 2, "heading": "Sub"},
        ]

    def test_frontmatter(self):
        assert parse_note(NOTE_TEXT).frontmatter == {"tags": ["alpha"]}

    def test_string_frontmatter_tags(self):
        cache = parse_note("---\ntags: one, two\n---\nbody")
        assert cache.tags == ["#one", "#two"]

    def test_heading_fragment_is_not_a_tag(self):
        cache = parse_note("Jump to [[#Section]] or [[Note#Part]]")
        assert cache.tags == []
        assert cache.links == ["#Section", "Note#Part"]


def test_normalize_tag():
    assert normalize_tag("project") == "#project"
    assert normalize_tag("#project") == "#project"
    assert normalize_tag(" ##nested/tag ") == "#nested/tag"


@pytest.fixture
def index(vault):
    write_note(vault.path, "Index.md", "[[Roadmap]] and [[Missing]] and [[#Heading]]")
    write_note(vault.path, "Projects/Roadmap.md", "# Roadmap\n[[Notes]]")
    write_note(vault.path, "Projects/Notes.md", "Back to [[Roadmap]]")
    write_note(vault.path, "Archive/Notes.md", "")
    write_note(vault.path, "Deep/Nested/Roadmap.md", "")
    write_note(vault.path, ".obsidian/hidden.md", "[[Roadmap]]")
    return VaultIndex(vault)


class TestVaultIndex:
    """Link resolution and backlinks over a real vault directory."""

    def test_markdown_files(self, index):
        assert index.markdown_files == [
            "Archive/Notes.md",
            "Deep/Nested/Roadmap.md",
            "Index.md",
            "Projects/Notes.md",
            "Projects/Roadmap.md",
        ]

    def test_resolve_prefers_same_folder(self, index):
        assert index.resolve_link("Notes", "Projects/Roadmap.md") == "Projects/Notes.md"
        assert index.resolve_link("Notes", "Archive/Other.md") == "Archive/Notes.md"

    def test_resolve_by_basename_prefers_shallowest_then_alphabetical(self, index):
        assert index.resolve_link("Roadmap", "Index.md") == "Projects/Roadmap.md"
        assert index.resolve_link("Notes", "Index.md") == "Archive/Notes.md"

    def test_resolve_strips_alias_subpath_and_extension(self, index):
        assert index.resolve_link("Projects/Roadmap#Goals", "Index.md") == "Projects/Roadmap.md"
        assert index.resolve_link("Projects/Roadmap.md|the plan", "Index.md") == "Projects/Roadmap.md"
        assert index.resolve_link("roadmap", "Index.md") == "Projects/Roadmap.md"

    def test_resolve_partial_path_by_suffix(self, index):
        assert index.resolve_link("Nested/Roadmap", "Index.md") == "Deep/Nested/Roadmap.md"

    def test_resolve_relative_markdown_path(self, index):
        assert index.resolve_link("../Projects/Notes.md", "Archive/Notes.md") == "Projects/Notes.md"
        assert index.resolve_link("Projects/My%20Plan.md", "Index.md") is None

    def test_unresolvable_links(self, index):
        assert index.resolve_link("Missing", "Index.md") is None
        assert index.resolve_link("#Heading", "Index.md") is None

    def test_unknown_path_has_no_cache(self, index):
        assert index.get_file_cache("Nope.md") is None
        assert index.get_file_cache(".obsidian/hidden.md") is None

    def test_resolved_links_and_backlinks(self, index):
        assert index.resolved_links["Index.md"] == {"Projects/Roadmap.md"}
        assert index.backlink_sources("Projects/Roadmap.md") == ["Index.md", "Projects/Notes.md"]
        assert index.backlink_sources("Archive/Notes.md") == []
