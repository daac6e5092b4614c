from pathlib import Path

from lucydocs.content import (
    ContentProcessor,
    FileContentLoader,
    UrlDeriver,
    extract_frontmatter,
    titleize,
)


def create_site(tmp_path: Path) -> Path:
    site = tmp_path
    (site / "_includes").mkdir()
    (site / "_data").mkdir()
    (site / "docs").mkdir()
    (site / "styles").mkdir()
    (site / "_site").mkdir()
    (site / ".git").mkdir()

    (site / "index.md").write_text("# Home\n\nWelcome.", encoding="utf-8")
    (site / "docs" / "index.md").write_text("Docs landing", encoding="utf-8")
    (site / "docs" / "states.md").write_text(
        "---\ntitle: State Reference\nlayout: base\n---\n# States\n",
        encoding="utf-8",
    )
    (site / "docs" / "events.md").write_text(
        "---\npermalink: /reference/events/\n---\nEvents", encoding="utf-8"
    )
    (site / "_includes" / "partial.md").write_text("# Partial", encoding="utf-8")
    (site / "_site" / "old.md").write_text("# Old", encoding="utf-8")
    (site / "styles" / "notes.md").write_text("# Notes", encoding="utf-8")
    (site / ".git" / "HEAD.md").write_text("# Git", encoding="utf-8")
    (site / "notes.txt").write_text("ignore", encoding="utf-8")
    return site


def test_loader_finds_only_registered_formats(tmp_path):
    site = create_site(tmp_path)
    loader = FileContentLoader(site, ["md"], [site / "_site", site / "styles"])
    rel = [p.relative_to(site).as_posix() for p in loader.iter_files()]
    assert rel == ["docs/events.md", "docs/index.md", "docs/states.md", "index.md"]


def test_loader_with_other_formats(tmp_path):
    site = create_site(tmp_path)
    loader = FileContentLoader(site, ["txt"])
    assert [p.name for p in loader.iter_files()] == ["notes.txt"]


def test_content_processor_builds_pages(tmp_path):
    site = create_site(tmp_path)
    loader = FileContentLoader(site, ["md"], [site / "_site", site / "styles"])
    pages = {p.url: p for p in ContentProcessor(site, loader).load()}
    assert set(pages) == {"/", "/docs/", "/docs/states/", "/reference/events/"}

    home = pages["/"]
    assert home.title == "Home"
    assert home.layout is None
    assert home.source_type == "md"

    states = pages["/docs/states/"]
    assert states.title == "State Reference"
    assert states.layout == "base"
    assert states.body == "# States\n"
    assert states.frontmatter["title"] == "State Reference"
    assert states.file_slug == "states"

    assert pages["/docs/"].title == "Docs"
    assert pages["/reference/events/"].title == "Events"


def test_url_deriver():
    deriver = UrlDeriver()
    assert deriver.derive(Path("index.md")) == "/"
    assert deriver.derive(Path("a/index.md")) == "/a/"
    assert deriver.derive(Path("a/b.md")) == "/a/b/"
    assert deriver.derive(Path("a/b.md"), {"permalink": "/x/y"}) == "/x/y/"
    assert deriver.derive(Path("a/b.md"), {"permalink": "/"}) == "/"
    assert deriver.derive(Path("a/b.md"), {"permalink": False}) == "/a/b/"


def test_extract_frontmatter():
    data, body = extract_frontmatter("---\ntitle: Hi\n---\nBody")
    assert data == {"title": "Hi"}
    assert body == "Body"

    assert extract_frontmatter("No front matter") == ({}, "No front matter")
    assert extract_frontmatter("---\n- a\n---\nBody")[0] == {}
    assert extract_frontmatter("---\ntitle: [bad\n---\nBody")[0] == {}


def test_titleize():
    assert titleize("getting-started.md") == "Getting Started"
    assert titleize("state_machines.md") == "State Machines"
    assert titleize("---.md") == "Untitled"
