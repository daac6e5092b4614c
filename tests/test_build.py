from pathlib import Path

import pytest

from lucydocs.build import BuildError, build_site, load_data
from lucydocs.config import SiteConfig
from lucydocs.errors import InvalidInputError
from lucydocs.passthrough import PassthroughCopier


def create_project(tmp_path: Path) -> Path:
    project = tmp_path
    (project / "_includes").mkdir()
    (project / "_data").mkdir()
    (project / "docs").mkdir()
    (project / "styles").mkdir()
    (project / "images" / "icons").mkdir(parents=True)

    (project / "_includes" / "base.html").write_text(
        '<link href="{{ page.url | baseUrl }}styles/main.css">'
        "<h1>{{ title }}</h1>{{ content }}",
        encoding="utf-8",
    )
    (project / "_data" / "site.yaml").write_text("name: Lucy\n", encoding="utf-8")
    (project / "_data" / "nav.yaml").write_text(
        "- Introduction\n- Machines:\n    - States\n    - Events\n", encoding="utf-8"
    )
    (project / "index.md").write_text(
        "---\nlayout: base\n---\n# {{ name }}\n\n"
        "{% for s in nav | cleanupLanguageSections %}"
        "{% if s.kind == 'group' %}- {{ s.title }}\n{% else %}- {{ s }}\n{% endif %}"
        "{% endfor %}",
        encoding="utf-8",
    )
    (project / "docs" / "states.md").write_text(
        "---\nlayout: base\ntitle: States\n---\n@[toc]\n\n## Initial\n\n"
        "```lucy\ninitial state idle {}\n```\n",
        encoding="utf-8",
    )
    (project / "styles" / "main.css").write_text("body{}", encoding="utf-8")
    (project / "images" / "logo.svg").write_text("<svg/>", encoding="utf-8")
    (project / "images" / "icons" / "notes.md").write_text("# x", encoding="utf-8")
    return project


def test_build_site_writes_pages_and_copies(tmp_path):
    project = create_project(tmp_path)
    result = build_site(project)

    out = project / "_site"
    assert result.output_dir == out
    assert sorted(p.url for p in result.pages) == ["/", "/docs/states/"]
    assert result.data["name"] == "Lucy"
    assert result.data["nav"][1] == {"Machines": ["States", "Events"]}

    index = (out / "index.html").read_text(encoding="utf-8")
    assert '<link href="./styles/main.css">' in index
    assert "<li>Introduction</li>" in index
    assert "<li>Machines</li>" in index
    assert 'id="lucy"' in index

    states = (out / "docs" / "states" / "index.html").read_text(encoding="utf-8")
    assert '<link href="../../styles/main.css">' in states
    assert "<h1>States</h1>" in states
    assert '<ul class="toc"><li><a href="#initial">Initial</a></li></ul>' in states
    assert '<div class="highlight">' in states

    assert (out / "styles" / "main.css").read_text(encoding="utf-8") == "body{}"
    assert (out / "images" / "logo.svg").exists()
    assert (out / "images" / "icons" / "notes.md").exists()
    assert not (out / "images" / "icons" / "notes").exists()
    assert result.copied == [out / "styles", out / "images"]


def test_build_cleans_output_and_honors_override(tmp_path):
    project = create_project(tmp_path)
    out = project / "_site"
    out.mkdir()
    (out / "stale.html").write_text("old", encoding="utf-8")
    build_site(project)
    assert not (out / "stale.html").exists()

    custom = tmp_path / "public"
    result = build_site(project, output_dir_override=custom)
    assert result.output_dir == custom
    assert (custom / "index.html").exists()


def test_build_without_clean_keeps_files(tmp_path):
    project = create_project(tmp_path)
    out = project / "_site"
    out.mkdir()
    (out / "keep.txt").write_text("keep", encoding="utf-8")
    build_site(project, clean_output=False)
    assert (out / "keep.txt").exists()


def test_build_uses_config_file(tmp_path):
    project = create_project(tmp_path)
    (project / "lucydocs.yaml").write_text(
        "output_dir: dist\nprod_site: https://example.com/lucy/\n", encoding="utf-8"
    )
    (project / "docs" / "rel.md").write_text(
        "---\npermalink: guide\n---\n{{ page.url | baseUrl }}", encoding="utf-8"
    )
    build_site(project)
    assert (project / "dist" / "index.html").exists()
    assert (project / "dist" / "guide" / "index.html").read_text(
        encoding="utf-8"
    ) == "<p>../</p>\n"


def test_build_error_wraps_filter_errors(tmp_path):
    project = create_project(tmp_path)
    bad = project / "bad.md"
    bad.write_text(
        "{{ [{'a': [1], 'b': [2]}] | cleanupLanguageSections }}", encoding="utf-8"
    )
    with pytest.raises(BuildError) as excinfo:
        build_site(project)
    assert excinfo.value.source_path == bad
    assert "exactly one title" in excinfo.value.message
    assert isinstance(excinfo.value.original_error, InvalidInputError)


def test_build_error_on_template_syntax(tmp_path):
    project = create_project(tmp_path)
    (project / "broken.md").write_text("{% if %}", encoding="utf-8")
    with pytest.raises(BuildError, match="Template syntax error on line 1"):
        build_site(project)


def test_build_error_on_undefined_filter(tmp_path):
    project = create_project(tmp_path)
    (project / "odd.md").write_text("{{ 1 | nope }}", encoding="utf-8")
    with pytest.raises(BuildError):
        build_site(project)


def test_build_missing_input_dir(tmp_path):
    config = SiteConfig(tmp_path, {"input_dir": "missing"})
    with pytest.raises(FileNotFoundError):
        build_site(tmp_path, config=config)


def test_load_data(tmp_path):
    data_dir = tmp_path / "_data"
    assert load_data(data_dir) == {}
    data_dir.mkdir()
    (data_dir / "site.yaml").write_text("title: Lucy\n", encoding="utf-8")
    (data_dir / "links.yml").write_text("- a\n- b\n", encoding="utf-8")
    (data_dir / "empty.yaml").write_text("", encoding="utf-8")
    assert load_data(data_dir) == {"title": "Lucy", "links": ["a", "b"]}


def test_passthrough_copier(tmp_path):
    project = tmp_path / "project"
    (project / "styles").mkdir(parents=True)
    (project / "styles" / "a.css").write_text("a", encoding="utf-8")
    (project / "robots.txt").write_text("ok", encoding="utf-8")
    out = tmp_path / "out"
    (out / "styles").mkdir(parents=True)
    (out / "styles" / "existing.css").write_text("e", encoding="utf-8")

    copied = PassthroughCopier(project, out).run(["styles", "robots.txt", "missing"])
    assert copied == [out / "styles", out / "robots.txt"]
    assert (out / "styles" / "a.css").read_text(encoding="utf-8") == "a"
    assert (out / "styles" / "existing.css").exists()
    assert (out / "robots.txt").read_text(encoding="utf-8") == "ok"
