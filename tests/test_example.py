"""End-to-end navigation build over the bundled example site."""

import json
from pathlib import Path

from docnav import __version__
from docnav.assemble import NavEntry, assemble_site
from docnav.config import load_config
from docnav.sidebar import Group, Leaf

FIXTURES = Path(__file__).parent / "fixtures"


def test_example_site():
    navigation = assemble_site(load_config(FIXTURES / "docnav.yml"))

    assert navigation.locales == ["en", "zh"]
    # zh/ is a locale of its own, .vitepress is hidden, assets has no pages
    assert navigation.sidebar["en"] == (
        Leaf(title="Intro", url="/intro"),
        Group(
            title="Guide",
            url="/guide/",
            collapsed=True,
            children=(Leaf(title="Setup", url="/guide/setup"),),
        ),
    )
    assert navigation.sidebar["zh"] == (
        Leaf(title="简介", url="/zh/intro"),
        Group(
            title="指南",
            url="/zh/guide/",
            collapsed=True,
            children=(Leaf(title="Setup", url="/zh/guide/setup"),),
        ),
    )
    assert navigation.top_nav["en"] == (
        NavEntry(label="Guide", url="/guide/"),
        NavEntry(label="GitHub", url="https://github.com/example/docs"),
    )
    assert navigation.top_nav["zh"] == (NavEntry(label="指南", url="/zh/guide/"),)
    assert navigation.all_warnings() == []


def test_example_site_json_is_stable():
    options = load_config(FIXTURES / "docnav.yml")

    first = assemble_site(options).to_json()
    second = assemble_site(options).to_json()

    assert first == second
    data = json.loads(first)
    assert [entry["locale"] for entry in data["locales"]] == ["en", "zh"]
    assert list(data["locales"][1]) == ["locale", "topNav", "sidebar", "warnings"]
    assert "指南" in first


def test_version() -> None:
    """Test that version is defined and follows semver format."""
    assert __version__.count(".") == 2
