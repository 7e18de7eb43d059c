"""Tests for sidebar tree building."""

from dataclasses import replace

from docnav.scanner import DocumentDescriptor
from docnav.sidebar import Group, Leaf, SidebarBuilder


def doc(path, title=None, order=None, **frontmatter):
    name = path.rsplit("/", 1)[-1]
    return DocumentDescriptor(
        logical_path=path,
        frontmatter=frontmatter,
        title=title or name.capitalize(),
        order=order,
        is_index=name == "index",
    )


def test_orders_explicit_first_then_discovery(resolver, options, en):
    descriptors = (
        doc("a", order=3),
        doc("b", order=1),
        doc("c"),
        doc("d", order=2),
    )

    nodes = SidebarBuilder(resolver, options).build(en, descriptors)

    assert [node.title for node in nodes] == ["B", "D", "A", "C"]


def test_ties_and_unordered_keep_discovery_order(resolver, options, en):
    descriptors = (
        doc("u1"),
        doc("t1", order=5),
        doc("u2"),
        doc("t2", order=5),
        doc("f", order=0.5),
    )

    nodes = SidebarBuilder(resolver, options).build(en, descriptors)

    assert [node.title for node in nodes] == ["F", "T1", "T2", "U1", "U2"]


def test_malformed_order_counts_as_unordered(resolver, options, en):
    descriptors = (doc("a", order="first"), doc("b", order=1), doc("c", order=True))

    nodes = SidebarBuilder(resolver, options).build(en, descriptors)

    assert [node.title for node in nodes] == ["B", "A", "C"]


def test_frontmatter_order_can_be_switched_off(resolver, options, en):
    descriptors = (doc("a", order=3), doc("b", order=1))
    options = replace(options, sort_menus_by_frontmatter_order=False)

    nodes = SidebarBuilder(resolver, options).build(en, descriptors)

    assert [node.title for node in nodes] == ["A", "B"]


def test_index_document_becomes_group_link(resolver, options, en):
    descriptors = (
        doc("intro", title="Intro"),
        doc("guide/index", title="User Guide"),
        doc("guide/setup", title="Setup"),
    )

    nodes = SidebarBuilder(resolver, options).build(en, descriptors)

    assert nodes == (
        Leaf(title="Intro", url="/intro"),
        Group(
            title="User Guide",
            url="/guide/",
            collapsed=False,
            children=(Leaf(title="Setup", url="/guide/setup"),),
        ),
    )


def test_group_without_index(resolver, options, zh):
    descriptors = (doc("reference/api-client", title="Client"),)

    (group,) = SidebarBuilder(resolver, options).build(zh, descriptors)

    assert group == Group(
        title="Reference",
        url=None,
        collapsed=False,
        children=(Leaf(title="Client", url="/zh/reference/api-client"),),
    )


def test_root_index_stays_a_leaf(resolver, options, zh):
    nodes = SidebarBuilder(resolver, options).build(zh, (doc("index", title="Home"),))

    assert nodes == (Leaf(title="Home", url="/zh/"),)


def test_nested_groups_and_group_ordering(resolver, options, en):
    descriptors = (
        doc("overview"),
        doc("advanced/index", title="Advanced", order=2),
        doc("advanced/tuning"),
        doc("advanced/internals/storage"),
        doc("basics/index", title="Basics", order=1),
        doc("basics/install"),
    )

    nodes = SidebarBuilder(resolver, options).build(en, descriptors)

    assert [node.title for node in nodes] == ["Basics", "Advanced", "Overview"]
    advanced = nodes[1]
    assert [child.title for child in advanced.children] == ["Tuning", "Internals"]
    internals = advanced.children[1]
    assert internals == Group(
        title="Internals",
        url=None,
        collapsed=False,
        children=(Leaf(title="Storage", url="/advanced/internals/storage"),),
    )


def test_collapsed_default_and_override(resolver, options, en):
    descriptors = (
        doc("a/index", title="A"),
        doc("a/page"),
        doc("b/index", title="B", collapsed=False),
        doc("b/page"),
        doc("c/page"),
    )
    options = replace(options, collapsed=True)

    nodes = SidebarBuilder(resolver, options).build(en, descriptors)

    assert [node.collapsed for node in nodes] == [True, False, True]


def test_group_with_only_index(resolver, options, en):
    (group,) = SidebarBuilder(resolver, options).build(
        en, (doc("faq/index", title="FAQ"),)
    )

    assert group == Group(title="FAQ", url="/faq/", collapsed=False, children=())


def test_to_dict(resolver, options, en):
    descriptors = (doc("guide/index", title="Guide"), doc("guide/setup"))

    (group,) = SidebarBuilder(resolver, options).build(en, descriptors)

    assert group.to_dict() == {
        "title": "Guide",
        "url": "/guide/",
        "collapsed": False,
        "children": [{"title": "Setup", "url": "/guide/setup"}],
    }
