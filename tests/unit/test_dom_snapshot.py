"""Unit tests for DOM snapshot parsing and query suggestions."""

import pytest

from splurge_enzyme_to_rtl.transformers.dom_snapshot import DomSnapshot, element_role

HTML = (
    '<button class="primary" data-testid="save">Save</button>'
    "<h2>Title</h2>"
    '<span class="note">Hello   there</span>'
    '<input type="checkbox" id="agree"><br>'
    '<a href="/home" class="nav">Home</a>'
)

NESTED_HTML = (
    '<p class="item">Loose</p>'
    '<ul class="list">'
    '<li class="item">First</li>'
    '<li><span class="item" data-testid="deep">Deep</span></li>'
    "</ul>"
)


@pytest.fixture
def snapshot():
    return DomSnapshot(HTML)


def test_element_count(snapshot):
    assert len(snapshot) == 6


def test_void_elements_do_not_swallow_text(snapshot):
    checkbox = snapshot.select("#agree")[0]

    assert checkbox.get_text() == ""
    assert element_role(checkbox) == "checkbox"


@pytest.mark.parametrize(
    "selector, query",
    [
        (".primary", "screen.getByTestId('save')"),
        ("button.primary", "screen.getByTestId('save')"),
        ("h2", "screen.getByRole('heading')"),
        (".note", "screen.getByText('Hello there')"),
        ("a.nav", "screen.getByRole('link')"),
        ('[type="checkbox"]', "screen.getByRole('checkbox')"),
    ],
)
def test_suggest_query(snapshot, selector, query):
    assert snapshot.suggest_query(selector, "data-testid") == query


def test_custom_test_id_attribute(snapshot):
    assert snapshot.suggest_query(".primary", "data-qa") == "screen.getByRole('button')"


@pytest.mark.parametrize("selector", ["#missing", "", "span.other", "div .nav", "button[", "Foo > >"])
def test_no_suggestion(snapshot, selector):
    assert snapshot.suggest_query(selector, "data-testid") is None


class TestCombinators:
    def test_descendant_selector_is_scoped_to_its_ancestor(self):
        snapshot = DomSnapshot(NESTED_HTML)

        assert [element.get_text() for element in snapshot.select(".list .item")] == ["First", "Deep"]
        assert snapshot.suggest_query(".list .item", "data-testid") == "screen.getByRole('listitem')"

    def test_child_combinator_skips_deeper_elements(self):
        snapshot = DomSnapshot(NESTED_HTML)

        assert [element.get_text() for element in snapshot.select("ul > .item")] == ["First"]
        assert snapshot.suggest_query("li > .item", "data-testid") == "screen.getByTestId('deep')"


def test_element_without_test_id_role_or_text():
    assert DomSnapshot('<div class="empty"></div>').suggest_query(".empty", "data-testid") is None


def test_roles():
    fragment = DomSnapshot('<a>x</a><div role="alert">y</div><input><li>z</li>')

    assert [element_role(element) for element in fragment.soup.find_all(True)] == [
        None,
        "alert",
        "textbox",
        "listitem",
    ]


def test_from_file(tmp_path):
    snapshot_file = tmp_path / "snapshot.html"
    snapshot_file.write_text(HTML, encoding="utf-8")

    assert len(DomSnapshot.from_file(snapshot_file)) == 6
