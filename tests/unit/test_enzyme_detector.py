import pytest

from splurge_enzyme_to_rtl.detectors import EnzymeFileDetector
from splurge_enzyme_to_rtl.exceptions import ParseError


@pytest.fixture
def detector():
    return EnzymeFileDetector()


def test_import_is_enough(detector):
    assert detector.is_enzyme_source("import { shallow } from 'enzyme';\n")
    assert detector.has_enzyme_import
    assert not detector.has_render_call


def test_bare_render_call_is_enough(detector):
    assert detector.is_enzyme_source("const w = mount(<A />);\n")
    assert detector.has_render_call


@pytest.mark.parametrize(
    "source",
    [
        "// mount(<A />) happens elsewhere\n",
        "const note = \"shallow(<A />)\";\n",
        "import { render } from '@testing-library/react';\nrender(<A />);\n",
        "import enzymeLike from 'enzyme-adapter-react-16';\n",
        "wrapper.mount();\n",
    ],
)
def test_mentions_are_not_matches(detector, source):
    assert not detector.is_enzyme_source(source)


def test_files_over_size_limit_are_skipped(tmp_path):
    path = tmp_path / "big.test.js"
    path.write_text("import { mount } from 'enzyme';\n" + "// x\n" * 300_000, encoding="utf-8")

    assert not EnzymeFileDetector(max_file_size_mb=1).is_enzyme_file(path)
    assert EnzymeFileDetector(max_file_size_mb=2).is_enzyme_file(path)


def test_unparseable_file_raises(tmp_path):
    path = tmp_path / "broken.test.js"
    path.write_text("it(\n", encoding="utf-8")

    with pytest.raises(ParseError):
        EnzymeFileDetector().is_enzyme_file(path)
