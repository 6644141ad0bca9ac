"""A file without enzyme passes through unchanged with two warnings."""

import textwrap

from splurge_enzyme_to_rtl.diagnostics import DiagnosticCode, DiagnosticLevel
from splurge_enzyme_to_rtl.main import convert_source
from splurge_enzyme_to_rtl.transformers import EnzymeToRtlCodemod

PLAIN_TEST = textwrap.dedent(
    """\
    import { sum } from './math';

    describe('sum', () => {
      it('adds', () => {
        expect(sum(1, 2)).toBe(3);
      });
    });
    """
)


def test_output_is_identical_and_warns_twice():
    outcome = EnzymeToRtlCodemod().transform(PLAIN_TEST)

    assert outcome.code == PLAIN_TEST
    assert [d.code for d in outcome.diagnostics] == [
        DiagnosticCode.MISSING_LEGACY_IMPORT,
        DiagnosticCode.MISSING_RENDER_CALL,
    ]
    assert all(d.level is DiagnosticLevel.WARNING for d in outcome.diagnostics)
    assert outcome.render_function is None
    assert outcome.wrapper_names == []


def test_pipeline_reports_the_same_warnings():
    result = convert_source(PLAIN_TEST, "/project/src/math.test.js")

    assert result.is_warning()
    assert len(result.warnings) == 2
    # Relative specifiers are still made absolute for the file's location.
    assert result.data == PLAIN_TEST.replace("'./math'", "'/project/src/math'")
