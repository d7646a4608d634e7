"""
Tests for level validation checks.
"""

import logging

import pytest

from stitchgen.errors import ValidationError
from stitchgen.layout import Chunk, Level
from stitchgen.validation import Severity, ValidationIssue, ValidationResult, validate_level

from conftest import make_cross_template


@pytest.fixture
def template():
    return make_cross_template()


def test_clean_level_passes(generator):
    """A freshly generated level only reports its open contexts"""
    result = validate_level(generator.generate().level)
    assert result.passed
    assert result.codes() == ["LEVEL-006"]
    assert result.infos[0].severity == Severity.INFO


def test_overlap_detected(template):
    """Overlapping chunks are a FAIL"""
    level = Level()
    level.add_chunk(Chunk(template, (0, 0)))
    level.add_chunk(Chunk(template, (5, 5)))
    result = validate_level(level)
    assert result.failed
    assert "LEVEL-001" in result.codes()
    assert "overlap by 25" in result.errors[0].message


def test_out_of_bounds_detected(template):
    """Chunks outside the level bounds are a FAIL"""
    level = Level(2, bounds=(15, 15))
    level.add_chunk(Chunk(template, (10, 0)))
    assert "LEVEL-002" in validate_level(level).codes()


def test_dangling_partner_detected(template):
    """A context aligned to a chunk outside the level is a FAIL"""
    level = Level()
    inside = Chunk(template, (0, 0))
    outside = Chunk(template, (10, 0))
    level.add_chunk(inside)
    inside.get_context(1).target = outside.get_context(3)
    outside.get_context(3).target = inside.get_context(1)
    assert "LEVEL-003" in validate_level(level).codes()


def test_asymmetric_alignment_detected(template):
    """A one-sided alignment is a FAIL"""
    level = Level()
    left = Chunk(template, (0, 0))
    right = Chunk(template, (10, 0))
    level.add_chunk(left)
    level.add_chunk(right)
    left.get_context(1).target = right.get_context(3)
    assert "LEVEL-004" in validate_level(level).codes()


def test_misaligned_pair_warns_once(template):
    """Aligned contexts that do not meet are reported once as a WARN"""
    level = Level()
    left = Chunk(template, (0, 0))
    far = Chunk(template, (30, 0))
    level.add_chunk(left)
    level.add_chunk(far)
    level.align(left.get_context(1), far.get_context(3))
    result = validate_level(level)
    assert result.passed
    assert result.codes().count("LEVEL-005") == 1
    assert result.warnings[0].location == str(left)


def test_raise_for_failures(template):
    """raise_for_failures raises ValidationError carrying the result"""
    level = Level()
    level.add_chunk(Chunk(template, (0, 0)))
    level.add_chunk(Chunk(template, (1, 1)))
    result = validate_level(level)
    with pytest.raises(ValidationError) as info:
        result.raise_for_failures()
    assert info.value.result is result
    assert ValidationResult().raise_for_failures().passed


def test_issue_format():
    """Issues render as [SEVERITY] CODE location=... :: message :: fix=..."""
    issue = ValidationIssue(Severity.WARN, "LEVEL-005", "apart", remediation="check", location="(0, 0)")
    assert issue.format() == "[WARN] LEVEL-005 location=(0, 0) :: apart :: fix=check"
    assert str(ValidationIssue(Severity.INFO, "X", "m")) == "[INFO] X location=- :: m :: fix=N/A"


def test_report_and_dict(template):
    """Reports and dicts summarize issues by severity"""
    level = Level()
    level.add_chunk(Chunk(template, (0, 0)))
    level.add_chunk(Chunk(template, (5, 0)))
    result = validate_level(level)
    report = result.report()
    assert report.startswith("Validation FAILED")
    data = result.to_dict()
    assert data['passed'] is False
    assert data['fail_count'] == 1
    assert data['info_count'] == 1
    assert ValidationResult().report() == "Validation passed: No issues found"


def test_log_uses_severity_levels(template, caplog):
    """FAIL issues are logged as errors"""
    level = Level()
    level.add_chunk(Chunk(template, (0, 0)))
    level.add_chunk(Chunk(template, (5, 0)))
    logger = logging.getLogger("stitchgen.test")
    with caplog.at_level(logging.DEBUG, logger="stitchgen.test"):
        validate_level(level).log(logger)
    levels = {r.levelno for r in caplog.records}
    assert logging.ERROR in levels
    assert logging.DEBUG in levels
