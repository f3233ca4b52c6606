"""Tests for the deterministic finding order."""

import random

from commitlens_core.models import BLOCKER, INFO, MAJOR, MINOR, FileRef, Finding
from commitlens_core.ordering import compare_findings, finding_sort_key

A = FileRef("src/a.py")
B = FileRef("src/b.py")


def make_finding(rule="R1", severity=MAJOR, file=A, line=10, message="msg"):
    return Finding(rule_key=rule, severity=severity, message=message, file=file, line=line)


class TestFindingSortKey:
    def test_most_severe_first(self):
        findings = [make_finding(severity=INFO), make_finding(severity=BLOCKER), make_finding(severity=MINOR)]
        ordered = sorted(findings, key=finding_sort_key)
        assert [f.severity for f in ordered] == [BLOCKER, MINOR, INFO]

    def test_project_level_findings_before_files(self):
        on_file = make_finding(file=A)
        project = make_finding(file=None, line=None)
        assert sorted([on_file, project], key=finding_sort_key) == [project, on_file]

    def test_same_severity_sorted_by_path_then_line(self):
        b1 = make_finding(file=B, line=1)
        a20 = make_finding(file=A, line=20)
        a5 = make_finding(file=A, line=5)
        assert sorted([b1, a20, a5], key=finding_sort_key) == [a5, a20, b1]

    def test_missing_line_comes_first_within_file(self):
        no_line = make_finding(line=None)
        with_line = make_finding(line=1)
        assert sorted([with_line, no_line], key=finding_sort_key) == [no_line, with_line]

    def test_rule_key_breaks_ties(self):
        r2 = make_finding(rule="R2")
        r1 = make_finding(rule="R1")
        assert sorted([r2, r1], key=finding_sort_key) == [r1, r2]

    def test_order_independent_of_input_order(self):
        findings = [
            make_finding(rule=f"R{i % 3}", severity=(MAJOR, MINOR)[i % 2], file=(A, B, None)[i % 3], line=i % 4 or None)
            for i in range(24)
        ]
        expected = sorted(findings, key=finding_sort_key)
        shuffled = list(findings)
        random.Random(7).shuffle(shuffled)
        assert sorted(shuffled, key=finding_sort_key) == expected


class TestCompareFindings:
    def test_equal_findings_compare_zero(self):
        assert compare_findings(make_finding(), make_finding()) == 0

    def test_antisymmetric(self):
        left = make_finding(severity=BLOCKER)
        right = make_finding(severity=MINOR)
        assert compare_findings(left, right) == -1
        assert compare_findings(right, left) == 1

    def test_transitive(self):
        a = make_finding(severity=BLOCKER)
        b = make_finding(severity=MAJOR)
        c = make_finding(severity=INFO)
        assert compare_findings(a, b) < 0
        assert compare_findings(b, c) < 0
        assert compare_findings(a, c) < 0
