"""Tests for a full calculation pass over a document."""

from __future__ import annotations

import logging
import time
from typing import Callable, List

import pytest

from linecalc import EngineConfig, Environment, Err, ErrorKind, Line, Ok, calculate, evaluate_line

Run = Callable[..., List[str]]


class TestBasicLines:
    def test_integer_result_has_no_decimal_point(self, run: Run) -> None:
        assert run("2 + 2") == ["4"]

    def test_fraction_has_two_digits(self, run: Run) -> None:
        assert run("10 / 3") == ["3.33"]

    def test_decimal_sum(self, run: Run) -> None:
        assert run("1.5 + 2.3", "5.0 + 5.0") == ["3.80", "10"]

    def test_unicode_operators(self, run: Run) -> None:
        assert run("5 × 6", "20 ÷ 4", "10 × 2 ÷ 4 + 1", "10 ÷ 4") == ["30", "5", "6", "2.50"]

    def test_exponent(self, run: Run) -> None:
        assert run("2 ^ 3", "2 ^ 64") == ["8", "1.84e+19"]


class TestBlankAndComments:
    @pytest.mark.parametrize("text", ["", "   ", "# This is just a comment", "   # just a comment"])
    def test_no_computation(self, run: Run, text: str) -> None:
        assert run(text) == [""]

    def test_inline_comment(self, run: Run) -> None:
        assert run("10 + 5 # note", "20 * 2 # result should be 40!", "5 + 5 # + 10") == [
            "15",
            "40",
            "10",
        ]

    def test_comment_after_assignment(self, run: Run) -> None:
        assert run("rent = 1200 # apartment", "rent") == ["1200", "1200"]

    def test_blank_line_does_not_touch_environment(self) -> None:
        env = Environment()
        assert evaluate_line("  # nothing here", env) is None
        assert len(env) == 0


class TestVariables:
    def test_assignment_and_use(self, run: Run) -> None:
        assert run("price = 100", "price", "price * 2") == ["100", "100", "200"]

    def test_dependency_chain(self, run: Run) -> None:
        assert run("a = 10", "b = a * 2", "c = b + a", "d = c / a") == ["10", "20", "30", "3"]

    def test_reassignment_is_not_retroactive(self, run: Run) -> None:
        assert run("x = 5", "x * 2", "x = 10", "x * 2") == ["5", "10", "10", "20"]

    def test_multi_word_identifier(self, run: Run) -> None:
        assert run("monthly salary = 5000", "monthly salary * 12") == ["5000", "60000"]

    def test_unbound_reference(self, run: Run) -> None:
        assert run("unknownVar * 2") == ["Err"]

    def test_use_before_assignment(self, run: Run) -> None:
        assert run("y + 1", "y = 2", "y + 1") == ["Err", "2", "3"]

    def test_failed_assignment_leaves_name_unbound(self, run: Run) -> None:
        assert run("x = 1 / 0", "x + 1") == ["Err", "Err"]
        assert run("x = (3", "x") == ["Err", "Err"]

    def test_failed_reassignment_keeps_previous_value(self, run: Run) -> None:
        assert run("x = 2", "x = 1 / 0", "x") == ["2", "Err", "2"]

    def test_invalid_target(self, run: Run) -> None:
        assert run("123invalid = 5") == ["Err"]

    def test_evaluate_line_reports_target_and_kind(self) -> None:
        env = Environment()
        assert evaluate_line("total = 10 + 20 + 30", env) == ("total", Ok(60.0))
        target, outcome = evaluate_line("total / zero", env)
        assert target is None
        assert isinstance(outcome, Err)
        assert outcome.kind is ErrorKind.UNBOUND
        assert env.lookup("total") == 60.0


class TestPercentages:
    def test_four_idioms(self, run: Run) -> None:
        assert run("20% of 100", "20% off 100", "100 + 20%", "100 - 15%") == ["20", "80", "120", "85"]

    def test_decimal_percentage(self, run: Run) -> None:
        assert run("15.5% of 200") == ["31"]

    def test_with_variables(self, run: Run) -> None:
        assert run("price = 1000", "10% of price", "original = 500", "30% off original") == [
            "1000",
            "100",
            "500",
            "350",
        ]

    def test_added_percentage_keeps_float_error(self, run: Run) -> None:
        assert run("salary = 50000", "salary + 10%") == ["50000", "55000.00"]

    def test_multi_word_operand(self, run: Run) -> None:
        assert run("monthly salary = 5000", "monthly salary - 25%", "20% of monthly salary") == [
            "5000",
            "3750",
            "1000",
        ]

    def test_of_phrase_inside_sum(self, run: Run) -> None:
        assert run("100 + 20% of 50", "20% of 50 + 100 - 10%") == ["110", "100"]

    def test_budget(self, run: Run) -> None:
        assert run(
            "basePrice = 1000",
            "discount = 15% of basePrice",
            "discountedPrice = basePrice - discount",
            "tax = 10% of discountedPrice",
            "final = discountedPrice + tax",
        ) == ["1000", "150", "850", "85", "935"]


class TestPass:
    def test_failure_is_isolated(self, run: Run) -> None:
        assert run("5 + 5", "invalid ++", "10 * 2") == ["10", "Err", "20"]

    @pytest.mark.parametrize("text", ["2 + * 2", "10 / 0", "(2 + 3", "a == b", "x = y = 3"])
    def test_errors_become_marker(self, run: Run, text: str) -> None:
        assert run(text) == ["Err"]

    def test_evaluated_by_position_returned_in_input_order(self) -> None:
        lines = [Line(10, "y = x * 2"), Line(-5, "x = 3"), Line(0, "y")]
        assert [line.result for line in calculate(lines)] == ["6", "3", "Err"]

    def test_equal_positions_keep_input_order(self) -> None:
        lines = [Line(1, "a = 1"), Line(1, "a + 1"), Line(0, "a")]
        assert [line.result for line in calculate(lines)] == ["1", "2", "Err"]

    def test_records_preserved(self) -> None:
        lines = [Line(3, "1 + 1", result="stale"), Line(7, "")]
        out = calculate(lines)
        assert [(l.position, l.expression) for l in out] == [(3, "1 + 1"), (7, "")]
        assert [l.result for l in out] == ["2", ""]
        assert lines[0].result == "stale"

    def test_second_pass_is_identical(self) -> None:
        lines = [Line(i, e) for i, e in enumerate(["x = 5", "x = x + 1", "x * 2", "oops +"])]
        first = calculate(lines)
        second = calculate(first)
        assert first == second
        assert [l.result for l in first] == ["5", "6", "12", "Err"]

    def test_empty_document(self) -> None:
        assert calculate([]) == []

    def test_config_is_used(self) -> None:
        config = EngineConfig(error_marker="?", fraction_digits=3, comment_marker=";")
        lines = [Line(0, "10 / 3 ; third"), Line(1, "1 / 0")]
        assert [l.result for l in calculate(lines, config)] == ["3.333", "?"]

    def test_failing_line_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="linecalc")
        calculate([Line(0, "1 / 0")])
        assert "ARITHMETIC" in caplog.text
        assert "calculated 1 lines (1 failed" in caplog.text

    def test_many_fraction_digits(self) -> None:
        lines = [Line(0, "10 / 3"), Line(1, "1 + 1")]
        out = calculate(lines, EngineConfig(fraction_digits=30))
        assert [l.result for l in out] == ["3.3333333333333335" + "0" * 14, "2"]

    def test_long_line_finishes_quickly(self) -> None:
        start = time.perf_counter()
        out = calculate([Line(0, "a " * 20000 + "%")])
        assert time.perf_counter() - start < 5.0
        assert out[0].result == "Err"
