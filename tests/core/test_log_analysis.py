from __future__ import annotations

from evidence_tools_server.core.log_analysis import (
    DB_CONNECTIVITY_LABEL,
    analyze_logs,
    split_lines,
    tail_lines,
)
from evidence_tools_server.core.models import LogAnalysis


def test_analyze_logs_empty_and_none() -> None:
    assert analyze_logs(None) == LogAnalysis()
    assert analyze_logs("") == LogAnalysis()
    assert analyze_logs("").to_dict() == {
        "errorCount": 0,
        "errorPatterns": [],
        "httpStatusCounts": {},
        "anomalies": [],
        "sampleErrorLines": [],
    }


def test_analyze_logs_counts_patterns_and_samples() -> None:
    text = (
        "INFO ok\n"
        "  ERROR boom status=503  \n"
        "WARN slow\n"
        "failed to connect: connection refused\n"
    )
    result = analyze_logs(text)

    assert result.error_count == 2
    assert result.sample_error_lines == [
        "ERROR boom status=503",
        "failed to connect: connection refused",
    ]
    assert result.error_patterns == ["HTTP 503 errors", DB_CONNECTIVITY_LABEL]
    assert result.status_code_counts == {"503": 1}
    assert result.anomalies == ["High error rate (2 errors in 4 lines = 50.0%)"]


def test_error_keywords_are_case_insensitive() -> None:
    text = "Exception thrown\nTIMEOUT reached\nREFUSED\nall good\n"
    assert analyze_logs(text).error_count == 3


def test_only_first_status_code_per_line_is_counted() -> None:
    result = analyze_logs("GET /a 404 then retry 500\nGET /b 404\n")
    assert result.status_code_counts == {"404": 2}
    assert result.error_patterns == ["HTTP 404 errors"]


def test_error_patterns_have_no_duplicates() -> None:
    text = "\n".join(
        [
            "status=503",
            "deadlock detected",
            "status=503",
            "timeout talking to database",
            "status=502",
        ]
    )
    result = analyze_logs(text)
    assert result.error_patterns == [
        "HTTP 503 errors",
        DB_CONNECTIVITY_LABEL,
        "HTTP 502 errors",
    ]
    assert sum(result.status_code_counts.values()) == 3


def test_sample_error_lines_capped_at_five_in_order() -> None:
    text = "\n".join(f"  error number {i}  " for i in range(7))
    result = analyze_logs(text)
    assert result.error_count == 7
    assert result.sample_error_lines == [f"error number {i}" for i in range(5)]


def test_no_anomaly_at_exactly_ten_percent() -> None:
    text = "\n".join(["error"] + ["ok"] * 9)
    assert analyze_logs(text).anomalies == []


def test_anomaly_percentage_rounds_to_one_decimal() -> None:
    text = "\n".join(["error"] + ["ok"] * 5)
    assert analyze_logs(text).anomalies == ["High error rate (1 errors in 6 lines = 16.7%)"]


def test_trailing_newline_does_not_add_a_line() -> None:
    assert analyze_logs("error\n").anomalies == [
        "High error rate (1 errors in 1 lines = 100.0%)"
    ]


def test_analyze_logs_is_deterministic() -> None:
    text = "ERROR 500 deadlock\nINFO ok\n"
    assert analyze_logs(text).to_dict() == analyze_logs(text).to_dict()


def test_split_lines_drops_only_trailing_empties() -> None:
    assert split_lines("a\n\nb\n\n") == ["a", "", "b"]
    assert split_lines("\n\n") == []
    assert split_lines(None) == []


def test_tail_lines() -> None:
    text = "1\n2\n3\n4\n5\n"
    assert tail_lines(text, 2) == ("4\n5\n", 2)
    assert tail_lines(text, 10) == ("1\n2\n3\n4\n5\n", 5)
    assert tail_lines(text, 0) == ("", 0)
    assert tail_lines(text, -3) == ("", 0)


def test_non_ascii_digits_are_not_status_codes() -> None:
    analysis = analyze_logs("upstream status=５０３\nretry status=٥٠٣\n")
    assert analysis.status_code_counts == {}
    assert analysis.error_patterns == []


def test_keywords_match_ascii_case_only() -> None:
    # U+017F (long s) folds to "s" under Unicode case rules.
    assert analyze_logs("connection refuſed\n").error_count == 0
    assert analyze_logs("connection REFUSED\n").error_count == 1
