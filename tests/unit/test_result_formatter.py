from pagequiz.formatting.result_formatter import (
    FormattedLine,
    LineKind,
    count_questions,
    format_result,
)


class TestFormatResult:
    def test_question_and_options_with_check_mark(self) -> None:
        lines = format_result("1. What is 2+2?\nA) 3\nB) 4 ✓\nC) 5\n")
        assert [line.kind for line in lines[:4]] == [
            LineKind.QUESTION,
            LineKind.OPTION,
            LineKind.OPTION,
            LineKind.OPTION,
        ]
        assert [line.correct for line in lines[1:4]] == [False, True, False]

    def test_trailing_newline_yields_spacer(self) -> None:
        lines = format_result("1. Q\n")
        assert lines[-1] == FormattedLine(1, LineKind.SPACER, "")

    def test_numbered_with_paren_is_question(self) -> None:
        assert format_result("12) Name the capital")[0].kind is LineKind.QUESTION

    def test_question_mark_wins_over_option(self) -> None:
        line = format_result("A) Is this an option?")[0]
        assert line.kind is LineKind.QUESTION
        assert not line.correct

    def test_option_with_dot(self) -> None:
        assert format_result("D. Salt")[0].kind is LineKind.OPTION

    def test_letters_beyond_d_are_text(self) -> None:
        assert format_result("E) Fifth")[0].kind is LineKind.TEXT

    def test_plain_text_and_whitespace_only_spacer(self) -> None:
        lines = format_result("Answer key below\n   ")
        assert lines[0].kind is LineKind.TEXT
        assert lines[1].kind is LineKind.SPACER

    def test_indices_follow_input_order(self) -> None:
        lines = format_result("1. Q?\nA) a\n\nB) b")
        assert [line.index for line in lines] == [0, 1, 2, 3]


class TestCorrectnessWords:
    def test_uzbek_word_default_locale(self) -> None:
        assert format_result("B) Toshkent (TO'G'RI)")[0].correct

    def test_uzbek_word_with_typographic_apostrophes(self) -> None:
        assert format_result("B) Toshkent to‘g‘ri")[0].correct

    def test_english_locale(self) -> None:
        assert format_result("C) Paris - Correct", locale="en")[0].correct
        assert not format_result("C) Paris - Correct", locale="uz")[0].correct

    def test_russian_locale(self) -> None:
        assert format_result("A) Москва (Правильно)", locale="ru")[0].correct

    def test_unknown_locale_falls_back_to_uzbek(self) -> None:
        assert format_result("A) x to'g'ri", locale="de")[0].correct

    def test_check_mark_in_any_locale(self) -> None:
        assert format_result("A) x ✓", locale="en")[0].correct


class TestCountQuestions:
    def test_counts_question_lines(self) -> None:
        text = "1. One?\nA) a ✓\nB) b\n\n2. Two?\nA) a\nB) b ✓"
        assert count_questions(format_result(text)) == 2
