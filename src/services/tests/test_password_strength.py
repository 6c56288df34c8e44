"""Unit tests for the password strength scorer."""

import unittest

from services.password_strength import (
    COMMON_PATTERN_WARNING,
    TOO_SHORT_WARNING,
    evaluate_criteria,
    matches_common_pattern,
    score_password,
)


class TestEvaluateCriteria(unittest.TestCase):

    def test_all_criteria_satisfied(self):
        criteria = evaluate_criteria("Xyz12345!")
        self.assertTrue(criteria.length)
        self.assertTrue(criteria.has_upper_case)
        self.assertTrue(criteria.has_lower_case)
        self.assertTrue(criteria.has_numbers)
        self.assertTrue(criteria.has_special_char)
        self.assertEqual(criteria.satisfied_count, 5)

    def test_length_boundary(self):
        self.assertFalse(evaluate_criteria("a" * 7).length)
        self.assertTrue(evaluate_criteria("a" * 8).length)

    def test_every_listed_special_character_counts(self):
        for char in '!@#$%^&*(),.?":{}|<>':
            with self.subTest(char=char):
                self.assertTrue(evaluate_criteria(char).has_special_char)

    def test_unlisted_symbols_are_not_special(self):
        for char in "-_+=~;'[]/\\ ":
            with self.subTest(char=char):
                self.assertFalse(evaluate_criteria(char).has_special_char)

    def test_non_ascii_letters_do_not_count_as_cases(self):
        criteria = evaluate_criteria("ÄÖÜäöü")
        self.assertFalse(criteria.has_upper_case)
        self.assertFalse(criteria.has_lower_case)

    def test_wire_names(self):
        self.assertEqual(
            set(evaluate_criteria("x").to_dict()),
            {"length", "hasUpperCase", "hasLowerCase", "hasNumbers", "hasSpecialChar"},
        )


class TestCommonPatterns(unittest.TestCase):

    def test_denylisted_tokens_match_case_insensitively(self):
        for password in ["PASSWORD", "myQwErTy", "xABCx", "Admin1", "LetMeIn", "WELCOME!"]:
            with self.subTest(password=password):
                self.assertTrue(matches_common_pattern(password))

    def test_123_only_matches_at_start(self):
        self.assertTrue(matches_common_pattern("123xyz"))
        self.assertFalse(matches_common_pattern("xyz123"))

    def test_clean_password_does_not_match(self):
        self.assertFalse(matches_common_pattern("Xyz12345!"))


class TestScorePassword(unittest.TestCase):

    def test_strong_password_scores_four_with_no_feedback(self):
        result = score_password("Xyz12345!")
        self.assertEqual(result.score, 4)
        self.assertEqual(result.feedback.suggestions, [])
        self.assertEqual(result.feedback.warning, "")
        self.assertEqual(result.feedback.warnings, [])

    def test_abc_prefix_is_penalized_even_with_all_criteria(self):
        """'Abc12345!' meets every criterion but contains 'abc'."""
        result = score_password("Abc12345!")
        self.assertEqual(result.criteria.satisfied_count, 5)
        self.assertEqual(result.feedback.suggestions, [])
        self.assertEqual(result.score, 3)
        self.assertEqual(result.feedback.warning, COMMON_PATTERN_WARNING)

    def test_password123_is_penalized(self):
        result = score_password("password123")
        # length, lower, digits satisfied -> base 2, penalty -> 1
        self.assertEqual(result.score, 1)
        self.assertEqual(result.feedback.warning, COMMON_PATTERN_WARNING)

    def test_aaaa(self):
        result = score_password("aaaa")
        self.assertEqual(result.score, 0)
        self.assertEqual(result.feedback.suggestions, [
            "Use at least 8 characters",
            "Add uppercase letters",
            "Add numbers",
            "Add special characters",
        ])
        self.assertEqual(result.feedback.warning, TOO_SHORT_WARNING)

    def test_short_password_without_character_classes_scores_zero(self):
        for password in ["", " ", "~~~", "_-_-_-", "       "]:
            with self.subTest(password=password):
                self.assertEqual(score_password(password).score, 0)

    def test_penalty_floors_at_zero(self):
        result = score_password("abc")
        self.assertEqual(result.score, 0)

    def test_first_warning_wins_when_short_and_common(self):
        result = score_password("admin")
        self.assertEqual(result.feedback.warning, TOO_SHORT_WARNING)
        self.assertEqual(result.feedback.warnings, [TOO_SHORT_WARNING, COMMON_PATTERN_WARNING])

    def test_suggestions_follow_criterion_order(self):
        result = score_password("!!!!!!!!")
        self.assertEqual(result.feedback.suggestions, [
            "Add uppercase letters",
            "Add lowercase letters",
            "Add numbers",
        ])

    def test_score_always_in_range(self):
        samples = [
            "", "a", "A", "1", "!", "aA1!", "aaaaaaaa", "AAAAAAAA1!",
            "123password", "Zz9!Zz9!Zz9!", "\x00\n\t", "🙂" * 20, "x" * 10000,
        ]
        for password in samples:
            with self.subTest(password=password[:20]):
                score = score_password(password).score
                self.assertIsInstance(score, int)
                self.assertGreaterEqual(score, 0)
                self.assertLessEqual(score, 4)


if __name__ == '__main__':
    unittest.main()
