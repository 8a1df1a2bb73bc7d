import unittest

from fabricpop.core.errors import InvalidRating
from fabricpop.core.models import RatingScale
from fabricpop.transform.normalizers import (
    LETTER_GRADES,
    DefaultRatingNormalizer,
    describe_scale,
    letter_grades,
    normalize,
)


class TestNormalizeNumericScales(unittest.TestCase):
    def test_stars5_divides_by_five(self):
        for v in (0, 0.5, 1, 2.5, 3.7, 4.5, 5):
            self.assertAlmostEqual(normalize(v, RatingScale.STARS_5), v / 5)

    def test_stars5_clamps_out_of_range(self):
        self.assertEqual(normalize(7, "stars5"), 1.0)
        self.assertEqual(normalize(-2, "stars5"), 0.0)

    def test_ten_point_scales(self):
        self.assertAlmostEqual(normalize(8, "stars10"), 0.8)
        self.assertAlmostEqual(normalize(7.3, "numeric10"), 0.73)
        self.assertEqual(normalize(11, "numeric10"), 1.0)

    def test_numeric100(self):
        self.assertAlmostEqual(normalize(87, "numeric100"), 0.87)
        self.assertEqual(normalize(250, "numeric100"), 1.0)

    def test_float_passthrough_clamped(self):
        self.assertAlmostEqual(normalize(0.42, "float"), 0.42)
        self.assertEqual(normalize(1.5, "float"), 1.0)
        self.assertEqual(normalize(-0.1, "float"), 0.0)

    def test_numeric_strings_are_parsed(self):
        self.assertAlmostEqual(normalize(" 4.5 ", "stars5"), 0.9)
        self.assertAlmostEqual(normalize("87", "numeric100"), 0.87)

    def test_unparseable_number_fails(self):
        with self.assertRaises(InvalidRating):
            normalize("not-a-number", "numeric10")
        with self.assertRaises(InvalidRating):
            normalize("nan", "stars5")
        with self.assertRaises(InvalidRating):
            normalize(True, "stars5")
        with self.assertRaises(InvalidRating):
            normalize([4], "stars5")

    def test_digit_group_underscores_rejected(self):
        with self.assertRaises(InvalidRating):
            normalize("1_0", "numeric10")
        with self.assertRaises(InvalidRating):
            normalize("4_5", "stars5")


class TestNormalizeLetterGrades(unittest.TestCase):
    def test_every_grade_matches_table(self):
        for grade, expected in LETTER_GRADES.items():
            self.assertEqual(normalize(grade, RatingScale.LETTER_GRADE), expected)

    def test_case_insensitive_and_trimmed(self):
        self.assertEqual(normalize("a+", "letterGrade"), normalize("A+", "letterGrade"))
        self.assertEqual(normalize("  b- ", "letterGrade"), 0.8)

    def test_unknown_grade_fails(self):
        with self.assertRaises(InvalidRating):
            normalize("E", "letterGrade")
        with self.assertRaises(InvalidRating):
            normalize(None, "letterGrade")

    def test_thirteen_grades_best_first(self):
        grades = letter_grades()
        self.assertEqual(len(grades), 13)
        self.assertEqual(grades[0], "A+")
        self.assertEqual(grades[-1], "F")
        values = [LETTER_GRADES[g] for g in grades]
        self.assertEqual(values, sorted(values, reverse=True))


class TestScaleTags(unittest.TestCase):
    def test_unknown_scale_fails(self):
        with self.assertRaises(InvalidRating):
            normalize(3, "bogus")

    def test_scale_tags_match_exactly(self):
        for tag in ("STARS5", "Stars5", "lettergrade", " stars5", "LETTER_GRADE"):
            with self.subTest(tag=tag):
                with self.assertRaises(InvalidRating):
                    normalize(3, tag)
                self.assertIsNone(describe_scale(tag))

    def test_legacy_snake_case_tags(self):
        self.assertEqual(RatingScale.parse("stars_5"), RatingScale.STARS_5)
        self.assertEqual(RatingScale.parse("letter_grade"), RatingScale.LETTER_GRADE)
        self.assertAlmostEqual(normalize(50, "numeric_100"), 0.5)

    def test_normalizer_instance_matches_module_function(self):
        n = DefaultRatingNormalizer()
        self.assertEqual(n.normalize("B", "letterGrade"), normalize("B", "letterGrade"))


class TestDescribeScale(unittest.TestCase):
    def test_stars5_metadata(self):
        info = describe_scale("stars5")
        self.assertEqual(info.label, "5 Stars")
        self.assertEqual((info.min, info.max, info.step), (0, 5, 0.5))
        self.assertEqual(info.format(4.5), "4.5 ★")
        self.assertEqual(info.format(4), "4 ★")

    def test_formatters_keep_full_precision(self):
        self.assertEqual(describe_scale("numeric100").format(1234567), "1234567/100")
        self.assertEqual(describe_scale("numeric100").format(1234567.0), "1234567/100")
        self.assertEqual(describe_scale("stars5").format(0.1234567), "0.1234567 ★")
        self.assertEqual(describe_scale("numeric10").format(7.123456789), "7.123456789/10")
        self.assertEqual(describe_scale("numeric10").format("8.25"), "8.25/10")

    def test_numeric_formatters(self):
        self.assertEqual(describe_scale("numeric10").format(8.2), "8.2/10")
        self.assertEqual(describe_scale("numeric100").format(87), "87/100")
        self.assertEqual(describe_scale("float").format(0.7312), "0.73")

    def test_letter_grade_metadata(self):
        info = describe_scale(RatingScale.LETTER_GRADE)
        self.assertEqual(info.label, "Letter Grade")
        self.assertEqual(list(info.options), letter_grades())
        self.assertIsNone(info.min)
        self.assertEqual(info.format("b+"), "B+")

    def test_unknown_scale_returns_none(self):
        self.assertIsNone(describe_scale("bogus"))
        self.assertIsNone(describe_scale(None))

    def test_every_scale_described(self):
        for scale in RatingScale:
            self.assertIsNotNone(describe_scale(scale))


if __name__ == "__main__":
    unittest.main()
