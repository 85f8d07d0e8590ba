from unittest import TestCase

from sgpa.aggregator import combine_marks, compute_sgpa, subject_percentage
from sgpa.errors import InvalidCredit, InvalidMarks, NoCredits, WeightMismatch
from sgpa.models import ComponentWeights, Mark, Subject


def endterm_only(name, credit, obtained, total=100):
    return Subject(
        id=name,
        name=name,
        credit=credit,
        weights=ComponentWeights(endterm=100),
        endterm=Mark(obtained, total),
    )


class AggregatorTests(TestCase):
    def setUp(self):
        self.subject = Subject(
            id="ds",
            name="Data Structures",
            credit=4,
            weights=ComponentWeights(attendance=10, ca=30, midterm=20, endterm=40),
            attendance=Mark(9, 10),
            ca=(Mark(24, 30),),
            midterm=Mark(16, 20),
            endterm=Mark(35, 40),
        )

    def test_single_subject_example(self):
        res = compute_sgpa([self.subject])
        self.assertAlmostEqual(res.sgpa, 8.4)
        self.assertEqual(res.total_credits, 4)
        self.assertEqual(len(res.subject_results), 1)
        row = res.subject_results[0]
        self.assertEqual(row.name, "Data Structures")
        self.assertAlmostEqual(row.final_percentage, 84.0)
        self.assertAlmostEqual(row.grade_point, 8.4)

    def test_string_inputs_are_parsed(self):
        subject = Subject(
            id="s",
            name="Physics",
            credit="3",
            weights=ComponentWeights(attendance="", ca="0", midterm="50", endterm="50"),
            midterm=Mark("30", "40"),
            endterm=Mark(" 45 ", "50"),
        )
        res = compute_sgpa([subject])
        self.assertAlmostEqual(res.subject_results[0].final_percentage, 82.5)
        self.assertAlmostEqual(res.sgpa, 8.25)

    def test_equal_credits_give_plain_mean(self):
        res = compute_sgpa([
            endterm_only("A", 3, 70),
            endterm_only("B", 3, 90),
            endterm_only("C", 3, 50),
        ])
        self.assertAlmostEqual(res.sgpa, 7.0)
        self.assertEqual(res.total_credits, 9)

    def test_credit_weighted_average(self):
        res = compute_sgpa([endterm_only("A", 3, 60), endterm_only("B", 1, 100)])
        self.assertAlmostEqual(res.sgpa, 7.0)

    def test_ca_entries_are_summed_before_percentage(self):
        subject = Subject(
            id="s",
            name="Maths",
            credit=2,
            weights=ComponentWeights(ca=100),
            ca=(Mark(5, 20), Mark(25, 30), Mark(0, 0)),
        )
        # 30 / 50 = 60%
        res = compute_sgpa([subject])
        self.assertAlmostEqual(res.subject_results[0].final_percentage, 60.0)

    def test_zero_weight_component_is_ignored(self):
        subject = Subject(
            id="s",
            name="Chem",
            credit=4,
            weights=ComponentWeights(attendance=0, endterm=100),
            attendance=Mark("junk", None),
            endterm=Mark(80, 100),
        )
        res = compute_sgpa([subject])
        self.assertAlmostEqual(res.subject_results[0].final_percentage, 80.0)

    def test_weighted_component_without_marks_contributes_zero(self):
        subject = Subject(
            id="s",
            name="Bio",
            credit=4,
            weights=ComponentWeights(ca=30, endterm=70),
            ca=(),
            endterm=Mark(70, 70),
        )
        res = compute_sgpa([subject])
        self.assertAlmostEqual(res.subject_results[0].final_percentage, 70.0)

        zero_total = Subject(
            id="z",
            name="Geo",
            credit=4,
            weights=ComponentWeights(midterm=50, endterm=50),
            midterm=Mark(0, 0),
            endterm=Mark(50, 50),
        )
        self.assertAlmostEqual(subject_percentage(zero_total), 50.0)

    def test_weight_sum_tolerance(self):
        for endterm in (39.995, 40.005):
            subject = Subject(
                id="s",
                name="Tol",
                credit=1,
                weights=ComponentWeights(attendance=10, ca=30, midterm=20, endterm=endterm),
                attendance=Mark(1, 1),
                ca=(Mark(1, 1),),
                midterm=Mark(1, 1),
                endterm=Mark(1, 1),
            )
            compute_sgpa([subject])

        for endterm in (38, 42):
            subject = Subject(
                id="s",
                name="Tol",
                credit=1,
                weights=ComponentWeights(attendance=10, ca=30, midterm=20, endterm=endterm),
            )
            with self.assertRaises(WeightMismatch) as ctx:
                compute_sgpa([subject])
            self.assertEqual(ctx.exception.subject_name, "Tol")

    def test_invalid_credit(self):
        for credit in (0, -2, "abc", None, "", float("inf"), float("nan")):
            with self.assertRaises(InvalidCredit):
                compute_sgpa([endterm_only("Bad", credit, 50)])

    def test_invalid_marks(self):
        for mark in (Mark(60, 50), Mark(-1, 50), Mark(10, -5), Mark(None, 50), Mark(10, "x")):
            subject = Subject(
                id="s",
                name="Bad",
                credit=4,
                weights=ComponentWeights(endterm=100),
                endterm=mark,
            )
            with self.assertRaises(InvalidMarks):
                compute_sgpa([subject])

    def test_first_error_short_circuits(self):
        bad_credit = endterm_only("First", 0, 50)
        bad_weights = Subject(id="x", name="Second", credit=4, weights=ComponentWeights(endterm=50))
        with self.assertRaises(InvalidCredit) as ctx:
            compute_sgpa([endterm_only("Ok", 4, 50), bad_credit, bad_weights])
        self.assertEqual(ctx.exception.subject_name, "First")

    def test_no_subjects_means_no_credits(self):
        with self.assertRaises(NoCredits):
            compute_sgpa([])

    def test_errors_are_value_errors_with_unnamed_label(self):
        with self.assertRaises(ValueError) as ctx:
            compute_sgpa([endterm_only("", "0", 50)])
        self.assertEqual(ctx.exception.subject_name, "Unnamed")
        self.assertIn('"Unnamed"', str(ctx.exception))

    def test_blank_names_fall_back_to_position(self):
        res = compute_sgpa([endterm_only("Named", 4, 50), endterm_only("  ", 4, 50)])
        self.assertEqual([r.name for r in res.subject_results], ["Named", "Subject 2"])

    def test_idempotent(self):
        subjects = [self.subject, endterm_only("B", 3, 67)]
        self.assertEqual(compute_sgpa(subjects), compute_sgpa(subjects))

    def test_percentage_and_grade_point_ranges(self):
        for obtained in (0, 13, 50, 99, 100):
            res = compute_sgpa([endterm_only("R", 2, obtained)])
            row = res.subject_results[0]
            self.assertGreaterEqual(row.final_percentage, 0)
            self.assertLessEqual(row.final_percentage, 100)
            self.assertAlmostEqual(row.grade_point, row.final_percentage / 10)
            self.assertTrue(0 <= row.grade_point <= 10)

    def test_combine_marks(self):
        self.assertEqual(combine_marks("x", [Mark(1, 2), Mark("3", "4")]), (4.0, 6.0))
        self.assertEqual(combine_marks("x", []), (0.0, 0.0))

    def test_each_ca_entry_is_checked_on_its_own(self):
        # 12/10 + 0/10 sums to a valid 12/20, but the first entry is over its total
        subject = Subject(
            id="s",
            name="Lab",
            credit=2,
            weights=ComponentWeights(ca=100),
            ca=(Mark(12, 10), Mark(0, 10)),
        )
        with self.assertRaises(InvalidMarks):
            compute_sgpa([subject])
