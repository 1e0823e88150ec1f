import math
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from careerprep.core.keyword_scorer import (  # noqa: E402
    calculate_job_matches,
    score_profile,
    term_frequency,
    tf_score,
)
from careerprep.models.jobs import (  # noqa: E402
    JOB_PROFILE_CATALOG,
    build_catalog,
    display_score,
)


class TermFrequencyTests(unittest.TestCase):
    def test_counts_case_insensitive_substrings(self):
        self.assertEqual(term_frequency("node", "Node.js and more NODE services"), 2)
        self.assertEqual(term_frequency("react", "no match here"), 0)

    def test_regex_metacharacters_are_literal(self):
        self.assertEqual(term_frequency("c++", "c++ and C++ but not c"), 2)
        self.assertEqual(term_frequency("ci/cd", "built ci/cd pipelines"), 1)
        self.assertEqual(term_frequency("node.js", "nodexjs"), 0)

    def test_log_dampening(self):
        self.assertEqual(tf_score(0), 0.0)
        self.assertEqual(tf_score(1), 1.0)
        self.assertAlmostEqual(tf_score(10), 1 + math.log(10))


class JobMatchTests(unittest.TestCase):
    def test_full_stack_profile_for_mern_resume(self):
        matches = calculate_job_matches("React, Node.js, and MongoDB experience")
        titles = [m.job_title for m in matches]
        self.assertIn("Full Stack Developer", titles)
        self.assertLessEqual(len(matches), 5)

        full_stack = matches[titles.index("Full Stack Developer")]
        self.assertIn("react", full_stack.matched_keywords)
        self.assertIn("node", full_stack.matched_keywords)
        self.assertEqual(len(full_stack.matched_keywords), len(set(full_stack.matched_keywords)))
        self.assertAlmostEqual(full_stack.relevance_score, 1.6)
        self.assertEqual(full_stack.display_score, 16)

    def test_cplusplus_keyword_matches_without_error(self):
        matches = calculate_job_matches("Systems programmer: C++ and c++17 templates")
        software = next(m for m in matches if m.job_title == "Software Engineer")
        self.assertIn("c++", software.matched_keywords)

    def test_repeated_keywords_score_sub_linearly(self):
        catalog = build_catalog({"Frontend": [(["react", "typescript"], 0.9)]})
        once = score_profile("react and typescript", catalog["Frontend"]).relevance_score
        twice = score_profile(
            "react and typescript, react and typescript", catalog["Frontend"]
        ).relevance_score

        self.assertGreater(twice, once)
        self.assertLess(twice, 2 * once)

    def test_keyword_listed_once_across_groups(self):
        catalog = build_catalog({"Dup": [(["python"], 1.0), (["python"], 0.5)]})
        match = score_profile("python", catalog["Dup"])
        self.assertEqual(match.matched_keywords, ["python"])
        self.assertAlmostEqual(match.relevance_score, 1.5)

    def test_empty_text_yields_no_matches(self):
        self.assertEqual(calculate_job_matches(""), [])
        self.assertEqual(calculate_job_matches("   \n\t "), [])

    def test_zero_score_profiles_dropped(self):
        catalog = build_catalog({
            "Hit": [(["kubernetes"], 1.0)],
            "Miss": [(["cobol"], 1.0)],
        })
        matches = calculate_job_matches("kubernetes operator", catalog=catalog)
        self.assertEqual([m.job_title for m in matches], ["Hit"])

    def test_results_sorted_and_limited(self):
        resume = (
            "Senior software engineer. Python, Java, JavaScript, React, Node, SQL, "
            "Docker, Kubernetes, AWS, machine learning, pandas, tableau, figma, "
            "security, agile scrum roadmap, frontend and backend api design."
        )
        matches = calculate_job_matches(resume)
        self.assertEqual(len(matches), 5)
        scores = [m.relevance_score for m in matches]
        self.assertEqual(scores, sorted(scores, reverse=True))

        self.assertEqual(len(calculate_job_matches(resume, limit=2)), 2)

    def test_ties_keep_catalog_order(self):
        catalog = build_catalog({
            "First": [(["sql"], 1.0)],
            "Second": [(["sql"], 1.0)],
        })
        matches = calculate_job_matches("sql", catalog=catalog)
        self.assertEqual([m.job_title for m in matches], ["First", "Second"])

    def test_default_catalog_has_twelve_profiles(self):
        self.assertEqual(len(JOB_PROFILE_CATALOG), 12)


class DisplayScoreTests(unittest.TestCase):
    def test_scaled_and_capped(self):
        self.assertEqual(display_score(0), 0)
        self.assertEqual(display_score(3.14), 31)
        self.assertEqual(display_score(2.25), 23)
        self.assertEqual(display_score(10.0), 100)
        self.assertEqual(display_score(1e6), 100)

    def test_always_within_bounds(self):
        for value in [0, 0.01, 0.5, 1.6, 7.77, 9.99, 50, 123.4]:
            self.assertGreaterEqual(display_score(value), 0)
            self.assertLessEqual(display_score(value), 100)


if __name__ == "__main__":
    unittest.main()
