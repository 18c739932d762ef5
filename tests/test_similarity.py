import math
import unittest

from rag.errors import DimensionMismatch, InvalidVector
from rag.similarity import cosine_similarity


class CosineSimilarityTest(unittest.TestCase):
    def test_self_similarity_is_one(self):
        for vec in ([1.0, 2.0, 3.0], [-0.5, 0.25], [1e-3, 7.0, -2.0, 4.5]):
            self.assertAlmostEqual(cosine_similarity(vec, vec), 1.0, places=12)

    def test_symmetric(self):
        a = [0.3, -1.2, 4.4, 0.0]
        b = [2.1, 0.7, -0.9, 5.5]
        self.assertEqual(cosine_similarity(a, b), cosine_similarity(b, a))

    def test_bounded(self):
        pairs = [
            ([1.0, 0.0], [-1.0, 0.0]),
            ([3.0, 4.0], [6.0, 8.0]),
            ([1e10, 1e-10], [1e10, 1e-10]),
            ([0.1, 0.2, 0.3], [-0.3, 0.2, -0.1]),
        ]
        for a, b in pairs:
            score = cosine_similarity(a, b)
            self.assertGreaterEqual(score, -1.0)
            self.assertLessEqual(score, 1.0)

    def test_opposite_vectors(self):
        self.assertAlmostEqual(cosine_similarity([1.0, 2.0], [-1.0, -2.0]), -1.0)

    def test_zero_vector_returns_zero(self):
        score = cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0])
        self.assertEqual(score, 0.0)
        self.assertFalse(math.isnan(score))
        self.assertEqual(cosine_similarity([1.0, 2.0, 3.0], [0.0, 0.0, 0.0]), 0.0)
        self.assertEqual(cosine_similarity([0.0, 0.0], [0.0, 0.0]), 0.0)

    def test_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatch) as ctx:
            cosine_similarity([1.0, 0.0, 0.0], [1.0, 0.0])
        self.assertEqual(ctx.exception.expected, 3)
        self.assertEqual(ctx.exception.actual, 2)

    def test_reference_values(self):
        a = [1.0, 0.0, 0.0]
        b = [0.9, 0.1, 0.0]
        c = [0.0, 0.0, 1.0]
        self.assertAlmostEqual(cosine_similarity(a, b), 0.994, places=3)
        self.assertEqual(cosine_similarity(a, c), 0.0)
        self.assertEqual(cosine_similarity(b, c), 0.0)

    def test_huge_components_do_not_overflow(self):
        self.assertEqual(cosine_similarity([1e200, 1e200], [1e200, -1e200]), 0.0)
        self.assertAlmostEqual(cosine_similarity([1e200, 1e200], [1e200, 1e200]), 1.0)
        self.assertAlmostEqual(cosine_similarity([1e308, -1e308], [-1e308, 1e308]), -1.0)

    def test_tiny_components_do_not_underflow(self):
        self.assertAlmostEqual(cosine_similarity([1e-200, 0.0], [1e-200, 0.0]), 1.0)
        self.assertAlmostEqual(cosine_similarity([5e-324, 5e-324], [5e-324, 0.0]), 2 ** -0.5)

    def test_mixed_magnitudes(self):
        self.assertAlmostEqual(cosine_similarity([1e200, 0.0], [1e-200, 0.0]), 1.0)

    def test_non_finite_components_raise(self):
        nan = float("nan")
        inf = float("inf")
        for a, b in (([nan, 0.0], [1.0, 0.0]), ([0.0, nan], [1.0, 0.0]), ([1.0, 1.0], [inf, 0.0])):
            with self.assertRaises(InvalidVector):
                cosine_similarity(a, b)
            with self.assertRaises(InvalidVector):
                cosine_similarity(b, a)


if __name__ == "__main__":
    unittest.main()
