import random
import unittest

import continuo.motif


class MotifTests (unittest.TestCase):

	"""
	Tests for motif generation and variation.
	"""

	def test_generated_motif_shape (self) -> None:

		"""
		Fresh motifs have 4-7 degrees inside the scale and start on the 3rd to 5th degree.
		"""

		rng = random.Random(42)

		for _ in range(200):
			motif = continuo.motif.Motif.generate(7, rng)
			self.assertGreaterEqual(len(motif), 4)
			self.assertLessEqual(len(motif), 7)
			self.assertIn(motif[0], (2, 3, 4))
			self.assertTrue(all(0 <= d <= 6 for d in motif.degrees))

	def test_generated_motif_moves_by_steps_or_skips (self) -> None:

		rng = random.Random(7)

		for _ in range(100):
			degrees = continuo.motif.Motif.generate(7, rng).degrees
			for a, b in zip(degrees, degrees[1:]):
				self.assertLessEqual(abs(a - b), 2)

	def test_short_scale_clamps_degrees (self) -> None:

		rng = random.Random(3)

		for _ in range(100):
			motif = continuo.motif.Motif.generate(5, rng)
			self.assertTrue(all(0 <= d <= 4 for d in motif.degrees))

	def test_generation_is_seeded (self) -> None:

		a = continuo.motif.Motif.generate(7, random.Random(5))
		b = continuo.motif.Motif.generate(7, random.Random(5))

		self.assertEqual(a, b)

	def test_variations (self) -> None:

		"""
		The variation counter cycles identity, up two degrees, retrograde, inversion.
		"""

		motif = continuo.motif.Motif.from_degrees([2, 3, 5, 6])

		self.assertEqual(motif.vary(0, 7).to_list(), [2, 3, 5, 6])
		self.assertEqual(motif.vary(1, 7).to_list(), [4, 5, 6, 6])
		self.assertEqual(motif.vary(2, 7).to_list(), [6, 5, 3, 2])
		self.assertEqual(motif.vary(3, 7).to_list(), [4, 3, 1, 0])
		self.assertEqual(motif.vary(4, 7), motif.vary(0, 7))
		self.assertEqual(motif.vary(6, 7), motif.vary(2, 7))

	def test_variation_leaves_original_unchanged (self) -> None:

		motif = continuo.motif.Motif.from_degrees([2, 3, 4, 3])
		motif.vary(1, 7)

		self.assertEqual(motif.to_list(), [2, 3, 4, 3])

	def test_from_degrees_and_indexing (self) -> None:

		motif = continuo.motif.Motif.from_degrees(iter([4, 3, 2, 3]))

		self.assertEqual(motif.degrees, (4, 3, 2, 3))
		self.assertEqual(len(motif), 4)
		self.assertEqual(motif[2], 2)


if __name__ == "__main__":
	unittest.main()
