"""Tests for EpsilonGreedy and Ucb1."""
import unittest

from bandit import EpsilonGreedy, Ucb1
from errors import InvalidArgument


class TestEpsilonGreedy(unittest.TestCase):
    def test_initialization(self):
        bandit = EpsilonGreedy(3, 0.1)
        self.assertEqual(bandit.counts(), [0, 0, 0])
        self.assertEqual(bandit.values(), [0.0, 0.0, 0.0])

    def test_rejects_bad_params(self):
        with self.assertRaises(InvalidArgument):
            EpsilonGreedy(0, 0.1)
        with self.assertRaises(InvalidArgument):
            EpsilonGreedy(3, -0.01)
        with self.assertRaises(InvalidArgument):
            EpsilonGreedy(3, 1.5)
        # the error is still a ValueError for plain callers
        with self.assertRaises(ValueError):
            EpsilonGreedy(3, 2.0)

    def test_exploit_when_epsilon_zero(self):
        bandit = EpsilonGreedy(3, 0.0)
        # all zeros: lowest index wins the tie
        self.assertEqual(bandit.select_arm(), 0)
        bandit.update(2, 10.0)
        bandit.update(1, 1.0)
        bandit.update(0, 1.0)
        for _ in range(20):
            self.assertEqual(bandit.select_arm(), 2)
        # tie between arms 1 and 2 -> arm 1
        bandit.update(1, 19.0)
        self.assertEqual(bandit.values()[1], 10.0)
        self.assertEqual(bandit.select_arm(), 1)

    def test_explore_when_epsilon_one(self):
        bandit = EpsilonGreedy(3, 1.0)
        results = set(bandit.select_arm() for _ in range(100))
        self.assertEqual(results, {0, 1, 2})

    def test_incremental_mean(self):
        bandit = EpsilonGreedy(1, 0.1)
        bandit.update(0, 1.0)
        bandit.update(0, 3.0)
        self.assertAlmostEqual(bandit.values()[0], 2.0, places=12)
        self.assertEqual(bandit.counts()[0], 2)

    def test_constant_reward_mean(self):
        bandit = EpsilonGreedy(2, 0.0)
        for _ in range(37):
            bandit.update(1, 0.7)
        self.assertAlmostEqual(bandit.values()[1], 0.7, places=12)
        self.assertEqual(bandit.counts(), [0, 37])

    def test_fixed_seed_is_reproducible(self):
        a = EpsilonGreedy(3, 0.5)
        b = EpsilonGreedy(3, 0.5)
        rewards = [1.0, 0.0, 0.5, 0.2, 0.9, 0.3, 0.0, 1.0, 0.4, 0.6] * 5
        for r in rewards:
            arm_a, arm_b = a.select_arm(), b.select_arm()
            self.assertEqual(arm_a, arm_b)
            a.update(arm_a, r)
            b.update(arm_b, r)
        self.assertEqual(a.counts(), b.counts())
        self.assertEqual(a.values(), b.values())

    def test_explicit_seed(self):
        a = EpsilonGreedy(5, 1.0, seed=7)
        b = EpsilonGreedy(5, 1.0, seed=7)
        self.assertEqual([a.select_arm() for _ in range(30)], [b.select_arm() for _ in range(30)])
        c = EpsilonGreedy(5, 1.0, seed=None)
        for _ in range(30):
            self.assertIn(c.select_arm(), range(5))

    def test_out_of_range_arm(self):
        bandit = EpsilonGreedy(2, 0.1)
        with self.assertRaises(IndexError):
            bandit.update(2, 1.0)
        with self.assertRaises(IndexError):
            bandit.update(-1, 1.0)
        self.assertEqual(bandit.counts(), [0, 0])


class TestUcb1(unittest.TestCase):
    def test_rejects_bad_params(self):
        with self.assertRaises(InvalidArgument):
            Ucb1(0, 2.0)
        with self.assertRaises(InvalidArgument):
            Ucb1(3, -0.1)
        Ucb1(3, 0.0)

    def test_cold_start_visits_arms_in_order(self):
        bandit = Ucb1(3, 2.0)
        visited = []
        for _ in range(3):
            arm = bandit.select_arm()
            visited.append(arm)
            bandit.update(arm, 1.0)
        self.assertEqual(visited, [0, 1, 2])

    def test_cold_start_picks_lowest_untried(self):
        bandit = Ucb1(4, 2.0)
        bandit.update(0, 5.0)
        bandit.update(2, 5.0)
        self.assertEqual(bandit.select_arm(), 1)

    def test_select_does_not_mutate(self):
        bandit = Ucb1(2, 1.0)
        bandit.update(0, 1.0)
        bandit.update(1, 0.5)
        before = (bandit.counts(), bandit.values())
        for _ in range(5):
            bandit.select_arm()
        self.assertEqual((bandit.counts(), bandit.values()), before)

    def test_exploits_best_arm(self):
        bandit = Ucb1(2, 2.0)
        bandit.update(0, 1.0)
        bandit.update(0, 1.0)
        bandit.update(1, 0.1)
        self.assertEqual(bandit.select_arm(), 0)

    def test_zero_c_is_greedy_with_low_index_ties(self):
        bandit = Ucb1(3, 0.0)
        for arm in range(3):
            bandit.update(arm, 1.0)
        self.assertEqual(bandit.select_arm(), 0)
        bandit.update(2, 3.0)
        self.assertEqual(bandit.select_arm(), 2)

    def test_deterministic(self):
        a = Ucb1(3, 2.0)
        b = Ucb1(3, 2.0)
        rewards = [1.0, 0.0, 0.5, 0.2, 0.9, 0.3, 0.0, 1.0, 0.4, 0.6]
        for r in rewards:
            arm_a, arm_b = a.select_arm(), b.select_arm()
            self.assertEqual(arm_a, arm_b)
            a.update(arm_a, r)
            b.update(arm_b, r)

    def test_incremental_mean(self):
        bandit = Ucb1(1, 2.0)
        bandit.update(0, 1.0)
        bandit.update(0, 3.0)
        self.assertAlmostEqual(bandit.values()[0], 2.0, places=12)
        self.assertEqual(bandit.counts()[0], 2)


if __name__ == "__main__":
    unittest.main()
