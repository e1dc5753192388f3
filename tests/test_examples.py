import unittest
from examples import (
    ardgp_example01_1d_regression,
    ardgp_example02_likelihood_grid,
    )


class TestExamples(unittest.TestCase):
    def test_01(self):
        model = ardgp_example01_1d_regression.main()
        self.assertTrue(abs(model.log_likelihood()) < float("inf"))

    def test_02(self):
        model = ardgp_example02_likelihood_grid.main()
        hp = model.hyperparameters
        self.assertEqual(hp.lengthscales[0], hp.lengthscales[1])


if __name__ == "__main__":
    unittest.main()
