"""
Unit tests for the GaussianProcessRegression model.
"""

import ast
import inspect
import threading
import unittest
import warnings
import numpy as np

import ardgp
from ardgp import GaussianProcessRegression, Hyperparameters, config
from ardgp.core.linalg import factorize


def make_model():
    xi = np.array([[0.0], [1.0], [2.0]])
    zi = np.array([0.0, 1.0, 4.0])
    return GaussianProcessRegression(xi, zi)


class TestConstruction(unittest.TestCase):

    def test_default_hyperparameters(self):
        model = GaussianProcessRegression(np.zeros((4, 3)) + np.arange(4)[:, None], np.arange(4.0))
        hp = model.hyperparameters
        self.assertEqual(hp.signal_variance, 0.10)
        self.assertEqual(hp.noise_variance, 1e-5)
        self.assertTrue(np.array_equal(hp.lengthscales, [0.1, 0.1, 0.1]))
        self.assertEqual(model.K.shape, (4, 4))
        self.assertTrue(np.allclose(model.K @ model.K_inv, np.eye(4)))

    def test_column_vector_outputs(self):
        model = GaussianProcessRegression([[0.0], [1.0]], [[1.0], [2.0]])
        self.assertEqual(model.zi.shape, (2,))
        self.assertEqual((model.n, model.dim), (2, 1))

    def test_shape_mismatch(self):
        # 3 columns (and 3 points) against 4 observed outputs
        with self.assertRaises(ardgp.ShapeMismatchError):
            GaussianProcessRegression(np.zeros((3, 3)), np.zeros(4))
        with self.assertRaises(ardgp.ShapeMismatchError):
            GaussianProcessRegression(np.zeros(3), np.zeros(3))

    def test_training_data_is_copied_and_read_only(self):
        xi = np.array([[0.0], [1.0]])
        model = GaussianProcessRegression(xi, [0.0, 1.0])
        xi[0, 0] = 5.0
        self.assertEqual(model.xi[0, 0], 0.0)
        with self.assertRaises(ValueError):
            model.xi[0, 0] = 1.0
        with self.assertRaises(ValueError):
            model.K[0, 0] = 1.0

    def test_str_and_repr(self):
        model = make_model()
        self.assertIn("Training points: 3", str(model))
        self.assertIn("GaussianProcessRegression", repr(model))


class TestHyperparameters(unittest.TestCase):

    def test_set_recomputes_matrices(self):
        model = make_model()
        K_before = model.K
        model.set_hyperparameters(1.0, 0.01, [2.0])
        self.assertFalse(np.allclose(K_before, model.K))
        self.assertTrue(np.allclose(np.diag(model.K), 1.01))
        self.assertTrue(np.allclose(model.K @ model.K_inv, np.eye(3)))

    def test_idempotent(self):
        model = make_model()
        model.set_hyperparameters(0.5, 1e-3, [0.7])
        K1, Kinv1 = model.K, model.K_inv
        m1, s1 = model.predict_mean([0.5]), model.predict_std([0.5])
        model.set_hyperparameters(0.5, 1e-3, [0.7])
        self.assertTrue(np.array_equal(K1, model.K))
        self.assertTrue(np.array_equal(Kinv1, model.K_inv))
        self.assertEqual(m1, model.predict_mean([0.5]))
        self.assertEqual(s1, model.predict_std([0.5]))

    def test_lengthscale_dimension_mismatch(self):
        model = make_model()
        with self.assertRaises(ardgp.ShapeMismatchError):
            model.set_hyperparameters(1.0, 0.01, [1.0, 1.0])

    def test_invalid_values_leave_state_untouched(self):
        model = make_model()
        hp = model.hyperparameters
        with self.assertRaises(ValueError):
            model.set_hyperparameters(-1.0, 0.01, [1.0])
        self.assertTrue(model.hyperparameters.same_as(hp))

    def test_vector_round_trip(self):
        hp = Hyperparameters.create(0.3, 0.02, [0.5, 4.0])
        back = Hyperparameters.from_vector(hp.to_vector())
        self.assertAlmostEqual(back.signal_variance, 0.3)
        self.assertAlmostEqual(back.noise_variance, 0.02)
        self.assertTrue(np.allclose(back.lengthscales, [0.5, 4.0]))


class TestFit(unittest.TestCase):

    def test_no_builtin_optimizer(self):
        with self.assertRaises(NotImplementedError):
            make_model().fit()

    def test_caller_provided_optimizer(self):
        xi = np.linspace(0.0, 5.0, 10).reshape(-1, 1)
        zi = np.sin(xi[:, 0])
        model = GaussianProcessRegression(xi, zi)
        candidates = np.log([0.01, 0.1, 1.0])
        seen = []

        def grid_search(criterion, p0):
            best_p, best_value = None, np.inf
            for log_l in candidates:
                p = np.array([0.0, np.log(1e-4), log_l])
                value = criterion(p)
                seen.append(value)
                if value < best_value:
                    best_p, best_value = p, value
            return best_p

        hp = model.fit(grid_search)
        self.assertEqual(len(seen), 3)
        self.assertAlmostEqual(hp.lengthscales[0], 1.0)
        self.assertTrue(model.hyperparameters.same_as(hp))
        self.assertAlmostEqual(model.log_likelihood(), -min(seen), places=8)


class TestPrediction(unittest.TestCase):

    def test_methods_defined_once(self):
        import ardgp.core.model as model_module

        tree = ast.parse(inspect.getsource(model_module))
        cls = next(
            node for node in tree.body
            if isinstance(node, ast.ClassDef) and node.name == "GaussianProcessRegression"
        )
        names = [node.name for node in cls.body if isinstance(node, ast.FunctionDef)]
        self.assertEqual(len(names), len(set(names)))
        self.assertEqual(names.count("predict_mean"), 1)

    def test_interpolation(self):
        model = make_model()
        model.set_hyperparameters(0.10, 1e-8, [0.10])
        self.assertAlmostEqual(model.predict_mean([1.0]), 1.0, delta=1e-3)

    def test_interpolation_smooth_kernel(self):
        model = make_model()
        model.set_hyperparameters(10.0, 1e-8, [1.0])
        for x, z in zip(model.xi, model.zi):
            self.assertAlmostEqual(model.predict_mean(x), z, delta=1e-3)

    def test_std_vanishes_at_training_points(self):
        model = make_model()
        model.set_hyperparameters(1.0, 1e-10, [1.0])
        for x in model.xi:
            self.assertLess(model.predict_std(x), 1e-3)

    def test_variance_far_from_data(self):
        model = make_model()
        model.set_hyperparameters(0.5, 0.01, [1.0])
        self.assertAlmostEqual(model.predict_std([100.0]) ** 2, 0.51)
        self.assertAlmostEqual(model.predict_mean([100.0]), 0.0)

    def test_query_dimension_mismatch(self):
        model = make_model()
        with self.assertRaises(ardgp.ShapeMismatchError):
            model.predict_mean([0.0, 1.0])
        with self.assertRaises(ardgp.ShapeMismatchError):
            model.predict_std([0.0, 1.0])
        with self.assertRaises(ardgp.ShapeMismatchError):
            model.predict(np.zeros((2, 2)))

    def test_scalar_query_forms(self):
        model = make_model()
        model.set_hyperparameters(1.0, 1e-4, [1.0])
        expected_mean = model.predict_mean([0.5])
        expected_std = model.predict_std([0.5])
        for x in (0.5, np.float64(0.5), np.array(0.5), np.array([[0.5]])):
            self.assertEqual(model.predict_mean(x), expected_mean)
            self.assertEqual(model.predict_std(x), expected_std)

    def test_batch_agrees_with_pointwise(self):
        rng = np.random.default_rng(0)
        xi = rng.uniform(size=(12, 2))
        zi = xi[:, 0] ** 2 - xi[:, 1]
        model = GaussianProcessRegression(xi, zi)
        model.set_hyperparameters(1.0, 1e-4, [0.5, 1.5])
        xt = rng.uniform(size=(5, 2))
        zpm, zps = model.predict(xt)
        _, zpv = model.predict(xt, return_var=True)
        for i in range(5):
            self.assertAlmostEqual(zpm[i], model.predict_mean(xt[i]))
            self.assertAlmostEqual(zps[i], model.predict_std(xt[i]))
        self.assertTrue(np.allclose(zps**2, zpv))

    def test_negative_radicand_is_clamped(self):
        # duplicated point, tiny noise: cancellation may produce negative variance
        xi = np.array([[0.0], [1e-3], [1.0]])
        model = GaussianProcessRegression(xi, [1.0, 1.0, 2.0])
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            model.set_hyperparameters(1.0, 1e-12, [1.0])
            std = model.predict_std([0.0])
            _, zps = model.predict(xi)
        self.assertTrue(np.isfinite(std) and std >= 0.0)
        self.assertTrue(np.all(np.isfinite(zps)) and np.all(zps >= 0.0))


class TestSolverAndThreads(unittest.TestCase):

    def tearDown(self):
        config.set_solver("cholesky")

    def test_inverse_solver_gives_same_predictions(self):
        model = make_model()
        model.set_hyperparameters(1.0, 1e-3, [0.8])
        m_chol, s_chol = model.predict_mean([0.3]), model.predict_std([0.3])
        config.set_solver("inverse")
        model.set_hyperparameters(1.0, 1e-3, [0.8])
        self.assertAlmostEqual(m_chol, model.predict_mean([0.3]), places=8)
        self.assertAlmostEqual(s_chol, model.predict_std([0.3]), places=8)

    def test_cholesky_failure_falls_back_to_inverse(self):
        # symmetric and invertible but not positive definite
        K = np.array([[1.0, 2.0], [2.0, 1.0]])
        with self.assertWarns(RuntimeWarning):
            factorization = factorize(K, np.array([1.0, 0.0]))
        self.assertEqual(factorization.solver, "inverse")
        self.assertIsNone(factorization.chol)
        self.assertTrue(np.allclose(K @ factorization.K_inv, np.eye(2)))
        self.assertTrue(np.allclose(factorization.alpha, [-1.0 / 3.0, 2.0 / 3.0]))

    def test_singular_matrix_raises(self):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            with self.assertRaises(np.linalg.LinAlgError):
                GaussianProcessRegression([[0.0], [0.0]], [1.0, 1.0]).set_hyperparameters(
                    1.0, 0.0, [1.0]
                )

    def test_concurrent_updates_stay_consistent(self):
        xi = np.linspace(0.0, 1.0, 20).reshape(-1, 1)
        model = GaussianProcessRegression(xi, np.cos(4.0 * xi[:, 0]))
        errors = []

        def writer(l):
            for _ in range(20):
                model.set_hyperparameters(1.0, 1e-2, [l])

        def reader():
            for _ in range(50):
                state = model._snapshot()
                K = state.factorization.K
                if not np.allclose(K @ state.factorization.K_inv, np.eye(20), atol=1e-6):
                    errors.append("inconsistent")

        threads = [threading.Thread(target=writer, args=(l,)) for l in (0.2, 0.5)]
        threads += [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(errors, [])


if __name__ == "__main__":
    unittest.main()
