"""
Hyperparameter selection with a user-supplied grid search

ardgp does not ship an optimizer. This example plugs a crude grid search
over the log length scale into GaussianProcessRegression.fit.

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import matplotlib.pyplot as plt
import ardgp


def generate_data():
    rng = np.random.default_rng(1)
    xi = rng.uniform(0.0, 1.0, size=(20, 2))
    # the second input is irrelevant
    zi = np.sin(6.0 * xi[:, 0])
    return xi, zi


def make_grid_search(log_lengthscales):
    """Return an optimizer(criterion, p0) scanning a common log length scale."""

    def grid_search(criterion, p0):
        best_p, best_value = p0, criterion(p0)
        for log_l in log_lengthscales:
            p = np.copy(p0)
            p[2:] = log_l
            value = criterion(p)
            if value < best_value:
                best_p, best_value = p, value
        return best_p

    return grid_search


def visualize_results(log_lengthscales, values):
    fig, ax = plt.subplots()
    ax.plot(log_lengthscales, values)
    ax.set_xlabel("$\\log l$")
    ax.set_ylabel("negative log-likelihood")
    ax.grid(True)
    plt.show()


def main():
    xi, zi = generate_data()
    model = ardgp.GaussianProcessRegression(xi, zi)
    model.set_hyperparameters(signal_variance=1.0, noise_variance=1e-6, lengthscales=[1.0, 1.0])

    log_lengthscales = np.linspace(np.log(0.05), np.log(5.0), 30)
    criterion = ardgp.make_selection_criterion(xi, zi)
    p0 = model.hyperparameters.to_vector()
    values = []
    for log_l in log_lengthscales:
        p = np.copy(p0)
        p[2:] = log_l
        values.append(criterion(p))

    hp = model.fit(make_grid_search(log_lengthscales))
    print(hp)
    print(f"log-likelihood: {model.log_likelihood():.4f}")

    visualize_results(log_lengthscales, values)
    return model


if __name__ == "__main__":
    main()
