"""
GP regression in 1D with fixed hyperparameters

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import matplotlib.pyplot as plt
import ardgp


def generate_data():
    """
    Data generation.

    Returns
    -------
    tuple
        (xt, zt): target data
        (xi, zi): input dataset
    """
    xt = np.linspace(-1.0, 1.0, 200).reshape(-1, 1)
    zt = np.sin(3.0 * xt[:, 0]) + 0.5 * xt[:, 0]

    rng = np.random.default_rng(0)
    xi = np.sort(rng.uniform(-1.0, 1.0, size=8)).reshape(-1, 1)
    zi = np.sin(3.0 * xi[:, 0]) + 0.5 * xi[:, 0] + 0.05 * rng.normal(size=8)

    return xt, zt, xi, zi


def visualize_results(xt, zt, xi, zi, zpm, zps):
    fig, ax = plt.subplots()
    ax.plot(xt[:, 0], zt, "k", linewidth=1, linestyle=(0, (5, 5)), label="truth")
    ax.plot(xi[:, 0], zi, "rs", label="data")
    ax.plot(xt[:, 0], zpm, "b", label="posterior mean")
    ax.fill_between(xt[:, 0], zpm - 2 * zps, zpm + 2 * zps, alpha=0.2, label="±2σ")
    ax.set_xlabel("$x$")
    ax.set_ylabel("$z$")
    ax.set_title("Posterior GP, ARD squared-exponential kernel")
    ax.legend(fontsize=9)
    ax.grid(True)
    plt.show()


def main():
    xt, zt, xi, zi = generate_data()

    model = ardgp.GaussianProcessRegression(xi, zi)
    model.set_hyperparameters(signal_variance=1.0, noise_variance=0.05**2, lengthscales=[0.4])
    print(model)
    print(f"log-likelihood: {model.log_likelihood():.4f}")

    zpm, zps = model.predict(xt)
    visualize_results(xt, zt, xi, zi, zpm, zps)
    return model


if __name__ == "__main__":
    main()
