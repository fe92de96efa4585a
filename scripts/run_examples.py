import os

import matplotlib as mpl

mpl.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from loguru import logger  # noqa: E402

from pyfig import (  # noqa: E402
    AxesConfig,
    bootstrap_p_value,
    break_x_axis,
    circle,
    configure_logging,
    corr_matrix,
    popout,
)

# --- User configuration dictionary ---
CONFIG = {
    "LOG_LEVEL": "INFO",  # logging level: DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL
    "OUTPUT_PATH": "../figures/",
    "SEED": 0,
    "BREAK": {
        "start": 10,  # last x value before the break
        "stop": 20,  # first x value after the break
        "epsilon": 0.2,  # fraction of the x range used for the gap
    },
    "POPOUT": {
        "xmin": 10,
        "xmax": 20,
    },
    "CORR_MATRIX": {
        "n_obs": 30,
        "var_names": ["var1", "vr2", "var3", "d"],
        "do_hist": True,
        "show_rho": True,
        "ticks": [-3, 0, 3],
        "lims": (-5, 5),
    },
    "BOOTSTRAP": {
        "n_boot": 2000,
        "paired": False,
    },
}


def run_break_example(rng: np.random.Generator, output_path: str) -> None:
    fig, ax = plt.subplots()
    x = np.linspace(1, 40, 20)
    for _ in range(3):
        ax.plot(x, rng.random(20), "o")
    break_x_axis(ax, **CONFIG["BREAK"])
    fig.savefig(os.path.join(output_path, "break_x_axis.png"))
    plt.close(fig)


def run_popout_example(output_path: str) -> None:
    fig, ax = plt.subplots()
    x = np.arange(0, 100, 0.1)
    ax.plot(x, np.sin(x) / (1 + 0.1 * x), linewidth=2)
    ax.plot(x, 2 * np.sin(x) / (1 + 0.1 * x), linewidth=2)
    ax.set_xlabel("time")
    ax.set_ylabel("amplitude")
    ax.set_title("Damped oscillations")
    popout(
        ax,
        **CONFIG["POPOUT"],
        main_config=AxesConfig(fontsize=10),
        inset_config=AxesConfig(fontsize=12, linewidth=2, xlabel="popout x-label"),
    )
    fig.savefig(os.path.join(output_path, "popout.png"))
    plt.close(fig)


def run_corr_matrix_example(rng: np.random.Generator, output_path: str) -> None:
    cfg = dict(CONFIG["CORR_MATRIX"])
    X = rng.standard_normal((cfg.pop("n_obs"), len(cfg["var_names"])))
    fig, _, _ = corr_matrix(X, **cfg)
    fig.savefig(os.path.join(output_path, "corr_matrix.png"))
    plt.close(fig)


def run_circle_example(output_path: str) -> None:
    fig, ax = plt.subplots()
    circle(ax, (1, 3), 3, ":")
    circle(ax, (2, 4), 2, "--")
    fig.savefig(os.path.join(output_path, "circle.png"))
    plt.close(fig)


def main() -> None:
    """
    Main function to produce all example figures.
    """
    configure_logging(CONFIG.get("LOG_LEVEL", "INFO"))

    output_path = CONFIG["OUTPUT_PATH"]
    os.makedirs(output_path, exist_ok=True)
    rng = np.random.default_rng(CONFIG["SEED"])

    run_break_example(rng, output_path)
    run_popout_example(output_path)
    run_corr_matrix_example(rng, output_path)
    run_circle_example(output_path)

    child = rng.normal(1.0, 0.5, size=25)
    adult = rng.normal(0.8, 0.5, size=25)
    p = bootstrap_p_value(child, adult, np.median, rng=rng, **CONFIG["BOOTSTRAP"])
    logger.success(f"Median difference p={p:.4f}")

    logger.success(f"Figures written to {os.path.abspath(output_path)}")


if __name__ == "__main__":
    main()
