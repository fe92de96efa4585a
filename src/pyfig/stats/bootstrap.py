from typing import Callable, Optional, Union

import numpy as np
from loguru import logger

DEFAULT_N_BOOT = 10000

Statistic = Callable[[np.ndarray], float]


def _as_generator(rng: Optional[Union[int, np.random.Generator]]) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def bootstrap_distribution(
    d1,
    d2,
    statistic: Statistic,
    n_boot: int = DEFAULT_N_BOOT,
    paired: bool = False,
    rng: Optional[Union[int, np.random.Generator]] = None,
) -> np.ndarray:
    """
    Bootstrap distribution of ``statistic(d1) - statistic(d2)``.

    Parameters
    ----------
    d1, d2 : array_like
        The two samples.
    statistic : Callable[[np.ndarray], float]
        Statistic computed on each resample (e.g. ``np.mean``).
    n_boot : int, default=10000
        Number of bootstrap resamples.
    paired : bool, default=False
        Resample both samples with the same indices, keeping pairs together.
    rng : Optional[Union[int, np.random.Generator]], default=None
        Seed or generator for reproducible resampling.

    Returns
    -------
    np.ndarray
        ``n_boot`` bootstrap differences.

    Raises
    ------
    ValueError
        If a sample is empty, ``n_boot`` is not positive, or paired samples
        differ in length.
    """
    d1 = np.asarray(d1, dtype=np.float64).ravel()
    d2 = np.asarray(d2, dtype=np.float64).ravel()
    if d1.size == 0 or d2.size == 0:
        logger.error(f"Bootstrap needs two non-empty samples, got sizes {d1.size} and {d2.size}")
        raise ValueError(f"Samples must be non-empty. Got d1={d1.size}, d2={d2.size}")
    if n_boot < 1:
        logger.error(f"Invalid number of bootstrap resamples: {n_boot}")
        raise ValueError(f"n_boot must be positive, got {n_boot}")
    if paired and d1.size != d2.size:
        logger.error(f"Paired bootstrap with unequal sample sizes {d1.size} and {d2.size}")
        raise ValueError(
            f"Paired samples must have the same length. Got d1={d1.size}, d2={d2.size}"
        )

    gen = _as_generator(rng)
    boot = np.empty(n_boot, dtype=np.float64)
    for k in range(n_boot):
        idx1 = gen.integers(0, d1.size, size=d1.size)
        idx2 = idx1 if paired else gen.integers(0, d2.size, size=d2.size)
        boot[k] = statistic(d1[idx1]) - statistic(d2[idx2])

    logger.debug(
        f"Bootstrap ({'paired' if paired else 'unpaired'}, n_boot={n_boot}): "
        f"mean diff={np.mean(boot):.4g}, std={np.std(boot):.4g}"
    )
    return boot


def bootstrap_p_value(
    d1,
    d2,
    statistic: Statistic,
    n_boot: int = DEFAULT_N_BOOT,
    paired: bool = False,
    two_tailed: bool = False,
    rng: Optional[Union[int, np.random.Generator]] = None,
) -> float:
    """
    Bootstrap p-value for the sign of ``statistic(d1) - statistic(d2)``.

    The one-tailed p-value is the proportion of bootstrap differences whose
    sign disagrees with the observed difference. The two-tailed value is
    twice that. Both are clamped to 1.

    See :func:`bootstrap_distribution` for the parameters.
    """
    boot = bootstrap_distribution(d1, d2, statistic, n_boot=n_boot, paired=paired, rng=rng)
    observed = statistic(np.asarray(d1, dtype=np.float64).ravel()) - statistic(
        np.asarray(d2, dtype=np.float64).ravel()
    )
    observed_sign = np.sign(observed)
    agree = np.mean(np.sign(boot) == observed_sign)

    p = 1.0 - agree
    if two_tailed:
        p *= 2
    p = float(min(p, 1.0))

    logger.info(
        f"Bootstrap p={p:.4g} ({'two' if two_tailed else 'one'}-tailed, observed diff={observed:.4g})"
    )
    return p
